"""Rules engine for a single round of UNO."""
