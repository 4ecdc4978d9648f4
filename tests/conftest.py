"""Test configuration: shared helpers get pytest's assertion rewriting."""

import pytest

pytest.register_assert_rewrite("helpers")
