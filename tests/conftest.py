"""Test configuration and shared fixtures."""

import pytest

from rowpoly.core.context import InferenceContext


@pytest.fixture
def ctx() -> InferenceContext:
    """A fresh inference context, counter at zero."""
    return InferenceContext()
