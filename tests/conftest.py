"""Pytest configuration and shared fixtures."""

from dataclasses import replace

import pytest

from aci211.config import DEFAULT_INPUTS
from aci211.models import MixInputs


@pytest.fixture
def base_inputs():
    """Reference scenario: 4000 psi, non-air-entrained, mild, 3/4 in aggregate."""
    return MixInputs.from_dict(DEFAULT_INPUTS)


@pytest.fixture
def make_inputs(base_inputs):
    """Reference scenario with selected fields overridden."""
    def _make(**overrides):
        return replace(base_inputs, **overrides)
    return _make
