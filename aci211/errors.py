# aci211/errors.py
from __future__ import annotations

from typing import Optional


class MixDesignError(ValueError):
    """Base class for every error raised while computing a mix."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class InvalidInput(MixDesignError):
    """An input is outside the domain the reference tables cover."""


class UnsupportedCombination(MixDesignError):
    """A table lookup landed on a "not recommended" (zero) entry."""
