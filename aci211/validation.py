# aci211/validation.py
from __future__ import annotations

import math

from .errors import InvalidInput
from .models import ConcreteType, ExposureCondition, MixInputs
from .tables import agg_size_index

# must be > 0
_POSITIVE = ("strength", "cement_sg", "ca_sg", "ca_druw", "fa_sg", "fa_fm", "batch_volume")
# must be >= 0
_NON_NEGATIVE = ("slump_min", "slump_max", "ca_absorption", "ca_moisture", "fa_absorption", "fa_moisture")


def validate_inputs(inputs: MixInputs) -> int:
    """
    Reject inputs the tables cannot handle. Returns the aggregate size index
    so callers don't look it up twice.
    """
    if not isinstance(inputs.concrete_type, ConcreteType):
        raise InvalidInput(f"Unknown concrete type: {inputs.concrete_type!r}", field="concrete_type")
    if not isinstance(inputs.exposure, ExposureCondition):
        raise InvalidInput(f"Unknown exposure condition: {inputs.exposure!r}", field="exposure")

    for name in _POSITIVE + _NON_NEGATIVE:
        value = getattr(inputs, name)
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            raise InvalidInput(f"{name} must be a finite number (got {value!r})", field=name)

    for name in _POSITIVE:
        if getattr(inputs, name) <= 0:
            raise InvalidInput(f"{name} must be greater than zero", field=name)
    for name in _NON_NEGATIVE:
        if getattr(inputs, name) < 0:
            raise InvalidInput(f"{name} cannot be negative", field=name)

    if inputs.slump_min > inputs.slump_max:
        raise InvalidInput(
            f"Slump range is inverted ({inputs.slump_min:g} > {inputs.slump_max:g} in)",
            field="slump_min",
        )

    return agg_size_index(inputs.max_agg_size)
