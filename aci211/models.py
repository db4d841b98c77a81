# aci211/models.py
from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from enum import Enum
from typing import Any, Dict, Mapping, Tuple

from .errors import InvalidInput


class ConcreteType(str, Enum):
    NON_AIR_ENTRAINED = "Non-Air-Entrained"
    AIR_ENTRAINED = "Air-Entrained"


class ExposureCondition(str, Enum):
    MILD = "Mild"
    MODERATE = "Moderate"
    SEVERE = "Severe"


def _coerce_enum(enum_cls, value, field_name: str):
    if isinstance(value, enum_cls):
        return value
    for member in enum_cls:
        if str(value).strip().lower() in (member.value.lower(), member.name.lower()):
            return member
    options = ", ".join(m.value for m in enum_cls)
    raise InvalidInput(f"{field_name} must be one of: {options} (got {value!r})", field=field_name)


@dataclass(frozen=True)
class MixInputs:
    """
    One set of design inputs, imperial units throughout.

    Percentages (absorption, moisture) are given as percent, not fractions.
    """

    strength: float             # psi
    concrete_type: ConcreteType
    exposure: ExposureCondition
    slump_min: float            # in
    slump_max: float            # in
    max_agg_size: float         # in, one of config.MAX_AGG_SIZES
    cement_sg: float
    ca_sg: float
    ca_absorption: float        # %
    ca_druw: float              # lb/ft³
    ca_moisture: float          # % surface moisture
    fa_sg: float
    fa_absorption: float        # %
    fa_fm: float
    fa_moisture: float          # % surface moisture
    batch_volume: float = 1.0   # yd³

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MixInputs":
        kwargs: Dict[str, Any] = {}
        for f in fields(cls):
            if f.name not in data:
                if f.name == "batch_volume":
                    continue
                raise InvalidInput(f"Missing input: {f.name}", field=f.name)
            value = data[f.name]
            if f.name == "concrete_type":
                kwargs[f.name] = _coerce_enum(ConcreteType, value, f.name)
            elif f.name == "exposure":
                kwargs[f.name] = _coerce_enum(ExposureCondition, value, f.name)
            else:
                try:
                    kwargs[f.name] = float(value)
                except (TypeError, ValueError):
                    raise InvalidInput(f"{f.name} must be a number (got {value!r})", field=f.name) from None
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["concrete_type"] = self.concrete_type.value
        d["exposure"] = self.exposure.value
        return d


@dataclass(frozen=True)
class MixStep:
    id: int
    title: str
    value: str
    calculation: str


@dataclass(frozen=True)
class MixResult:
    # per cubic yard
    water: float        # adjusted batch water, lb
    cement: float       # lb
    coarse_agg: float   # stockpile, lb
    fine_agg: float     # stockpile, lb
    air_content: float  # %
    unit_weight: float  # lb/ft³
    steps: Tuple[MixStep, ...]

    def batch_quantities(self, batch_volume: float) -> Dict[str, float]:
        """Weights (lb) for `batch_volume` cubic yards."""
        return {
            "Water": self.water * batch_volume,
            "Cement": self.cement * batch_volume,
            "Coarse Aggregate": self.coarse_agg * batch_volume,
            "Fine Aggregate": self.fine_agg * batch_volume,
        }

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["steps"] = [asdict(s) for s in self.steps]
        return d
