# aci211/tables.py
from __future__ import annotations

import logging
from typing import Tuple

import numpy as np

from .config import (
    AIR_AE_MILD,
    AIR_AE_MODERATE,
    AIR_AE_SEVERE,
    AIR_NON_AE,
    CA_VOLUME_DATA,
    CA_VOLUME_FM,
    MAX_AGG_SIZES,
    WATER_AE,
    WATER_NON_AE,
    WC_AE,
    WC_LIMIT_MILD,
    WC_LIMIT_MODERATE,
    WC_LIMIT_SEVERE,
    WC_NON_AE,
    WC_STRENGTH_PSI,
)
from .errors import InvalidInput, UnsupportedCombination
from .models import ConcreteType, ExposureCondition

logger = logging.getLogger(__name__)


def agg_size_index(max_agg_size: float) -> int:
    """Column index of ACI Tables 3.1 / 6.1; sizes are never interpolated."""
    try:
        if isinstance(max_agg_size, bool) or not isinstance(max_agg_size, (int, float)):
            raise TypeError(type(max_agg_size).__name__)
        return MAX_AGG_SIZES.index(float(max_agg_size))
    except (TypeError, ValueError):
        sizes = ", ".join(f"{s:g}" for s in MAX_AGG_SIZES)
        raise InvalidInput(
            f"Maximum aggregate size {max_agg_size!r} in is not tabulated (use one of: {sizes})",
            field="max_agg_size",
        ) from None


def slump_bucket(slump_max: float) -> str:
    """Slump row of ACI Table 3.1, chosen by the upper end of the slump range."""
    if slump_max <= 2:
        return "1-2"
    if slump_max <= 4:
        return "3-4"
    return "6-7"


def _water_row(concrete_type: ConcreteType, bucket: str):
    if concrete_type is ConcreteType.NON_AIR_ENTRAINED:
        return WATER_NON_AE[bucket]
    if concrete_type is ConcreteType.AIR_ENTRAINED:
        return WATER_AE[bucket]
    raise InvalidInput(f"Unknown concrete type: {concrete_type!r}", field="concrete_type")


def _air_row(concrete_type: ConcreteType, exposure: ExposureCondition):
    if concrete_type is ConcreteType.NON_AIR_ENTRAINED:
        return AIR_NON_AE
    if concrete_type is not ConcreteType.AIR_ENTRAINED:
        raise InvalidInput(f"Unknown concrete type: {concrete_type!r}", field="concrete_type")
    if exposure is ExposureCondition.MILD:
        return AIR_AE_MILD
    if exposure is ExposureCondition.MODERATE:
        return AIR_AE_MODERATE
    if exposure is ExposureCondition.SEVERE:
        return AIR_AE_SEVERE
    raise InvalidInput(f"Unknown exposure condition: {exposure!r}", field="exposure")


def design_water_and_air(
    concrete_type: ConcreteType,
    exposure: ExposureCondition,
    bucket: str,
    size_idx: int,
) -> Tuple[float, float]:
    """Mixing water (lb/yd³) and target air (%) from ACI Table 3.1."""
    water = float(_water_row(concrete_type, bucket)[size_idx])
    if water <= 0:
        raise UnsupportedCombination(
            f'{bucket}" slump with {MAX_AGG_SIZES[size_idx]:g}" aggregate is not recommended '
            f"for {concrete_type.value} concrete",
            field="slump_max",
        )
    air = float(_air_row(concrete_type, exposure)[size_idx])
    logger.debug("Table 3.1 [%s][%d] -> water=%s, air=%s", bucket, size_idx, water, air)
    return water, air


def wc_from_strength(strength: float, concrete_type: ConcreteType) -> float:
    """
    w/c from ACI Table 4.1, linear between tabulated strengths and clamped
    to the end ratios outside 2000-7000 psi.
    """
    if concrete_type is ConcreteType.NON_AIR_ENTRAINED:
        ratios = WC_NON_AE
    elif concrete_type is ConcreteType.AIR_ENTRAINED:
        ratios = WC_AE
    else:
        raise InvalidInput(f"Unknown concrete type: {concrete_type!r}", field="concrete_type")

    psi = np.asarray(WC_STRENGTH_PSI, dtype=float)
    wc = np.asarray(ratios, dtype=float)
    s = float(strength)

    if s <= psi[0]:
        used = (0,)
    elif s >= psi[-1]:
        used = (len(psi) - 1,)
    else:
        hi = int(np.searchsorted(psi, s, side="left"))
        used = (hi,) if psi[hi] == s else (hi - 1, hi)

    if any(wc[i] <= 0 for i in used):
        raise UnsupportedCombination(
            f"No tabulated w/c for {concrete_type.value} concrete at {s:g} psi",
            field="strength",
        )
    return float(np.interp(s, psi, wc))


def durability_wc_limit(exposure: ExposureCondition) -> float:
    if exposure is ExposureCondition.SEVERE:
        return WC_LIMIT_SEVERE
    if exposure is ExposureCondition.MODERATE:
        return WC_LIMIT_MODERATE
    if exposure is ExposureCondition.MILD:
        return WC_LIMIT_MILD
    raise InvalidInput(f"Unknown exposure condition: {exposure!r}", field="exposure")


def ca_bulk_volume(size_idx: int, fm: float) -> float:
    """
    Dry-rodded coarse aggregate volume per unit volume of concrete
    (ACI Table 6.1), interpolated over fineness modulus.
    """
    fm_grid = np.asarray(CA_VOLUME_FM, dtype=float)
    if not fm_grid[0] <= fm <= fm_grid[-1]:
        raise InvalidInput(
            f"Fineness modulus {fm:g} is outside the tabulated range "
            f"{fm_grid[0]:g}-{fm_grid[-1]:g}",
            field="fa_fm",
        )
    row = np.asarray(CA_VOLUME_DATA[size_idx], dtype=float)
    vol = float(np.interp(fm, fm_grid, row))
    logger.debug("Table 6.1 row %d at FM %s -> %s", size_idx, fm, vol)
    return vol
