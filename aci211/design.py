# aci211/design.py
from __future__ import annotations

import logging
from typing import List

from .config import CUBIC_FEET_PER_YARD, UNIT_WEIGHT_WATER
from .models import MixInputs, MixResult, MixStep
from .tables import (
    ca_bulk_volume,
    design_water_and_air,
    durability_wc_limit,
    slump_bucket,
    wc_from_strength,
)
from .validation import validate_inputs

logger = logging.getLogger(__name__)


def compute(inputs: MixInputs) -> MixResult:
    """
    ACI 211.1 absolute-volume mix design for one cubic yard.

    Every lookup and validation happens before the step trail is written,
    so a bad input raises (InvalidInput / UnsupportedCombination) and never
    yields a partial result.
    """
    agg_idx = validate_inputs(inputs)
    yd = CUBIC_FEET_PER_YARD
    gw = UNIT_WEIGHT_WATER

    # 3) Mixing water and air
    bucket = slump_bucket(inputs.slump_max)
    design_water, air = design_water_and_air(inputs.concrete_type, inputs.exposure, bucket, agg_idx)

    # 4) w/c: strength curve vs durability ceiling
    wc_strength = wc_from_strength(inputs.strength, inputs.concrete_type)
    wc_limit = durability_wc_limit(inputs.exposure)
    wc = min(wc_strength, wc_limit)

    # 5) Cement
    cement = design_water / wc

    # 6) Coarse aggregate, oven dry
    vol_bulk_ca = ca_bulk_volume(agg_idx, inputs.fa_fm)
    ca_od = vol_bulk_ca * yd * inputs.ca_druw

    # 7) Fine aggregate, oven dry (absolute volume; no absorption term)
    vol_water = design_water / gw
    vol_cement = cement / (inputs.cement_sg * gw)
    vol_air = yd * (air / 100.0)
    vol_ca = ca_od / (inputs.ca_sg * gw)
    vol_fa = yd - (vol_water + vol_cement + vol_air + vol_ca)
    fa_od = vol_fa * (inputs.fa_sg * gw)

    # 8) Stockpile weights (absorbed + surface moisture)
    mc_fa = (inputs.fa_absorption + inputs.fa_moisture) / 100.0
    mc_ca = (inputs.ca_absorption + inputs.ca_moisture) / 100.0
    fa_stock = fa_od * (1.0 + mc_fa)
    ca_stock = ca_od * (1.0 + mc_ca)

    # 9) Batch water less free surface moisture; may go negative
    fa_surf = inputs.fa_moisture / 100.0
    ca_surf = inputs.ca_moisture / 100.0
    fa_free = fa_od * fa_surf
    ca_free = ca_od * ca_surf
    final_water = design_water - (fa_free + ca_free)

    logger.debug(
        "w/c strength=%.4f limit=%.2f -> %.4f; cement=%.2f CA_OD=%.2f FA_OD=%.2f water=%.2f",
        wc_strength, wc_limit, wc, cement, ca_od, fa_od, final_water,
    )

    steps: List[MixStep] = [
        MixStep(
            1,
            "Choice of Slump",
            f"{inputs.slump_min:g}-{inputs.slump_max:g} in",
            f"Manual Input: {inputs.slump_min:g}-{inputs.slump_max:g} in",
        ),
        MixStep(
            2,
            "Maximum Aggregate Size",
            f"{inputs.max_agg_size:g} in",
            f"Manual Input: {inputs.max_agg_size:g} in",
        ),
        MixStep(
            3,
            "Mixing Water and Air Content",
            f"Water: {design_water:g} lb/yd³, Air: {air:g}%",
            f'From ACI Table 3.1 ({inputs.concrete_type.value}) based on {inputs.max_agg_size:g}" '
            f'aggregate and {bucket}" slump.\n'
            f"Design Water = {design_water:g} lb/yd³\n"
            f"Air Content = {air:g}%",
        ),
        MixStep(
            4,
            "Water-Cement Ratio",
            f"w/c = {wc:.2f}",
            f"Strength req ({inputs.strength:g} psi, ACI Table 4.1): {wc_strength:.2f}\n"
            f"Durability limit ({inputs.exposure.value} exposure): {wc_limit:.2f}\n"
            f"Selected lower: w/c = {wc:.2f}",
        ),
        MixStep(
            5,
            "Cement Content",
            f"{cement:.1f} lb/yd³",
            f"Cement = Water / (w/c) = {design_water:g} / {wc:.2f} = {cement:.1f} lb/yd³",
        ),
        MixStep(
            6,
            "Coarse Aggregate Content (Oven Dry)",
            f"{ca_od:.1f} lb/yd³",
            f"Volume Bulk (ACI Table 6.1, FM {inputs.fa_fm:g}) = {vol_bulk_ca:.2f} yd³/yd³\n"
            f"Weight OD = {vol_bulk_ca:.2f} × {yd:g} × {inputs.ca_druw:g} lb/ft³ = {ca_od:.1f} lb/yd³",
        ),
        MixStep(
            7,
            "Fine Aggregate Content (Oven Dry)",
            f"{fa_od:.1f} lb/yd³",
            f"V_water = {design_water:g} / {gw:g} = {vol_water:.2f} ft³\n"
            f"V_cement = {cement:.1f} / ({inputs.cement_sg:g} × {gw:g}) = {vol_cement:.2f} ft³\n"
            f"V_air = {yd:g} × {air / 100.0:.3f} = {vol_air:.2f} ft³\n"
            f"V_CA = {ca_od:.1f} / ({inputs.ca_sg:g} × {gw:g}) = {vol_ca:.2f} ft³\n"
            f"Absolute Volume Method: {yd:g} - ({vol_water:.2f} + {vol_cement:.2f} + {vol_air:.2f} + "
            f"{vol_ca:.2f}) = {vol_fa:.2f} ft³\n"
            f"Weight OD = {vol_fa:.2f} × {inputs.fa_sg:g} × {gw:g} = {fa_od:.1f} lb/yd³",
        ),
        MixStep(
            8,
            "Stockpile Weight Calculation",
            f"FA: {fa_stock:.1f} lb, CA: {ca_stock:.1f} lb",
            f"Total MC_FA = {inputs.fa_absorption:g}% + {inputs.fa_moisture:g}% = {mc_fa * 100:.1f}%\n"
            f"FA Stockpile = FA_OD × (1 + Total MC_FA) = {fa_od:.1f} × (1 + {mc_fa:.3f}) = {fa_stock:.1f} lb\n"
            f"Total MC_CA = {inputs.ca_absorption:g}% + {inputs.ca_moisture:g}% = {mc_ca * 100:.1f}%\n"
            f"CA Stockpile = CA_OD × (1 + Total MC_CA) = {ca_od:.1f} × (1 + {mc_ca:.3f}) = {ca_stock:.1f} lb",
        ),
        MixStep(
            9,
            "Adjusted Batch Water",
            f"Final Batch Water: {final_water:.1f} lb/yd³",
            f"Design Water: {design_water:g} lb\n"
            f"Free Water (FA) = {fa_od:.1f} lb × {fa_surf:.3f} = {fa_free:.1f} lb\n"
            f"Free Water (CA) = {ca_od:.1f} lb × {ca_surf:.3f} = {ca_free:.1f} lb\n"
            f"Final Water = {design_water:g} - ({fa_free:.1f} + {ca_free:.1f}) = {final_water:.1f} lb/yd³",
        ),
    ]

    return MixResult(
        water=final_water,
        cement=cement,
        coarse_agg=ca_stock,
        fine_agg=fa_stock,
        air_content=air,
        unit_weight=(final_water + cement + ca_stock + fa_stock) / yd,
        steps=tuple(steps),
    )
