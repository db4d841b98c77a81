"""
Mix design engine tests.

Covers the nine-step trail, the reference scenario numbers, the w/c curve
properties (clamping, monotonicity, durability ceiling), the unit weight
identity, determinism and the documented edge cases.
"""

import math

import pytest

from aci211.design import compute
from aci211.errors import InvalidInput, UnsupportedCombination
from aci211.models import ConcreteType, ExposureCondition


def _wc(result):
    return float(result.steps[3].value.split("=")[1])


def _design_water(result):
    # "Water: 340 lb/yd³, Air: 2%"
    return float(result.steps[2].value.split()[1])


# =============================================================================
# STEP TRAIL
# =============================================================================

def test_nine_steps_in_order(base_inputs):
    result = compute(base_inputs)
    assert [s.id for s in result.steps] == list(range(1, 10))
    assert [s.title for s in result.steps] == [
        "Choice of Slump",
        "Maximum Aggregate Size",
        "Mixing Water and Air Content",
        "Water-Cement Ratio",
        "Cement Content",
        "Coarse Aggregate Content (Oven Dry)",
        "Fine Aggregate Content (Oven Dry)",
        "Stockpile Weight Calculation",
        "Adjusted Batch Water",
    ]


@pytest.mark.parametrize("ctype", list(ConcreteType))
@pytest.mark.parametrize("exposure", list(ExposureCondition))
@pytest.mark.parametrize("size", [0.375, 0.5, 0.75, 1.0, 1.5, 2.0, 3.0])
def test_nine_steps_for_every_supported_table_cell(make_inputs, ctype, exposure, size):
    result = compute(make_inputs(concrete_type=ctype, exposure=exposure, max_agg_size=size))
    assert len(result.steps) == 9
    assert all(s.value and s.calculation for s in result.steps)


def test_pass_through_steps(make_inputs):
    result = compute(make_inputs(slump_min=2.0, slump_max=3.0, max_agg_size=1.5))
    assert result.steps[0].value == "2-3 in"
    assert result.steps[0].calculation == "Manual Input: 2-3 in"
    assert result.steps[1].value == "1.5 in"


# =============================================================================
# REFERENCE SCENARIO
# =============================================================================

def test_default_scenario(base_inputs):
    """Slump 1-4 in is bucketed by its upper end, so Table 3.1 row "3-4" applies."""
    result = compute(base_inputs)
    steps = result.steps

    assert steps[2].value == "Water: 340 lb/yd³, Air: 2%"
    assert result.air_content == 2.0
    assert steps[3].value == "w/c = 0.57"
    assert result.cement == pytest.approx(340 / 0.57)
    assert steps[4].value == "596.5 lb/yd³"
    assert steps[5].value == "1674.0 lb/yd³"
    assert steps[6].value == "1312.4 lb/yd³"

    assert result.coarse_agg == pytest.approx(1674.0 * 1.025)
    assert result.fine_agg == pytest.approx(1312.383 * 1.057, rel=1e-4)
    assert result.water == pytest.approx(240.90, abs=0.05)


def test_low_slump_scenario(make_inputs):
    """Same mix with slump 1-2 in: Table 3.1 row "1-2" gives 315 lb water."""
    result = compute(make_inputs(slump_max=2.0))
    steps = result.steps

    assert steps[2].value == "Water: 315 lb/yd³, Air: 2%"
    assert steps[3].value == "w/c = 0.57"
    assert result.cement == pytest.approx(315 / 0.57)
    assert steps[4].value == "552.6 lb/yd³"
    assert steps[5].value == "1674.0 lb/yd³"
    assert steps[6].value == "1415.1 lb/yd³"

    assert result.fine_agg == pytest.approx(1415.14 * 1.057, rel=1e-4)
    assert result.water == pytest.approx(210.76, abs=0.05)
    assert "Final Water = 315 - (70.8 + 33.5) = 210.8 lb/yd³" in steps[8].calculation


@pytest.mark.parametrize("slump_max", [2.0, 4.0, 7.0])
def test_fine_aggregate_volume_balance(make_inputs, slump_max):
    """Oven-dry FA comes straight from the leftover volume, no absorption term."""
    i = make_inputs(slump_max=slump_max)
    result = compute(i)
    design_water, air = _design_water(result), 2.0
    cement = design_water / 0.57
    ca_od = 0.62 * 27 * i.ca_druw
    vol_fa = 27 - (
        design_water / 62.4
        + cement / (i.cement_sg * 62.4)
        + 27 * air / 100
        + ca_od / (i.ca_sg * 62.4)
    )
    fa_od = vol_fa * i.fa_sg * 62.4
    assert result.fine_agg == pytest.approx(fa_od * (1 + (i.fa_absorption + i.fa_moisture) / 100))
    assert result.water == pytest.approx(design_water - fa_od * i.fa_moisture / 100 - ca_od * i.ca_moisture / 100)


def test_narratives_show_the_arithmetic(base_inputs):
    steps = compute(base_inputs).steps
    assert "Cement = Water / (w/c) = 340 / 0.57" in steps[4].calculation
    assert "Total MC_FA = 0.7% + 5% = 5.7%" in steps[7].calculation
    assert "Final Water = 340 - (65.6 + 33.5) = 240.9 lb/yd³" in steps[8].calculation
    assert len(steps[6].calculation.splitlines()) == 6


# =============================================================================
# WATER-CEMENT RATIO
# =============================================================================

@pytest.mark.parametrize("exposure", list(ExposureCondition))
def test_wc_non_increasing_with_strength(make_inputs, exposure):
    for ctype, top in ((ConcreteType.NON_AIR_ENTRAINED, 8000), (ConcreteType.AIR_ENTRAINED, 6000)):
        prev = math.inf
        for strength in range(1500, top + 1, 250):
            result = compute(make_inputs(strength=float(strength), concrete_type=ctype, exposure=exposure))
            ratio = _design_water(result) / result.cement
            assert ratio <= prev + 1e-12
            prev = ratio


# strength-based ratio above 0.45, so the severe ceiling governs
@pytest.mark.parametrize("strength", [500.0, 1000.0, 2000.0, 3000.0, 4000.0, 5000.0])
def test_severe_exposure_ceiling_governs(make_inputs, strength):
    result = compute(make_inputs(strength=strength, exposure=ExposureCondition.SEVERE))
    assert _wc(result) == 0.45
    assert _design_water(result) / result.cement == pytest.approx(0.45)


# strength-based ratio already below 0.45
@pytest.mark.parametrize("strength,expected", [(6000.0, 0.41), (9000.0, 0.33)])
def test_severe_exposure_strength_governs(make_inputs, strength, expected):
    result = compute(make_inputs(strength=strength, exposure=ExposureCondition.SEVERE))
    assert _design_water(result) / result.cement == pytest.approx(expected)
    assert _design_water(result) / result.cement <= 0.45


def test_moderate_exposure_ceiling(make_inputs):
    result = compute(make_inputs(strength=3000.0, exposure=ExposureCondition.MODERATE))
    assert result.cement == pytest.approx(_design_water(result) / 0.50)
    assert "Durability limit (Moderate exposure): 0.50" in result.steps[3].calculation


def test_mild_exposure_has_no_ceiling(make_inputs):
    result = compute(make_inputs(strength=2000.0))
    assert _design_water(result) == 340.0
    assert result.cement == pytest.approx(340.0 / 0.82)


# =============================================================================
# INVARIANTS
# =============================================================================

@pytest.mark.parametrize("overrides", [
    {},
    {"concrete_type": ConcreteType.AIR_ENTRAINED, "exposure": ExposureCondition.SEVERE},
    {"slump_max": 7.0, "max_agg_size": 1.0, "fa_fm": 2.45},
    {"strength": 6500.0, "fa_moisture": 0.0, "ca_moisture": 0.0},
])
def test_unit_weight_identity(make_inputs, overrides):
    r = compute(make_inputs(**overrides))
    assert r.unit_weight == pytest.approx((r.water + r.cement + r.coarse_agg + r.fine_agg) / 27)


def test_idempotent(base_inputs):
    assert compute(base_inputs) == compute(base_inputs)


def test_negative_batch_water_is_not_clamped(make_inputs):
    result = compute(make_inputs(fa_moisture=30.0, ca_moisture=20.0))
    assert result.water < 0
    assert result.steps[8].value == f"Final Batch Water: {result.water:.1f} lb/yd³"


# =============================================================================
# SLUMP BUCKETS
# =============================================================================

@pytest.mark.parametrize("slump_max,bucket,water", [
    (2.0, "1-2", 315),
    (4.0, "3-4", 340),
    (5.0, "6-7", 360),
])
def test_slump_boundaries(make_inputs, slump_max, bucket, water):
    result = compute(make_inputs(slump_min=1.0, slump_max=slump_max))
    assert f'{bucket}" slump' in result.steps[2].calculation
    assert result.steps[2].value.startswith(f"Water: {water} lb/yd³")


# =============================================================================
# ERRORS
# =============================================================================

def test_untabulated_aggregate_size(make_inputs):
    with pytest.raises(InvalidInput) as exc:
        compute(make_inputs(max_agg_size=0.8))
    assert exc.value.field == "max_agg_size"


def test_not_recommended_slump_and_size(make_inputs):
    with pytest.raises(UnsupportedCombination):
        compute(make_inputs(slump_max=6.0, max_agg_size=6.0))


def test_six_inch_aggregate_low_slump_is_supported(make_inputs):
    result = compute(make_inputs(slump_max=2.0, max_agg_size=6.0, fa_fm=3.0))
    assert result.steps[2].value == "Water: 190 lb/yd³, Air: 0.2%"


def test_air_entrained_above_table(make_inputs):
    with pytest.raises(UnsupportedCombination) as exc:
        compute(make_inputs(concrete_type=ConcreteType.AIR_ENTRAINED, strength=6500.0))
    assert exc.value.field == "strength"


def test_fineness_modulus_outside_table(make_inputs):
    with pytest.raises(InvalidInput):
        compute(make_inputs(fa_fm=3.2))
