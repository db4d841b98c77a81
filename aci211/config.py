# aci211/config.py
from __future__ import annotations

import os
from types import MappingProxyType

# ============================================================
# Physical constants (imperial)
# ============================================================
UNIT_WEIGHT_WATER = 62.4     # lb/ft³
CUBIC_FEET_PER_YARD = 27.0   # ft³ per yd³

# ============================================================
# ACI Table 2.1: Recommended slumps (in), informational only
# ============================================================
SLUMP_TABLE = (
    ("Reinforced foundation walls and footings", 1, 3),
    ("Plain footings, caissons, and substructure walls", 1, 3),
    ("Beams and reinforced walls", 1, 4),
    ("Building columns", 1, 4),
    ("Pavements and slabs", 1, 3),
    ("Mass concrete", 1, 3),
)

# ============================================================
# ACI Table 3.1: Mixing water (lb/yd³) and air content (%)
# Columns: 3/8", 1/2", 3/4", 1", 1.5", 2", 3", 6"
# ============================================================
MAX_AGG_SIZES = (0.375, 0.5, 0.75, 1.0, 1.5, 2.0, 3.0, 6.0)

SLUMP_BUCKETS = ("1-2", "3-4", "6-7")

# 0 means "not recommended" for that slump/size combination
WATER_NON_AE = MappingProxyType({
    "1-2": (350, 335, 315, 300, 275, 260, 220, 190),
    "3-4": (385, 365, 340, 325, 300, 285, 245, 210),
    "6-7": (410, 385, 360, 340, 315, 300, 270, 0),
})
AIR_NON_AE = (3.0, 2.5, 2.0, 1.5, 1.0, 0.5, 0.3, 0.2)

WATER_AE = MappingProxyType({
    "1-2": (305, 295, 280, 270, 250, 240, 225, 180),
    "3-4": (340, 325, 305, 295, 275, 265, 250, 200),
    "6-7": (365, 345, 325, 310, 290, 280, 270, 0),
})
AIR_AE_MILD = (4.5, 4.0, 3.5, 3.0, 2.5, 2.0, 1.5, 1.0)
AIR_AE_MODERATE = (6.0, 5.5, 5.0, 4.5, 4.5, 4.0, 3.5, 3.0)
AIR_AE_SEVERE = (7.5, 7.0, 6.0, 6.0, 5.5, 5.0, 4.5, 4.0)

# ============================================================
# ACI Table 4.1: w/c ratio by weight vs 28-day strength
# ============================================================
WC_STRENGTH_PSI = (2000, 3000, 4000, 5000, 6000, 7000)
WC_NON_AE = (0.82, 0.68, 0.57, 0.48, 0.41, 0.33)
WC_AE = (0.74, 0.59, 0.48, 0.40, 0.32, 0.0)  # 7000 psi not tabulated for AE

# Durability ceilings on w/c by exposure
WC_LIMIT_SEVERE = 0.45
WC_LIMIT_MODERATE = 0.50
WC_LIMIT_MILD = 1.0  # no ceiling

# ============================================================
# ACI Table 6.1: Bulk volume of dry-rodded coarse aggregate
# per unit volume of concrete. Rows follow MAX_AGG_SIZES.
# ============================================================
CA_VOLUME_FM = (2.4, 2.6, 2.8, 3.0)
CA_VOLUME_DATA = (
    (0.50, 0.48, 0.46, 0.44),
    (0.59, 0.57, 0.55, 0.53),
    (0.66, 0.64, 0.62, 0.60),
    (0.71, 0.69, 0.67, 0.65),
    (0.75, 0.73, 0.71, 0.69),
    (0.78, 0.76, 0.74, 0.72),
    (0.82, 0.80, 0.78, 0.76),
    (0.87, 0.85, 0.83, 0.81),
)

# ============================================================
# Default design inputs (reference scenario)
# ============================================================
DEFAULT_INPUTS = MappingProxyType({
    "strength": 4000.0,
    "concrete_type": "Non-Air-Entrained",
    "exposure": "Mild",
    "slump_min": 1.0,
    "slump_max": 4.0,
    "max_agg_size": 0.75,
    "cement_sg": 3.15,
    "ca_sg": 2.68,
    "ca_absorption": 0.5,
    "ca_druw": 100.0,
    "ca_moisture": 2.0,
    "fa_sg": 2.64,
    "fa_absorption": 0.7,
    "fa_fm": 2.8,
    "fa_moisture": 5.0,
    "batch_volume": 1.0,
})

# ============================================================
# Explanation service (read from the environment)
# ============================================================
EXPLAIN_API_KEY = os.environ.get("ACI211_API_KEY") or os.environ.get("ANTHROPIC_API_KEY")
EXPLAIN_MODEL = os.environ.get("ACI211_EXPLAIN_MODEL", "claude-3-5-haiku-latest")
EXPLAIN_MAX_TOKENS = int(os.environ.get("ACI211_EXPLAIN_MAX_TOKENS", "400"))
EXPLAIN_TIMEOUT_S = float(os.environ.get("ACI211_EXPLAIN_TIMEOUT", "20"))

REPORT_FOOTER = "ACI 211.1 Mix Design | Absolute Volume Method"
