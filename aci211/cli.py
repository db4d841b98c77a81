# aci211/cli.py
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from .config import DEFAULT_INPUTS, MAX_AGG_SIZES, SLUMP_TABLE
from .design import compute
from .errors import MixDesignError
from .models import ConcreteType, ExposureCondition, MixInputs, MixResult

logger = logging.getLogger(__name__)

# (field, prompt)
NUMERIC_PROMPTS = (
    ("strength", "Target compressive strength (psi)"),
    ("slump_min", "Minimum slump (in)"),
    ("slump_max", "Maximum slump (in)"),
    ("cement_sg", "Cement specific gravity"),
    ("ca_sg", "Coarse aggregate specific gravity"),
    ("ca_absorption", "Coarse aggregate absorption (%)"),
    ("ca_druw", "Coarse aggregate dry-rodded unit weight (lb/ft³)"),
    ("ca_moisture", "Coarse aggregate surface moisture (%)"),
    ("fa_sg", "Fine aggregate specific gravity"),
    ("fa_absorption", "Fine aggregate absorption (%)"),
    ("fa_fm", "Fine aggregate fineness modulus"),
    ("fa_moisture", "Fine aggregate surface moisture (%)"),
    ("batch_volume", "Batch volume (yd³)"),
)


def ask_float(prompt, default=None):
    s = input(f"{prompt}" + (f" [{default}]" if default is not None else "") + ": ").strip()
    if not s and default is not None:
        return float(default)
    return float(s)


def choose_option(title, options, default):
    """Numbered menu; accepts an index or the option text."""
    print(f"\n{title}:")
    for i, opt in enumerate(options, start=1):
        print(f"  {i}. {opt}")
    default_idx = options.index(default) + 1
    s = input(f"Choose 1-{len(options)} [{default_idx}]: ").strip()
    if not s:
        return default
    if s.isdigit():
        i = int(s)
        if 1 <= i <= len(options):
            return options[i - 1]
        raise ValueError("Invalid number.")
    for opt in options:
        if s.lower() == str(opt).lower():
            return opt
    raise ValueError(f"Please enter 1-{len(options)} or one of: {', '.join(map(str, options))}")


def show_slump_recommendations():
    print("\n=== Recommended Slumps (ACI Table 2.1) ===")
    print(f"{'Type of construction':<52} {'Max (in)':>8} {'Min (in)':>8}")
    for kind, lo, hi in SLUMP_TABLE:
        print(f"{kind:<52} {hi:>8} {lo:>8}")


def prompt_inputs() -> MixInputs:
    data: Dict[str, Any] = dict(DEFAULT_INPUTS)
    data["concrete_type"] = choose_option(
        "Concrete type", [c.value for c in ConcreteType], DEFAULT_INPUTS["concrete_type"]
    )
    data["exposure"] = choose_option(
        "Exposure condition", [e.value for e in ExposureCondition], DEFAULT_INPUTS["exposure"]
    )
    data["max_agg_size"] = float(choose_option(
        "Maximum aggregate size (in)", [f"{s:g}" for s in MAX_AGG_SIZES], f"{DEFAULT_INPUTS['max_agg_size']:g}"
    ))
    show_slump_recommendations()
    print()
    for name, prompt in NUMERIC_PROMPTS:
        data[name] = ask_float(prompt, DEFAULT_INPUTS[name])
    return MixInputs.from_dict(data)


def render_steps(result: MixResult):
    print("\n=== Calculation Steps ===")
    for step in result.steps:
        print(f"\nStep {step.id}: {step.title}")
        print(f"  Value: {step.value}")
        for line in step.calculation.splitlines():
            print(f"    {line}")


def render_proportions(result: MixResult, batch_volume: float = 1.0):
    rows = [
        ("Water (Adjusted)", result.water),
        ("Cement", result.cement),
        ("Coarse Aggregate (Wet)", result.coarse_agg),
        ("Fine Aggregate (Wet)", result.fine_agg),
    ]

    W_MAT, W_YD, W_BATCH = 26, 14, 16
    print("\n=== Final Mix Proportions ===")
    print(f"{'Material':<{W_MAT}}{'lb/yd³':>{W_YD}}{'Batch (lb)':>{W_BATCH}}")
    total = 0.0
    for name, w in rows:
        total += w
        print(f"{name:<{W_MAT}}{w:>{W_YD}.1f}{w * batch_volume:>{W_BATCH}.1f}")
    print(f"{'Total':<{W_MAT}}{total:>{W_YD}.1f}{total * batch_volume:>{W_BATCH}.1f}")
    print(f"\nAir content: {result.air_content:g} %")
    print(f"Unit weight: {result.unit_weight:.1f} lb/ft³")
    if result.water < 0:
        print("Note: aggregates carry more free water than the design water (negative batch water).")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="aci211", description="ACI 211.1 concrete mix design")
    parser.add_argument("--defaults", action="store_true", help="use the default inputs without prompting")
    parser.add_argument("--pdf", type=Path, help="write the PDF report to this path")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    print("\n=== ACI 211.1 Mix Designer (absolute volume method, imperial units) ===")
    try:
        inputs = MixInputs.from_dict(DEFAULT_INPUTS) if args.defaults else prompt_inputs()
        result = compute(inputs)
    except (MixDesignError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    render_steps(result)
    render_proportions(result, inputs.batch_volume)

    if args.pdf:
        from .report import build_pdf_report

        args.pdf.write_bytes(build_pdf_report(inputs, result))
        print(f"\nReport written to {args.pdf}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
