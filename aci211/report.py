# aci211/report.py
from __future__ import annotations

import datetime as _dt
import json
from typing import Optional

import pandas as pd
from fpdf import FPDF, XPos, YPos

from .config import REPORT_FOOTER
from .models import MixInputs, MixResult

# =============================================================================
# Tables
# =============================================================================
def inputs_table(inputs: MixInputs) -> pd.DataFrame:
    rows = [
        ("Target strength", f"{inputs.strength:g}", "psi"),
        ("Concrete type", inputs.concrete_type.value, ""),
        ("Exposure", inputs.exposure.value, ""),
        ("Slump range", f"{inputs.slump_min:g}-{inputs.slump_max:g}", "in"),
        ("Max aggregate size", f"{inputs.max_agg_size:g}", "in"),
        ("Cement SG", f"{inputs.cement_sg:g}", ""),
        ("Coarse agg. SG", f"{inputs.ca_sg:g}", ""),
        ("Coarse agg. absorption", f"{inputs.ca_absorption:g}", "%"),
        ("Coarse agg. DRUW", f"{inputs.ca_druw:g}", "lb/ft³"),
        ("Coarse agg. moisture", f"{inputs.ca_moisture:g}", "%"),
        ("Fine agg. SG", f"{inputs.fa_sg:g}", ""),
        ("Fine agg. absorption", f"{inputs.fa_absorption:g}", "%"),
        ("Fine agg. fineness modulus", f"{inputs.fa_fm:g}", ""),
        ("Fine agg. moisture", f"{inputs.fa_moisture:g}", "%"),
        ("Batch volume", f"{inputs.batch_volume:g}", "yd³"),
    ]
    return pd.DataFrame(rows, columns=["Parameter", "Value", "Unit"])


def proportions_table(result: MixResult, batch_volume: float = 1.0) -> pd.DataFrame:
    """Final proportions per yd³ and for the requested batch volume."""
    per_yd = {
        "Water (Adjusted)": result.water,
        "Cement": result.cement,
        "Coarse Aggregate (Wet)": result.coarse_agg,
        "Fine Aggregate (Wet)": result.fine_agg,
    }
    df = pd.DataFrame({"Material": list(per_yd), "Weight (lb/yd³)": list(per_yd.values())})
    df["Batch Weight (lb)"] = df["Weight (lb/yd³)"] * batch_volume
    total = df["Weight (lb/yd³)"].sum()
    df["Mass share (%)"] = 100.0 * df["Weight (lb/yd³)"] / total if total else 0.0

    df_total = pd.DataFrame(
        [["Total", total, total * batch_volume, 100.0 if total else 0.0]],
        columns=df.columns,
    )
    return pd.concat([df, df_total], ignore_index=True).round(1)


def steps_table(result: MixResult) -> pd.DataFrame:
    return pd.DataFrame(
        [(s.id, s.title, s.value, s.calculation) for s in result.steps],
        columns=["Step", "Title", "Value", "Calculation"],
    )


def results_download_payload(inputs: MixInputs, result: MixResult) -> pd.DataFrame:
    """One-row CSV-friendly summary for record keeping."""
    row = dict(inputs.to_dict())
    row.update({
        "water_lb_yd3": result.water,
        "cement_lb_yd3": result.cement,
        "coarse_agg_stockpile_lb_yd3": result.coarse_agg,
        "fine_agg_stockpile_lb_yd3": result.fine_agg,
        "air_percent": result.air_content,
        "unit_weight_lb_ft3": result.unit_weight,
    })
    return pd.DataFrame([row])


def results_json(inputs: MixInputs, result: MixResult) -> str:
    return json.dumps({"inputs": inputs.to_dict(), "result": result.to_dict()}, indent=2, ensure_ascii=False)


def report_filename(inputs: MixInputs) -> str:
    return f"ACI_211_1_Mix_Design_{inputs.strength:g}psi.pdf"


# =============================================================================
# PDF
# =============================================================================
class _MixReportPDF(FPDF):
    def footer(self):
        self.set_y(-15)
        self.set_font("Helvetica", "B", 9)
        self.set_text_color(150)
        self.cell(0, 10, f"{REPORT_FOOTER} | Page {self.page_no()}", align="C")


def _heading(pdf: FPDF, text: str, size: int = 14):
    pdf.set_font("Helvetica", "B", size)
    pdf.set_text_color(0)
    pdf.cell(0, 8, text, new_x=XPos.LMARGIN, new_y=YPos.NEXT)


def build_pdf_report(
    inputs: MixInputs,
    result: MixResult,
    generated_on: Optional[_dt.date] = None,
) -> bytes:
    generated_on = generated_on or _dt.date.today()

    pdf = _MixReportPDF(unit="mm", format="A4")
    pdf.set_margins(20, 20, 20)
    pdf.set_auto_page_break(auto=True, margin=20)
    pdf.add_page()

    pdf.set_font("Helvetica", "B", 22)
    pdf.cell(0, 12, "ACI 211.1 Mix Design Report", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.set_font("Helvetica", "", 10)
    pdf.set_text_color(100)
    pdf.cell(0, 6, f"Generated on {generated_on.isoformat()} | ACI 211.1 Standards", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.ln(6)

    _heading(pdf, "Design Parameters")
    pdf.set_font("Helvetica", "", 10)
    for _, row in inputs_table(inputs).iterrows():
        unit = f" {row['Unit']}" if row["Unit"] else ""
        pdf.cell(70, 6, f"  {row['Parameter']}")
        pdf.cell(0, 6, f"{row['Value']}{unit}", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.ln(6)

    _heading(pdf, "Final Mix Proportions")
    proportions = proportions_table(result, inputs.batch_volume)
    batch_col = f"Batch, {inputs.batch_volume:g} yd³ (lb)"
    pdf.set_font("Helvetica", "B", 10)
    pdf.cell(70, 7, "  Material")
    pdf.cell(50, 7, "Weight (lb/yd³)")
    pdf.cell(0, 7, batch_col, new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.set_font("Helvetica", "", 10)
    for _, row in proportions.iterrows():
        pdf.cell(70, 7, f"  {row['Material']}")
        pdf.cell(50, 7, f"{row['Weight (lb/yd³)']:.1f}")
        pdf.cell(0, 7, f"{row['Batch Weight (lb)']:.1f}", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.cell(70, 7, "  Air Content")
    pdf.cell(0, 7, f"{result.air_content:g} %", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.cell(70, 7, "  Total Unit Weight")
    pdf.cell(0, 7, f"{result.unit_weight:.1f} lb/ft³", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.ln(8)

    _heading(pdf, "Step-by-Step Calculations")
    for step in result.steps:
        if pdf.get_y() > 250:
            pdf.add_page()
        pdf.set_font("Helvetica", "B", 11)
        pdf.set_text_color(0)
        pdf.cell(0, 6, f"Step {step.id}: {step.title}", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.set_font("Helvetica", "B", 10)
        pdf.set_text_color(0, 80, 200)
        pdf.cell(0, 6, f"   Value: {step.value}", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.set_font("Helvetica", "", 10)
        pdf.set_text_color(80)
        pdf.set_x(pdf.l_margin + 5)
        pdf.multi_cell(0, 5, step.calculation, new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.ln(4)

    return bytes(pdf.output())
