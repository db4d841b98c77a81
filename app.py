# app.py
# ACI 211.1 Concrete Mix Design Tool - Streamlit UI
# Run:
#   pip install -e .
#   streamlit run app.py

from __future__ import annotations

import pandas as pd
import streamlit as st

from aci211.config import DEFAULT_INPUTS, MAX_AGG_SIZES, SLUMP_TABLE
from aci211.design import compute
from aci211.errors import MixDesignError
from aci211.explain import explain_step
from aci211.models import ConcreteType, ExposureCondition, MixInputs
from aci211.report import (
    build_pdf_report,
    inputs_table,
    proportions_table,
    report_filename,
    results_download_payload,
    results_json,
    steps_table,
)

# =============================================================================
# Page configuration
# =============================================================================
st.set_page_config(
    page_title="ACI 211.1 Mix Design Tool",
    page_icon="🏛️",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.title("ACI 211.1 Mix Design Tool")
st.write(
    "Computes normal-weight concrete proportions per cubic yard with the ACI 211.1 absolute volume method, "
    "including moisture corrections for stockpile aggregates."
)

with st.expander("Method and limitations (read first)", expanded=False):
    st.markdown(
        """
**Method summary**
- Mixing water and air from ACI Table 3.1 (slump bucket and maximum aggregate size).
- w/c from ACI Table 4.1 (linear between tabulated strengths), capped by the exposure limit.
- Coarse aggregate from ACI Table 6.1 (interpolated on fineness modulus).
- Fine aggregate by absolute volume; stockpile weights include absorption and surface moisture.

**Limitations**
- Imperial units only. Inputs are checked against table bounds, not engineering plausibility.
- Adjusted batch water is reported as computed, even when negative.
"""
    )

st.divider()

# =============================================================================
# Sidebar
# =============================================================================
d = DEFAULT_INPUTS
with st.sidebar:
    st.header("Inputs")

    st.subheader("Project requirements")
    strength = st.number_input("Target strength (psi)", 1000.0, 10000.0, float(d["strength"]), 100.0)
    concrete_type = st.selectbox("Concrete type", [c.value for c in ConcreteType])
    exposure = st.selectbox("Exposure condition", [e.value for e in ExposureCondition])

    colA, colB = st.columns(2)
    with colA:
        slump_min = st.number_input("Slump min (in)", 0.0, 10.0, float(d["slump_min"]), 0.5)
    with colB:
        slump_max = st.number_input("Slump max (in)", 0.0, 10.0, float(d["slump_max"]), 0.5)
    max_agg_size = st.selectbox(
        "Max aggregate size (in)", MAX_AGG_SIZES, index=MAX_AGG_SIZES.index(d["max_agg_size"])
    )
    cement_sg = st.number_input("Cement SG", 2.0, 4.0, float(d["cement_sg"]), 0.01)

    st.divider()
    st.subheader("Coarse aggregate")
    ca_sg = st.number_input("SG (CA)", 2.0, 3.5, float(d["ca_sg"]), 0.01)
    ca_absorption = st.number_input("Absorption (CA, %)", 0.0, 10.0, float(d["ca_absorption"]), 0.1)
    ca_druw = st.number_input("Dry-rodded unit weight (lb/ft³)", 50.0, 150.0, float(d["ca_druw"]), 1.0)
    ca_moisture = st.number_input("Surface moisture (CA, %)", 0.0, 20.0, float(d["ca_moisture"]), 0.1)

    st.divider()
    st.subheader("Fine aggregate")
    fa_sg = st.number_input("SG (FA)", 2.0, 3.5, float(d["fa_sg"]), 0.01)
    fa_absorption = st.number_input("Absorption (FA, %)", 0.0, 10.0, float(d["fa_absorption"]), 0.1)
    fa_fm = st.number_input("Fineness modulus", 2.4, 3.0, float(d["fa_fm"]), 0.05)
    fa_moisture = st.number_input("Surface moisture (FA, %)", 0.0, 20.0, float(d["fa_moisture"]), 0.1)

    st.divider()
    batch_volume = st.number_input("Batch volume (yd³)", 0.1, 100.0, float(d["batch_volume"]), 0.5)
    explain_on = st.toggle("AI explanations", value=True)
    run_btn = st.button("Run mix design", type="primary", use_container_width=True)

# =============================================================================
# Reference: recommended slumps
# =============================================================================
with st.expander("Recommended slumps (ACI Table 2.1)", expanded=False):
    slump_df = pd.DataFrame(
        [(kind, hi, lo) for kind, lo, hi in SLUMP_TABLE],
        columns=["Type of construction", "Max (in)", "Min (in)"],
    )
    st.dataframe(slump_df, use_container_width=True, hide_index=True)

# =============================================================================
# Run
# =============================================================================
if run_btn:
    try:
        inputs = MixInputs.from_dict({
            "strength": strength,
            "concrete_type": concrete_type,
            "exposure": exposure,
            "slump_min": slump_min,
            "slump_max": slump_max,
            "max_agg_size": max_agg_size,
            "cement_sg": cement_sg,
            "ca_sg": ca_sg,
            "ca_absorption": ca_absorption,
            "ca_druw": ca_druw,
            "ca_moisture": ca_moisture,
            "fa_sg": fa_sg,
            "fa_absorption": fa_absorption,
            "fa_fm": fa_fm,
            "fa_moisture": fa_moisture,
            "batch_volume": batch_volume,
        })
        st.session_state.inputs = inputs
        st.session_state.result = compute(inputs)
        st.session_state.explanations = {}
    except MixDesignError as e:
        st.session_state.pop("result", None)
        st.error(f"Cannot compute this mix: {e}")

# =============================================================================
# Render results
# =============================================================================
if "result" in st.session_state:
    inputs = st.session_state.inputs
    result = st.session_state.result
    explanations = st.session_state.setdefault("explanations", {})

    st.subheader("Results summary")
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Water, adjusted (lb/yd³)", f"{result.water:.1f}")
    c2.metric("Cement (lb/yd³)", f"{result.cement:.1f}")
    c3.metric("Coarse agg., wet (lb/yd³)", f"{result.coarse_agg:.1f}")
    c4.metric("Fine agg., wet (lb/yd³)", f"{result.fine_agg:.1f}")

    c5, c6, _, _ = st.columns(4)
    c5.metric("Air content (%)", f"{result.air_content:g}")
    c6.metric("Unit weight (lb/ft³)", f"{result.unit_weight:.1f}")

    if result.water < 0:
        st.warning("Aggregates carry more free water than the design water; adjusted batch water is negative.")

    st.divider()

    tab1, tab2, tab3 = st.tabs(["Proportions", "Calculation steps", "Inputs"])

    with tab1:
        st.write(f"Quantities per **1 yd³** and for the **{inputs.batch_volume:g} yd³** batch.")
        st.dataframe(proportions_table(result, inputs.batch_volume), use_container_width=True, hide_index=True)

    with tab2:
        for step in result.steps:
            with st.container(border=True):
                st.markdown(f"**Step {step.id}: {step.title}**")
                st.markdown(f"`{step.value}`")
                st.code(step.calculation, language=None)
                if explain_on:
                    if st.button("Explain", key=f"explain_{step.id}"):
                        if step.id in explanations:
                            del explanations[step.id]
                        else:
                            with st.spinner("Fetching explanation..."):
                                explanations[step.id] = explain_step(step, inputs)
                    if step.id in explanations:
                        st.info(explanations[step.id])

    with tab3:
        st.dataframe(inputs_table(inputs), use_container_width=True, hide_index=True)

    st.divider()

    st.subheader("Download")
    col1, col2, col3 = st.columns(3)
    with col1:
        st.download_button(
            label="Download report (PDF)",
            data=build_pdf_report(inputs, result),
            file_name=report_filename(inputs),
            mime="application/pdf",
        )
    with col2:
        st.download_button(
            label="Download results (CSV)",
            data=results_download_payload(inputs, result).to_csv(index=False).encode("utf-8"),
            file_name="mix_design_results.csv",
            mime="text/csv",
        )
    with col3:
        st.download_button(
            label="Download steps (CSV)",
            data=steps_table(result).to_csv(index=False).encode("utf-8"),
            file_name="mix_design_steps.csv",
            mime="text/csv",
        )

    with st.expander("Export JSON (technical)", expanded=False):
        st.download_button(
            label="Download results (JSON)",
            data=results_json(inputs, result),
            file_name="mix_design_results.json",
            mime="application/json",
        )

# -----------------------------------------------------------------------------
# Footer
# -----------------------------------------------------------------------------
st.caption(
    "Indicative proportions for trial batching. "
    "Verify inputs and results against project specifications before use."
)
