"""Token cost calculator page implementation."""

import streamlit as st

from bedrock_cost_calculator.common.cost_calculator import (
    calculate_cost,
    compare_region_models,
    compare_selected_models,
    comparisons_to_dataframe,
)
from bedrock_cost_calculator.common.utils import (
    COL_DIFFERENCE,
    COL_INPUT_COST,
    COL_OUTPUT_COST,
    COL_TOTAL_COST,
    format_difference,
    format_usd,
    get_pricing_notes,
)
from bedrock_cost_calculator.store import ModelStore

MODE_CALCULATE = "Calculate"
MODE_COMPARE_ALL = "Compare All in Region"
MODE_COMPARE_SELECTED = "Compare Selected"


def _render_comparison(comparisons, title: str, input_tokens: int, output_tokens: int, requests: int):
    st.subheader(title)
    st.caption(
        f"Based on {input_tokens} input tokens, {output_tokens} output tokens, "
        f"{requests} requests/month"
    )

    comparison_df = comparisons_to_dataframe(comparisons)
    format_dict = {
        COL_INPUT_COST: "${:,.4f}",
        COL_OUTPUT_COST: "${:,.4f}",
        COL_TOTAL_COST: "${:,.4f}",
        COL_DIFFERENCE: format_difference,
    }
    st.dataframe(
        comparison_df.style.format(format_dict).highlight_min(
            subset=[COL_TOTAL_COST], color='lightgreen'
        ),
        use_container_width=True,
        hide_index=True
    )

    for comparison in comparisons:
        marker = " ⭐" if comparison.is_selected else ""
        with st.expander(f"{comparison.model.label}{marker} • {format_usd(comparison.cost.total_cost)}/month"):
            _render_breakdown(comparison.model, comparison.cost, input_tokens, output_tokens, requests)


def _render_breakdown(model, cost, input_tokens: int, output_tokens: int, requests: int):
    st.markdown(
        f"**Token Calculations**\n\n"
        f"- Input: {input_tokens} × {requests} = {cost.total_input_tokens}\n"
        f"- Output: {output_tokens} × {requests} = {cost.total_output_tokens}\n\n"
        f"**Cost Breakdown**\n\n"
        f"- Input Cost: ({model.input_cost}/1000) × {cost.total_input_tokens} = {cost.monthly_input_cost:.4f} USD\n"
        f"- Output Cost: ({model.output_cost}/1000) × {cost.total_output_tokens} = {cost.monthly_output_cost:.4f} USD"
    )


def token_calculator_page(store: ModelStore):
    """Monthly token cost calculation and model comparison page."""
    st.markdown(
        "Estimate the **monthly cost** of a model from your token volumes, "
        "or compare models available in the same region."
    )

    st.info(
        get_pricing_notes()
    )

    # Sidebar inputs
    st.sidebar.header("Token Configuration")
    region = st.sidebar.selectbox(
        "Region",
        options=[""] + store.regions(),
        format_func=lambda r: r or "Select Region",
        key="calc_region"
    )
    provider = st.sidebar.selectbox(
        "Provider",
        options=[""] + (store.providers(region) if region else []),
        format_func=lambda p: p or "All Providers",
        key="calc_provider"
    )

    # Widget values are model ids, so edits elsewhere never point them at another model
    region_models = store.filter(provider=provider, region=region) if region else []
    models_by_id = {model.id: model for model in region_models}
    selected_id = st.sidebar.selectbox(
        "Model",
        options=[""] + list(models_by_id),
        format_func=lambda model_id: models_by_id[model_id].name if model_id else "Select Model",
        key="calc_model"
    )
    selected_model = models_by_id.get(selected_id)

    input_tokens = st.sidebar.number_input(
        "Input Tokens Per Request",
        min_value=1, value=500, step=100,
        key="calc_input_tokens"
    )
    output_tokens = st.sidebar.number_input(
        "Output Tokens Per Request",
        min_value=1, value=300, step=100,
        key="calc_output_tokens"
    )
    requests = st.sidebar.number_input(
        "Requests Per Month",
        min_value=1, value=1000, step=100,
        key="calc_requests"
    )

    mode = st.radio(
        "Mode",
        [MODE_CALCULATE, MODE_COMPARE_ALL, MODE_COMPARE_SELECTED],
        horizontal=True,
        key="calc_mode"
    )

    if mode == MODE_CALCULATE:
        if selected_model is None:
            st.warning("Please select a region and a model.")
            return

        cost = calculate_cost(selected_model, input_tokens, output_tokens, requests)
        st.subheader(f"Selected Model: {selected_model.label}")
        col1, col2, col3 = st.columns(3)
        with col1:
            st.metric("Monthly Input Token Cost", format_usd(cost.monthly_input_cost))
        with col2:
            st.metric("Monthly Output Token Cost", format_usd(cost.monthly_output_cost))
        with col3:
            st.metric("Total Monthly Cost", format_usd(cost.total_cost))
        _render_breakdown(selected_model, cost, input_tokens, output_tokens, requests)

    elif mode == MODE_COMPARE_ALL:
        if not region:
            st.warning("Please select a region first.")
            return
        try:
            comparisons = compare_region_models(
                store.merged(), region, input_tokens, output_tokens, requests,
                selected_model_id=selected_model.id if selected_model else None
            )
        except ValueError as e:
            st.error(str(e))
            return

        if not comparisons:
            st.warning("No models available in the selected region.")
            return
        _render_comparison(
            comparisons, f"Model Comparison for {region}",
            input_tokens, output_tokens, requests
        )

    else:
        if not region:
            st.warning("Please select a region first.")
            return
        candidates = {model.id: model for model in store.models_in_region(region)}
        if not candidates:
            st.warning("No models available in the selected region.")
            return

        chosen_ids = st.multiselect(
            f"Select Models to Compare ({region})",
            options=list(candidates),
            format_func=lambda model_id: (
                f"{candidates[model_id].label} • Input: ${candidates[model_id].input_cost}/1K "
                f"• Output: ${candidates[model_id].output_cost}/1K"
            ),
            help="Choose at least 2 models to compare",
            key="calc_compare_selection"
        )
        if len(chosen_ids) < 2:
            st.info("Choose at least 2 models to compare.")
            return

        try:
            comparisons = compare_selected_models(
                [candidates[model_id] for model_id in chosen_ids],
                input_tokens, output_tokens, requests,
                selected_model=selected_model
            )
        except ValueError as e:
            st.error(str(e))
            return
        _render_comparison(
            comparisons, "Selected Models Comparison",
            input_tokens, output_tokens, requests
        )
