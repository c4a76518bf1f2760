"""Embedding cost calculator page implementation."""

import streamlit as st

from bedrock_cost_calculator.common.utils import format_usd
from bedrock_cost_calculator.pages.embedding_calculator.calculator import (
    EMBEDDING_MODELS,
    INPUT_TYPE_LABELS,
    TOKENS_PER_GB,
    calculate_embedding_cost,
)


def embedding_calculator_page():
    """Embedding cost estimation page."""
    st.markdown(
        "Estimate the cost of generating **embeddings** for a corpus, "
        "from its size, token count or character count."
    )

    st.sidebar.header("Embedding Configuration")
    model_id = st.sidebar.selectbox(
        "Embedding Model",
        options=list(EMBEDDING_MODELS),
        index=list(EMBEDDING_MODELS).index("titan-v2"),
        format_func=lambda key: EMBEDDING_MODELS[key]["name"],
        key="embedding_model"
    )
    input_type = st.sidebar.selectbox(
        "Input Type",
        options=list(INPUT_TYPE_LABELS),
        format_func=lambda key: INPUT_TYPE_LABELS[key],
        key="embedding_input_type"
    )
    value = st.sidebar.number_input(
        INPUT_TYPE_LABELS[input_type],
        min_value=0.0, value=1.0,
        key="embedding_value"
    )
    price = st.sidebar.number_input(
        "Model Price ($ per 1K tokens)",
        min_value=0.0, value=EMBEDDING_MODELS[model_id]["price"],
        format="%.6f", step=0.000001,
        key=f"embedding_price_{model_id}"
    )

    try:
        estimate = calculate_embedding_cost(input_type, value, price)
    except ValueError as e:
        st.error(str(e))
        return

    model_name = EMBEDDING_MODELS[model_id]["name"]
    st.subheader(f"Selected Model: {model_name}")
    st.metric("Total Monthly Embedding Cost", format_usd(estimate.total_cost))

    if input_type == "data-size":
        conversion = f"{value} GB × {TOKENS_PER_GB:,} tokens/GB"
    elif input_type == "character-count":
        conversion = f"{value} characters ÷ 4"
    else:
        conversion = f"{value} tokens"

    st.markdown(
        f"- **Price:** ${price} per 1000 tokens\n"
        f"- **Tokens:** {conversion} = {estimate.tokens:,.0f} tokens\n"
        f"- **Total Cost:** ({price} / 1000) × {estimate.tokens:,.0f} tokens = {estimate.total_cost:.4f} USD"
    )
