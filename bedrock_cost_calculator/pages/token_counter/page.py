"""Token counter page implementation."""

import streamlit as st

from bedrock_cost_calculator.pages.token_counter.counter import MODEL_TOKENIZERS, count_tokens


def token_counter_page():
    """Estimate how many tokens a text uses."""
    st.markdown(
        "Paste a prompt or document to get a **token estimate** to use in the calculator."
    )
    st.warning(
        "⚠️ **Important:** These are character-ratio estimates. "
        "Exact counts depend on each model's tokenizer."
    )

    mode = st.sidebar.selectbox(
        "Counting Mode",
        options=["simple", "model-specific"],
        format_func=lambda m: "Simple (~4 characters/token)" if m == "simple" else "Model-specific",
        key="token_counter_mode"
    )
    tokenizer = None
    if mode == "model-specific":
        tokenizer = st.sidebar.selectbox(
            "Model Family",
            options=list(MODEL_TOKENIZERS),
            format_func=lambda key: MODEL_TOKENIZERS[key]["name"],
            key="token_counter_model"
        )

    text = st.text_area("Text", height=250, key="token_counter_text")
    if not st.button("Count Tokens", type="primary"):
        return

    try:
        result = count_tokens(text, tokenizer)
    except ValueError as e:
        st.error(str(e))
        return

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Characters", f"{result.characters:,}")
    with col2:
        st.metric("Words", f"{result.words:,}")
    with col3:
        st.metric("Sentences", f"{result.sentences:,}")
    with col4:
        st.metric("Estimated Tokens", f"{result.estimated_tokens:,}")

    st.caption(
        f"{result.method}: {result.characters} characters ÷ {result.characters_per_token} "
        f"= {result.estimated_tokens} tokens"
    )
