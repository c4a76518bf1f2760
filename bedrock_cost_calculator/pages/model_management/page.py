"""Model management page implementation."""

import pandas as pd
import streamlit as st

from bedrock_cost_calculator.catalog.reference import ReferenceStatus, describe_reference_pricing
from bedrock_cost_calculator.common.models import Model, PriceRecord, Tier
from bedrock_cost_calculator.common.utils import (
    AWS_REGIONS,
    COL_INPUT_RATE,
    COL_MODEL,
    COL_OUTPUT_RATE,
    COL_REGION,
    PROVIDER_KEYWORDS,
)
from bedrock_cost_calculator.store import ModelNotFoundError, ModelStore, ModelValidationError

OTHER_PROVIDER = "Other"


def _render_reference_pricing(provider: str, catalog: list[PriceRecord], regions: list[str]):
    reference = describe_reference_pricing(provider, catalog, regions)

    if reference.status is ReferenceStatus.VENDOR_PAGE:
        st.info(reference.message)
        return
    if reference.status is not ReferenceStatus.MATCHES:
        st.warning(reference.message)
        return

    st.markdown(f"**{reference.message}**")
    reference_df = pd.DataFrame([
        {
            COL_MODEL: record.model_id,
            COL_REGION: record.region,
            COL_INPUT_RATE: record.input_cost or 0,
            COL_OUTPUT_RATE: record.output_cost or 0,
        }
        for record in reference.records
    ])
    st.dataframe(
        reference_df.style.format({COL_INPUT_RATE: "${:.6f}", COL_OUTPUT_RATE: "${:.6f}"}),
        use_container_width=True,
        hide_index=True,
        height=300
    )


def _add_model_section(store: ModelStore, catalog: list[PriceRecord]):
    st.subheader("➕ Add Model")

    provider_choice = st.selectbox(
        "Provider",
        options=[""] + list(PROVIDER_KEYWORDS) + [OTHER_PROVIDER],
        format_func=lambda p: p or "Select Provider",
        key="add_provider"
    )

    if provider_choice == OTHER_PROVIDER:
        provider = st.text_input("Custom Provider", key="add_custom_provider")
        regions = [st.text_input("Region", key="add_custom_region")]
    else:
        provider = provider_choice
        regions = st.multiselect(
            "Regions",
            options=AWS_REGIONS,
            help="The model is added once per selected region",
            key="add_regions"
        ) if provider_choice else []
        if provider_choice:
            _render_reference_pricing(provider_choice, catalog, regions)

    name = st.text_input("Model Name", key="add_model_name")
    col1, col2 = st.columns(2)
    with col1:
        input_cost = st.text_input("Input Cost ($ per 1K tokens)", key="add_input_cost")
    with col2:
        output_cost = st.text_input("Output Cost ($ per 1K tokens)", key="add_output_cost")

    if st.button("Add Model", type="primary", key="add_model_button"):
        try:
            created = store.add_custom(provider, name, regions, input_cost, output_cost)
        except ModelValidationError as e:
            st.error(str(e))
            return
        except OSError as e:
            st.error(f"Could not save custom models: {e}")
            return

        if len(created) > 1:
            st.session_state["flash"] = f"Model added successfully for {len(created)} regions!"
        else:
            st.session_state["flash"] = "Model added successfully!"
        for key in ("add_provider", "add_custom_provider", "add_custom_region",
                    "add_regions", "add_model_name", "add_input_cost", "add_output_cost"):
            st.session_state.pop(key, None)
        st.rerun()


def _model_editor(store: ModelStore, model: Model):
    with st.expander(f"{model.name} · {model.tier.value} · {model.region}"):
        st.caption(f"Provider: {model.provider}")
        region = st.text_input("Region", value=model.region, key=f"region-{model.id}")
        col1, col2 = st.columns(2)
        with col1:
            input_cost = st.text_input(
                "Input Cost ($ per 1K tokens)", value=str(model.input_cost), key=f"in-{model.id}"
            )
        with col2:
            output_cost = st.text_input(
                "Output Cost ($ per 1K tokens)", value=str(model.output_cost), key=f"out-{model.id}"
            )
        if model.tier is Tier.DEFAULT:
            st.caption("Changes to default models last until the page is reloaded.")

        save_col, remove_col = st.columns(2)
        with save_col:
            if st.button("Save", key=f"save-{model.id}"):
                try:
                    store.update(model.id, region, input_cost, output_cost)
                except (ModelValidationError, ModelNotFoundError) as e:
                    st.error(str(e))
                except OSError as e:
                    st.error(f"Could not save custom models: {e}")
                else:
                    st.rerun()
        with remove_col:
            confirm = st.checkbox("Confirm removal", key=f"confirm-{model.id}")
            if st.button("Remove", type="secondary", disabled=not confirm, key=f"remove-{model.id}"):
                try:
                    store.delete(model.id)
                except ModelNotFoundError as e:
                    st.error(str(e))
                except OSError as e:
                    st.error(f"Could not save custom models: {e}")
                else:
                    st.rerun()


def _model_list_section(store: ModelStore):
    st.subheader("📋 Models")

    view = st.radio("View", ["All Models", "Filter"], horizontal=True, key="manage_view")
    if view == "Filter":
        col1, col2 = st.columns(2)
        with col1:
            provider = st.selectbox(
                "Provider", options=[""] + store.providers(),
                format_func=lambda p: p or "Select Provider", key="manage_filter_provider"
            )
        with col2:
            region = st.selectbox(
                "Region", options=[""] + store.regions(),
                format_func=lambda r: r or "Select Region", key="manage_filter_region"
            )
        models = store.filter(provider=provider, region=region)
        if not models:
            st.warning("No models match the selected filters")
            return
    else:
        models = store.merged()

    default_models = [model for model in models if model.tier is Tier.DEFAULT]
    custom_models = [model for model in models if model.tier is Tier.CUSTOM]

    if default_models:
        st.markdown("**Default Models**")
        for model in default_models:
            _model_editor(store, model)
    if custom_models:
        st.markdown("**Added Models**")
        for model in custom_models:
            _model_editor(store, model)

    st.divider()
    confirm_reset = st.checkbox("Remove all added models", key="manage_confirm_reset")
    if st.button("Reset Custom Models", disabled=not confirm_reset, key="manage_reset"):
        try:
            store.reset_custom()
        except OSError as e:
            st.error(f"Could not save custom models: {e}")
        else:
            st.session_state.pop("manage_confirm_reset", None)
            st.rerun()


def model_management_page(store: ModelStore, catalog: list[PriceRecord]):
    """Add, edit and remove models available to the calculator."""
    st.markdown(
        "Add your own models with their per-token prices, or adjust the default ones. "
        "Added models are saved between sessions."
    )

    flash = st.session_state.pop("flash", None)
    if flash:
        st.success(flash)

    left, right = st.columns(2)
    with left:
        _add_model_section(store, catalog)
    with right:
        _model_list_section(store)
