"""
Bedrock Cost Calculator - Main Application

A Streamlit application for estimating and comparing the monthly cost of
LLM API usage on AWS Bedrock, with user-defined models alongside the
built-in defaults.
"""

import logging
import sys
from pathlib import Path

import streamlit as st
from dotenv import load_dotenv

# Add parent directory to path to support both direct execution and package import
if __name__ == "__main__":
    sys.path.insert(0, str(Path(__file__).parent.parent))

from bedrock_cost_calculator.data_loader import get_model_store, load_catalog
from bedrock_cost_calculator.pages.embedding_calculator import embedding_calculator_page
from bedrock_cost_calculator.pages.model_management import model_management_page
from bedrock_cost_calculator.pages.token_calculator import token_calculator_page
from bedrock_cost_calculator.pages.token_counter import token_counter_page


def main():
    """Main function to run the Streamlit application."""
    load_dotenv()
    logging.basicConfig(level=logging.INFO)

    st.set_page_config(
        page_title="Bedrock Cost Calculator",
        page_icon="💰",
        layout="wide"
    )

    st.title("💰 Bedrock Cost Calculator")

    # Load data
    catalog = load_catalog()
    store = get_model_store()

    # Page selection using radio buttons
    page = st.sidebar.radio(
        "Select Page",
        ["Token Cost Calculator", "Model Management", "Embedding Cost Calculator", "Token Counter"]
    )

    if page == "Token Cost Calculator":
        token_calculator_page(store)
    elif page == "Model Management":
        model_management_page(store, catalog)
    elif page == "Embedding Cost Calculator":
        embedding_calculator_page()
    elif page == "Token Counter":
        token_counter_page()
    else:
        st.error("Invalid page selection.")


if __name__ == "__main__":
    main()
