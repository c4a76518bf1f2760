"""Bedrock Cost Calculator - A tool for estimating and comparing LLM API costs."""

from bedrock_cost_calculator.common import *
from bedrock_cost_calculator.catalog import (
    normalize_pricing_feed,
    resolve_default_models,
    find_reference_pricing,
)
from bedrock_cost_calculator.store import ModelStore

__version__ = "0.1.0"

__all__ = [
    "calculate_cost",
    "compare_region_models",
    "compare_selected_models",
    "normalize_pricing_feed",
    "resolve_default_models",
    "find_reference_pricing",
    "ModelStore",
    "Model",
    "PriceRecord",
    "Tier",
]
