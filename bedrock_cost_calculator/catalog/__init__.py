"""Pricing catalog pipeline: normalization, default enrichment and reference lookup."""

from bedrock_cost_calculator.catalog.normalizer import (
    PricingFeedError,
    normalize_pricing_feed,
    parse_catalog_json,
    to_catalog_json,
)
from bedrock_cost_calculator.catalog.resolver import resolve_default_models
from bedrock_cost_calculator.catalog.reference import (
    ReferencePricing,
    ReferenceStatus,
    describe_reference_pricing,
    find_reference_pricing,
)

__all__ = [
    "PricingFeedError",
    "normalize_pricing_feed",
    "parse_catalog_json",
    "to_catalog_json",
    "resolve_default_models",
    "ReferencePricing",
    "ReferenceStatus",
    "describe_reference_pricing",
    "find_reference_pricing",
]
