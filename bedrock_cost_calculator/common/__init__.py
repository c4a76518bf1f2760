"""Common utilities and calculators shared across multiple pages."""

from bedrock_cost_calculator.common.models import (
    CURATED_DEFAULTS,
    CatalogKey,
    Model,
    PriceRecord,
    Tier,
    fallback_catalog,
)
from bedrock_cost_calculator.common.cost_calculator import (
    CostBreakdown,
    ModelComparison,
    calculate_cost,
    compare_region_models,
    compare_selected_models,
    comparisons_to_dataframe,
)
from bedrock_cost_calculator.common.utils import (
    get_pricing_notes,
    AWS_REGIONS,
    PROVIDER_KEYWORDS,
    PROVIDERS_WITHOUT_API_PRICING,
)

__all__ = [
    "CURATED_DEFAULTS",
    "CatalogKey",
    "Model",
    "PriceRecord",
    "Tier",
    "fallback_catalog",
    "CostBreakdown",
    "ModelComparison",
    "calculate_cost",
    "compare_region_models",
    "compare_selected_models",
    "comparisons_to_dataframe",
    "get_pricing_notes",
    "AWS_REGIONS",
    "PROVIDER_KEYWORDS",
    "PROVIDERS_WITHOUT_API_PRICING",
]
