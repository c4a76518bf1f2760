"""Cost calculation utilities for per-token LLM pricing."""

from dataclasses import dataclass
from typing import Optional, Sequence

import pandas as pd

from bedrock_cost_calculator.common.models import Model
from bedrock_cost_calculator.common.utils import (
    COL_DIFFERENCE,
    COL_INPUT_COST,
    COL_MODEL,
    COL_OUTPUT_COST,
    COL_PROVIDER,
    COL_REGION,
    COL_TOTAL_COST,
)

TOKENS_PER_PRICE_UNIT = 1000  # Bedrock prices are per 1K tokens


@dataclass(frozen=True)
class CostBreakdown:
    total_input_tokens: int
    total_output_tokens: int
    monthly_input_cost: float
    monthly_output_cost: float
    total_cost: float


@dataclass(frozen=True)
class ModelComparison:
    model: Model
    cost: CostBreakdown
    difference: float
    is_baseline: bool = False
    is_selected: bool = False


def calculate_cost(
    model: Model,
    input_tokens: int,
    output_tokens: int,
    requests_per_month: int
) -> CostBreakdown:
    """
    Calculate the monthly cost of a model.

    Args:
        model: Model with input/output prices in USD per 1K tokens
        input_tokens: Input tokens per request
        output_tokens: Output tokens per request
        requests_per_month: Number of requests per month

    Returns:
        Token totals and monthly costs

    Raises:
        ValueError: If any volume is negative
    """
    if min(input_tokens, output_tokens, requests_per_month) < 0:
        raise ValueError("Token counts and requests per month must not be negative")

    total_input_tokens = input_tokens * requests_per_month
    total_output_tokens = output_tokens * requests_per_month
    monthly_input_cost = (model.input_cost / TOKENS_PER_PRICE_UNIT) * total_input_tokens
    monthly_output_cost = (model.output_cost / TOKENS_PER_PRICE_UNIT) * total_output_tokens

    return CostBreakdown(
        total_input_tokens=total_input_tokens,
        total_output_tokens=total_output_tokens,
        monthly_input_cost=monthly_input_cost,
        monthly_output_cost=monthly_output_cost,
        total_cost=monthly_input_cost + monthly_output_cost,
    )


def _require_positive_volumes(input_tokens: int, output_tokens: int, requests_per_month: int):
    if min(input_tokens, output_tokens, requests_per_month) <= 0:
        raise ValueError("Please enter valid token counts and requests per month.")


def compare_region_models(
    models: Sequence[Model],
    region: str,
    input_tokens: int,
    output_tokens: int,
    requests_per_month: int,
    selected_model_id: Optional[str] = None
) -> list[ModelComparison]:
    """
    Compare every model available in a region.

    The baseline is the selected model when it is in the region, otherwise
    the cheapest one.

    Args:
        models: Candidate models (typically the store's merged view)
        region: Region to compare
        input_tokens: Input tokens per request
        output_tokens: Output tokens per request
        requests_per_month: Number of requests per month
        selected_model_id: Id of the model chosen in the calculator, if any

    Returns:
        Comparisons sorted by total cost, cheapest first; empty if the region has no models

    Raises:
        ValueError: If the region is missing or a volume is not positive
    """
    if not region:
        raise ValueError("Please select a region.")
    _require_positive_volumes(input_tokens, output_tokens, requests_per_month)

    costed = [
        (model, calculate_cost(model, input_tokens, output_tokens, requests_per_month))
        for model in models if model.region == region
    ]
    if not costed:
        return []

    costed.sort(key=lambda item: item[1].total_cost)

    baseline_index = 0
    for index, (model, _) in enumerate(costed):
        if selected_model_id is not None and model.id == selected_model_id:
            baseline_index = index
            break
    baseline_cost = costed[baseline_index][1].total_cost

    return [
        ModelComparison(
            model=model,
            cost=cost,
            difference=cost.total_cost - baseline_cost,
            is_baseline=index == baseline_index,
            is_selected=selected_model_id is not None and model.id == selected_model_id,
        )
        for index, (model, cost) in enumerate(costed)
    ]


def compare_selected_models(
    models: Sequence[Model],
    input_tokens: int,
    output_tokens: int,
    requests_per_month: int,
    selected_model: Optional[Model] = None
) -> list[ModelComparison]:
    """
    Compare a user-chosen subset of models.

    The baseline cost is the cost of ``selected_model`` when given (even if
    it is not part of the subset), otherwise that of the cheapest model.

    Args:
        models: At least two models to compare
        input_tokens: Input tokens per request
        output_tokens: Output tokens per request
        requests_per_month: Number of requests per month
        selected_model: Model chosen in the calculator, if any

    Returns:
        Comparisons sorted by total cost, cheapest first

    Raises:
        ValueError: If fewer than two models are given or a volume is not positive
    """
    if len(models) < 2:
        raise ValueError("Please select at least 2 models to compare.")
    _require_positive_volumes(input_tokens, output_tokens, requests_per_month)

    costed = sorted(
        (
            (model, calculate_cost(model, input_tokens, output_tokens, requests_per_month))
            for model in models
        ),
        key=lambda item: item[1].total_cost
    )

    if selected_model is not None:
        baseline_cost = calculate_cost(
            selected_model, input_tokens, output_tokens, requests_per_month
        ).total_cost
        baseline_id = selected_model.id
    else:
        baseline_cost = costed[0][1].total_cost
        baseline_id = costed[0][0].id

    return [
        ModelComparison(
            model=model,
            cost=cost,
            difference=cost.total_cost - baseline_cost,
            is_baseline=model.id == baseline_id,
            is_selected=selected_model is not None and model.id == selected_model.id,
        )
        for model, cost in costed
    ]


def comparisons_to_dataframe(comparisons: Sequence[ModelComparison]) -> pd.DataFrame:
    """
    Tabulate comparisons for display.

    Returns:
        DataFrame with one row per comparison, in the given order
    """
    rows = [
        {
            COL_PROVIDER: comparison.model.provider,
            COL_MODEL: comparison.model.name,
            COL_REGION: comparison.model.region,
            COL_INPUT_COST: comparison.cost.monthly_input_cost,
            COL_OUTPUT_COST: comparison.cost.monthly_output_cost,
            COL_TOTAL_COST: comparison.cost.total_cost,
            COL_DIFFERENCE: comparison.difference,
        }
        for comparison in comparisons
    ]
    columns = [
        COL_PROVIDER, COL_MODEL, COL_REGION,
        COL_INPUT_COST, COL_OUTPUT_COST, COL_TOTAL_COST, COL_DIFFERENCE,
    ]
    return pd.DataFrame(rows, columns=columns)
