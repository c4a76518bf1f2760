"""Reference prices shown when a user adds a model by hand."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional, Sequence

from bedrock_cost_calculator.common.models import PriceRecord
from bedrock_cost_calculator.common.utils import (
    BEDROCK_PRICING_PAGE,
    PROVIDER_KEYWORDS,
    PROVIDERS_WITHOUT_API_PRICING,
)


class ReferenceStatus(str, Enum):
    MATCHES = "matches"
    VENDOR_PAGE = "vendor_page"
    NO_MATCHES_IN_REGIONS = "no_matches_in_regions"
    NO_REFERENCE = "no_reference"


@dataclass
class ReferencePricing:
    provider: str
    status: ReferenceStatus
    records: list[PriceRecord] = field(default_factory=list)

    @property
    def message(self) -> str:
        if self.status is ReferenceStatus.MATCHES:
            return f"Reference pricing for {self.provider}"
        if self.status is ReferenceStatus.VENDOR_PAGE:
            return f"Refer to [AWS Bedrock Pricing]({BEDROCK_PRICING_PAGE}) for the latest pricing details."
        if self.status is ReferenceStatus.NO_MATCHES_IN_REGIONS:
            return f"No models available for {self.provider} in the selected regions"
        return f"No reference pricing available for {self.provider}"


def find_reference_pricing(
    provider: str,
    catalog: Sequence[PriceRecord],
    regions: Optional[Sequence[str]] = None,
    keywords: Mapping[str, Sequence[str]] = PROVIDER_KEYWORDS
) -> list[PriceRecord]:
    """
    Find catalog records that belong to a provider.

    A record matches when its lowercased identifier contains one of the
    provider's keywords.

    Args:
        provider: Provider display name, e.g. "Mistral AI"
        catalog: Full normalized catalog
        regions: If non-empty, keep only records in these regions
        keywords: Provider name to identifier keywords

    Returns:
        Matching records in catalog order; empty for unknown providers
    """
    provider_keywords = keywords.get(provider)
    if not provider_keywords:
        return []

    matches = [
        record for record in catalog
        if any(keyword in record.model_id.lower() for keyword in provider_keywords)
    ]
    if regions:
        allowed = set(regions)
        matches = [record for record in matches if record.region in allowed]
    return matches


def describe_reference_pricing(
    provider: str,
    catalog: Sequence[PriceRecord],
    regions: Optional[Sequence[str]] = None
) -> ReferencePricing:
    """Find reference records and classify the outcome for display."""
    records = find_reference_pricing(provider, catalog, regions)
    if records:
        status = ReferenceStatus.MATCHES
    elif provider in PROVIDERS_WITHOUT_API_PRICING:
        status = ReferenceStatus.VENDOR_PAGE
    elif regions:
        status = ReferenceStatus.NO_MATCHES_IN_REGIONS
    else:
        status = ReferenceStatus.NO_REFERENCE
    return ReferencePricing(provider=provider, status=status, records=records)
