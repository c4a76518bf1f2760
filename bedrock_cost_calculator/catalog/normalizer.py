"""
Normalization of the AWS Bedrock price list into per-(model, region) records.

The raw feed is the AWS Price List "offer" document: ``products`` maps each
SKU to its attributes and ``terms.OnDemand`` maps each SKU to its pricing
terms. Every token-priced SKU carries either the input or the output price of
one model in one region, so a complete record needs two SKUs.
"""

import json
import logging
import math
import re
from typing import Iterable, Optional

from bedrock_cost_calculator.common.models import CatalogKey, PriceRecord

logger = logging.getLogger(__name__)

SERVICE_CODE = "AmazonBedrock"
DEFAULT_PROVIDER = "AWS Bedrock"

INPUT_TOKENS_SUFFIX = "-input-tokens"
OUTPUT_TOKENS_SUFFIX = "-output-tokens"

# Non-text modalities and charges that are not per-token usage
EXCLUDED_USAGE_KEYWORDS = (
    "image",
    "audio",
    "video",
    "embedding",
    "guardrail",
    "customization",
    "storage",
    "provisionedthroughput",
)

# Bedrock usage types start with a short region code, e.g. "usw2-titantextg1-lite-input-tokens".
# Only the prefixes observed in the feed are recognized; others stay in the identifier.
REGION_PREFIX_PATTERN = re.compile(r"^(use1|usw2|aps\d+|eu\w+|can\d+|eun\d+|eus\d+|apn\d+)-")
MODIFIER_PATTERN = re.compile(r"-(batch|priority|flex|cross-region-global)")


class PricingFeedError(ValueError):
    """The raw pricing feed does not have the expected shape."""


def extract_model_id(usagetype: str) -> str:
    """
    Derive the model identifier from a lowercased Bedrock usage type.

    Args:
        usagetype: Lowercased ``usagetype`` attribute of a SKU

    Returns:
        Identifier without region prefix, token suffix and pricing modifiers
    """
    model_id = REGION_PREFIX_PATTERN.sub("", usagetype, count=1)
    model_id = model_id.replace(INPUT_TOKENS_SUFFIX, "", 1)
    model_id = model_id.replace(OUTPUT_TOKENS_SUFFIX, "", 1)
    return MODIFIER_PATTERN.sub("", model_id)


def is_text_token_usage(usagetype: str) -> bool:
    """Whether a lowercased usage type is a per-token text charge."""
    if INPUT_TOKENS_SUFFIX not in usagetype and OUTPUT_TOKENS_SUFFIX not in usagetype:
        return False
    return not any(keyword in usagetype for keyword in EXCLUDED_USAGE_KEYWORDS)


def extract_unit_price(pricing_terms: Optional[dict]) -> Optional[float]:
    """
    Read the USD unit price from the first term's first price dimension.

    Returns:
        The price, or None when it is absent, unparseable or zero
    """
    if not pricing_terms or not isinstance(pricing_terms, dict):
        return None

    first_term = next(iter(pricing_terms.values()), None)
    if not isinstance(first_term, dict):
        return None
    price_dimensions = first_term.get("priceDimensions")
    if not price_dimensions or not isinstance(price_dimensions, dict):
        return None

    first_dimension = next(iter(price_dimensions.values()), None)
    if not isinstance(first_dimension, dict):
        return None
    price_per_unit = first_dimension.get("pricePerUnit")
    if not isinstance(price_per_unit, dict):
        return None
    usd = price_per_unit.get("USD")
    if not usd or isinstance(usd, bool):
        return None

    try:
        price = float(usd)
    except (TypeError, ValueError):
        logger.debug("Ignoring unparseable USD price %r", usd)
        return None

    if not math.isfinite(price) or price <= 0:
        return None
    return price


def normalize_pricing_feed(feed: dict) -> list[PriceRecord]:
    """
    Normalize a raw Bedrock price list into complete catalog records.

    Args:
        feed: Parsed AWS Price List offer document

    Returns:
        One record per (model, region) with both input and output prices,
        in order of first discovery

    Raises:
        PricingFeedError: If ``products`` or ``terms.OnDemand`` is missing, or a
            product entry is not an object
    """
    if not isinstance(feed, dict):
        raise PricingFeedError("Pricing feed must be a JSON object")
    products = feed.get("products")
    terms = feed.get("terms")
    on_demand = terms.get("OnDemand") if isinstance(terms, dict) else None
    if not isinstance(products, dict) or not isinstance(on_demand, dict):
        raise PricingFeedError("Pricing feed must contain 'products' and 'terms.OnDemand'")

    records: dict[CatalogKey, PriceRecord] = {}

    for sku, product in products.items():
        if not isinstance(product, dict):
            raise PricingFeedError(f"Product {sku!r} is not an object")
        attributes = product.get("attributes") or {}
        if not isinstance(attributes, dict):
            raise PricingFeedError(f"Attributes of product {sku!r} are not an object")

        if attributes.get("servicecode") != SERVICE_CODE:
            continue
        if not isinstance(attributes.get("usagetype"), str) or not isinstance(attributes.get("regionCode"), str):
            continue
        if not attributes["usagetype"] or not attributes["regionCode"]:
            continue

        usagetype = attributes["usagetype"].lower()
        if not is_text_token_usage(usagetype):
            continue

        price = extract_unit_price(on_demand.get(sku))
        if price is None:
            continue

        key = CatalogKey(extract_model_id(usagetype), attributes["regionCode"])
        record = records.get(key)
        if record is None:
            record = PriceRecord(
                provider=attributes.get("providerName") or DEFAULT_PROVIDER,
                model_id=key.model_id,
                region=key.region,
            )
            records[key] = record

        if INPUT_TOKENS_SUFFIX in usagetype:
            record.input_cost = price
        if OUTPUT_TOKENS_SUFFIX in usagetype:
            record.output_cost = price

    complete = [record for record in records.values() if record.is_complete]
    logger.debug(
        "Dropped %d incomplete catalog entries", len(records) - len(complete)
    )
    return complete


def to_catalog_json(records: Iterable[PriceRecord]) -> str:
    """Serialize catalog records as the JSON array consumed by the app."""
    return json.dumps([record.to_dict() for record in records], indent=2)


def parse_catalog_json(payload) -> list[PriceRecord]:
    """
    Parse a normalized catalog document.

    Args:
        payload: JSON text or an already decoded list

    Returns:
        Catalog records with both costs set; entries missing a cost are dropped

    Raises:
        ValueError: If the payload is not a JSON array of catalog entries or
            a cost is not a finite number of zero or more
    """
    data = json.loads(payload) if isinstance(payload, (str, bytes)) else payload
    if not isinstance(data, list):
        raise ValueError("Normalized catalog must be a JSON array")
    if not all(isinstance(entry, dict) for entry in data):
        raise ValueError("Normalized catalog entries must be JSON objects")

    records = [PriceRecord.from_dict(entry) for entry in data]
    complete = [record for record in records if record.is_complete]
    if len(complete) < len(records):
        logger.debug(
            "Dropped %d catalog entries without both costs", len(records) - len(complete)
        )
    return complete
