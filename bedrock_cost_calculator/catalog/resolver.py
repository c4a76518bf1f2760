"""Enrichment of the curated default models with catalog prices."""

import logging
from typing import Optional, Sequence

from bedrock_cost_calculator.common.models import (
    CURATED_DEFAULTS,
    CatalogKey,
    Model,
    PriceRecord,
    Tier,
)

logger = logging.getLogger(__name__)


def find_catalog_record(
    catalog: Sequence[PriceRecord],
    name: str,
    region: str
) -> Optional[PriceRecord]:
    """Return the first record whose identifier and region equal ``name`` and ``region`` exactly."""
    key = CatalogKey(name, region)
    return next((record for record in catalog if record.key == key), None)


def resolve_default_models(
    catalog: Sequence[PriceRecord],
    curated: Sequence[Model] = CURATED_DEFAULTS
) -> list[Model]:
    """
    Build the default model set from the curated list and the pricing catalog.

    A curated model whose name and region match a catalog record (case-sensitive)
    takes that record's prices; any other keeps its built-in prices. With an
    empty catalog the curated list is returned as is.

    Args:
        catalog: Normalized pricing catalog
        curated: Baseline models, in display order

    Returns:
        Fresh default-tier copies of ``curated``, in the same order
    """
    if not catalog:
        logger.info("Pricing catalog is empty, using %d curated defaults", len(curated))
        return [model.copy(tier=Tier.DEFAULT) for model in curated]

    resolved = []
    enriched = 0
    for model in curated:
        record = find_catalog_record(catalog, model.name, model.region)
        if record is not None and record.is_complete:
            resolved.append(model.copy(
                tier=Tier.DEFAULT,
                input_cost=record.input_cost,
                output_cost=record.output_cost,
            ))
            enriched += 1
        else:
            resolved.append(model.copy(tier=Tier.DEFAULT))

    logger.info("Enriched %d of %d default models from the catalog", enriched, len(curated))
    return resolved
