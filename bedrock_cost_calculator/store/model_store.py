"""
In-memory model collection behind the calculator UI.

Two tiers are kept in insertion order: default models (curated list enriched
from the catalog, editable for the session only) and custom models (added by
the user and persisted after every change). Models are addressed by their
stable ``id``; positional indexes into ``merged()`` are accepted too, but are
always resolved against the tiers as they are at call time.
"""

import json
import logging
import math
from typing import Iterable, Optional, Sequence, Union

from bedrock_cost_calculator.catalog.resolver import resolve_default_models
from bedrock_cost_calculator.common.models import Model, PriceRecord, Tier

logger = logging.getLogger(__name__)

CUSTOM_MODELS_KEY = "customModels"


class ModelValidationError(ValueError):
    """User input for a model is incomplete or invalid."""


class ModelNotFoundError(LookupError):
    """No model with the given id or index."""


def parse_cost(value, field_name: str) -> float:
    """
    Parse a user-supplied cost.

    Raises:
        ModelValidationError: If the value is missing, not a finite number or negative
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ModelValidationError(f"{field_name} is required")
    if isinstance(value, bool):
        raise ModelValidationError(f"{field_name} must be a number")
    try:
        cost = float(value)
    except (TypeError, ValueError):
        raise ModelValidationError(f"{field_name} must be a number")
    if not math.isfinite(cost):
        raise ModelValidationError(f"{field_name} must be a finite number")
    if cost < 0:
        raise ModelValidationError(f"{field_name} must be zero or more")
    return cost


def _require_text(value: Optional[str], field_name: str) -> str:
    text = (value or "").strip()
    if not text:
        raise ModelValidationError(f"{field_name} is required")
    return text


class ModelStore:
    """Default and custom models with a merged, ordered view."""

    def __init__(
        self,
        storage,
        defaults: Iterable[Model] = (),
        custom: Iterable[Model] = ()
    ):
        self.storage = storage
        self._defaults: list[Model] = list(defaults)
        self._custom: list[Model] = list(custom)

    @property
    def defaults(self) -> tuple[Model, ...]:
        return tuple(self._defaults)

    @property
    def custom(self) -> tuple[Model, ...]:
        return tuple(self._custom)

    def load(self, catalog: Sequence[PriceRecord]) -> None:
        """
        Populate both tiers.

        Defaults come from the curated list enriched with ``catalog``. Custom
        models come from storage; unreadable storage yields no custom models.
        """
        self._defaults = resolve_default_models(catalog)
        self._custom = self._load_custom()
        logger.info(
            "Loaded %d default and %d custom models",
            len(self._defaults), len(self._custom)
        )

    def _load_custom(self) -> list[Model]:
        try:
            stored = self.storage.get_item(CUSTOM_MODELS_KEY)
            if not stored:
                return []
            entries = json.loads(stored)
            if not isinstance(entries, list):
                raise ValueError("custom models must be a JSON array")
            return [Model.from_dict(entry, tier=Tier.CUSTOM) for entry in entries]
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning("Ignoring unreadable custom models: %s", e)
            return []

    def _commit(self, defaults: list[Model], custom: list[Model]) -> None:
        """
        Swap in new tiers, persisting the custom tier first when it changed.

        A failed write raises and leaves both tiers untouched.
        """
        if custom is not self._custom:
            payload = json.dumps([model.to_dict() for model in custom])
            self.storage.set_item(CUSTOM_MODELS_KEY, payload)
        self._defaults = defaults
        self._custom = custom

    def merged(self) -> list[Model]:
        return self._defaults + self._custom

    # Lookup

    def get(self, model_id: str) -> Model:
        for model in self.merged():
            if model.id == model_id:
                return model
        raise ModelNotFoundError(f"No model with id '{model_id}'")

    def index_of(self, model_id: str) -> int:
        for index, model in enumerate(self.merged()):
            if model.id == model_id:
                return index
        raise ModelNotFoundError(f"No model with id '{model_id}'")

    def _resolve_index(self, index: int) -> tuple[list[Model], int]:
        """Map a merged-view index to its tier list and offset within it."""
        defaults_count = len(self._defaults)
        if 0 <= index < defaults_count:
            return self._defaults, index
        if defaults_count <= index < defaults_count + len(self._custom):
            return self._custom, index - defaults_count
        raise ModelNotFoundError(f"No model at index {index}")

    # Mutations

    def add_custom(
        self,
        provider: str,
        name: str,
        regions: Union[str, Sequence[str]],
        input_cost,
        output_cost
    ) -> list[Model]:
        """
        Add a user model, one entry per region.

        Args:
            provider: Provider display name
            name: Model name
            regions: One region or several; blank entries are ignored
            input_cost: USD per 1K input tokens
            output_cost: USD per 1K output tokens

        Returns:
            The models created

        Raises:
            ModelValidationError: If any field is missing or invalid; nothing is added
            OSError: If the custom models cannot be saved; nothing is added
        """
        provider = _require_text(provider, "Provider")
        name = _require_text(name, "Model name")
        input_cost = parse_cost(input_cost, "Input cost")
        output_cost = parse_cost(output_cost, "Output cost")

        if isinstance(regions, str):
            regions = [regions]
        cleaned_regions = []
        for region in regions or []:
            region = (region or "").strip()
            if region and region not in cleaned_regions:
                cleaned_regions.append(region)
        if not cleaned_regions:
            raise ModelValidationError("Please select at least one region")

        created = [
            Model(provider, name, region, input_cost, output_cost, Tier.CUSTOM)
            for region in cleaned_regions
        ]
        self._commit(self._defaults, self._custom + created)
        logger.info("Added custom model %s in %d region(s)", name, len(created))
        return created

    def update_at(self, index: int, region: str, input_cost, output_cost) -> Model:
        """
        Overwrite region and costs of the model at a merged-view index.

        Raises:
            ModelValidationError: If the new values are invalid; nothing changes
            ModelNotFoundError: If the index is out of range
            OSError: If a custom model change cannot be saved; nothing changes
        """
        region = _require_text(region, "Region")
        input_cost = parse_cost(input_cost, "Input cost")
        output_cost = parse_cost(output_cost, "Output cost")

        tier_models, offset = self._resolve_index(index)
        model = tier_models[offset].copy(
            id=tier_models[offset].id,
            region=region,
            input_cost=input_cost,
            output_cost=output_cost,
        )
        updated = tier_models[:offset] + [model] + tier_models[offset + 1:]

        if tier_models is self._custom:
            self._commit(self._defaults, updated)
        else:
            self._commit(updated, self._custom)
        return model

    def update(self, model_id: str, region: str, input_cost, output_cost) -> Model:
        return self.update_at(self.index_of(model_id), region, input_cost, output_cost)

    def delete_at(self, index: int) -> Model:
        """
        Remove the model at a merged-view index.

        Raises:
            ModelNotFoundError: If the index is out of range
            OSError: If a custom model change cannot be saved; nothing changes
        """
        tier_models, offset = self._resolve_index(index)
        model = tier_models[offset]
        remaining = tier_models[:offset] + tier_models[offset + 1:]

        if tier_models is self._custom:
            self._commit(self._defaults, remaining)
        else:
            self._commit(remaining, self._custom)
        logger.info("Deleted %s model %s", model.tier.value, model.name)
        return model

    def delete(self, model_id: str) -> Model:
        return self.delete_at(self.index_of(model_id))

    def reset_custom(self) -> None:
        self._commit(self._defaults, [])

    # Queries

    def regions(self) -> list[str]:
        return list(dict.fromkeys(model.region for model in self.merged()))

    def providers(self, region: Optional[str] = None) -> list[str]:
        return list(dict.fromkeys(
            model.provider for model in self.merged()
            if not region or model.region == region
        ))

    def filter(self, provider: Optional[str] = None, region: Optional[str] = None) -> list[Model]:
        return [
            model for model in self.merged()
            if (not provider or model.provider == provider)
            and (not region or model.region == region)
        ]

    def models_in_region(self, region: str) -> list[Model]:
        return [model for model in self.merged() if model.region == region]
