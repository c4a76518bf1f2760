"""Pricing and model records shared by the catalog pipeline and the UI."""

import math
import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import NamedTuple, Optional


class Tier(str, Enum):
    """Where a model comes from: the curated baseline or the user."""

    DEFAULT = "default"
    CUSTOM = "custom"


class CatalogKey(NamedTuple):
    """Composite key of a normalized catalog entry."""

    model_id: str
    region: str


@dataclass
class PriceRecord:
    """
    One (model, region) entry of the normalized pricing catalog.

    Costs are USD per 1K tokens. They are ``None`` only while a record is
    being assembled by the normalizer.
    """

    provider: str
    model_id: str
    region: str
    input_cost: Optional[float] = None
    output_cost: Optional[float] = None

    @property
    def key(self) -> CatalogKey:
        return CatalogKey(self.model_id, self.region)

    @property
    def is_complete(self) -> bool:
        return self.input_cost is not None and self.output_cost is not None

    def to_dict(self) -> dict:
        return {
            "provider": self.provider,
            "name": self.model_id,
            "region": self.region,
            "inputCost": self.input_cost,
            "outputCost": self.output_cost,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PriceRecord":
        """
        Build a record from its JSON form.

        Accepts the ``modelName``, ``input_cost`` and ``output_cost`` aliases
        found in older catalog files.

        Raises:
            ValueError: If the name or region is missing or a cost is not numeric
        """
        name = data.get("name") or data.get("modelName")
        region = data.get("region")
        if not name or not region:
            raise ValueError(f"Catalog entry is missing name or region: {data!r}")

        return cls(
            provider=data.get("provider") or "AWS Bedrock",
            model_id=name,
            region=region,
            input_cost=_optional_float(_first_present(data, "inputCost", "input_cost")),
            output_cost=_optional_float(_first_present(data, "outputCost", "output_cost")),
        )


def new_model_id() -> str:
    return uuid.uuid4().hex


@dataclass
class Model:
    """A model the calculator can price."""

    provider: str
    name: str
    region: str
    input_cost: float
    output_cost: float
    tier: Tier = Tier.CUSTOM
    id: str = field(default_factory=new_model_id)

    @property
    def label(self) -> str:
        return f"{self.name} ({self.provider})"

    def copy(self, **changes) -> "Model":
        """Return a copy with a fresh id unless one is passed explicitly."""
        changes.setdefault("id", new_model_id())
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "provider": self.provider,
            "name": self.name,
            "region": self.region,
            "inputCost": self.input_cost,
            "outputCost": self.output_cost,
            "source": self.tier.value,
        }

    @classmethod
    def from_dict(cls, data: dict, tier: Tier = Tier.CUSTOM) -> "Model":
        """
        Build a model from its persisted JSON form.

        Entries saved before ids existed get a new one.

        Raises:
            KeyError: If a required field is missing
            ValueError: If a cost is not a finite number of zero or more
        """
        return cls(
            provider=data["provider"],
            name=data["name"],
            region=data["region"],
            input_cost=_price(data["inputCost"]),
            output_cost=_price(data["outputCost"]),
            tier=tier,
            id=data.get("id") or new_model_id(),
        )


def _first_present(data: dict, *keys: str):
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def _price(value) -> float:
    """Convert a stored cost, rejecting anything but a finite number >= 0."""
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValueError(f"Cost must be a number, got {value!r}")
    price = float(value)
    if not math.isfinite(price) or price < 0:
        raise ValueError(f"Cost must be a finite number of zero or more, got {value!r}")
    return price


def _optional_float(value) -> Optional[float]:
    if value is None:
        return None
    return _price(value)


# Baseline models, also the lookup keys for catalog enrichment
CURATED_DEFAULTS: tuple[Model, ...] = (
    Model("AWS", "Claude 3 Haiku", "us-east-1", 0.00025, 0.00125, Tier.DEFAULT, "curated-claude-3-haiku"),
    Model("AWS", "Claude 3 Sonnet", "us-east-1", 0.003, 0.015, Tier.DEFAULT, "curated-claude-3-sonnet"),
    Model("AWS", "Claude 3 Opus", "us-east-1", 0.015, 0.075, Tier.DEFAULT, "curated-claude-3-opus"),
    Model("AWS", "Titan Text G1", "us-east-1", 0.0005, 0.0065, Tier.DEFAULT, "curated-titan-text-g1"),
    Model("AWS", "Llama 3 Instruct (70B)", "mumbai", 0.00265, 0.0035, Tier.DEFAULT, "curated-llama-3-instruct-70b"),
)


def fallback_catalog() -> list[PriceRecord]:
    """Catalog served when no normalized pricing file exists."""
    return [
        PriceRecord(
            provider=model.provider,
            model_id=model.name,
            region=model.region,
            input_cost=model.input_cost,
            output_cost=model.output_cost,
        )
        for model in CURATED_DEFAULTS
    ]
