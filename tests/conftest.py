"""Shared fixtures for the calculator tests."""

import pytest

from bedrock_cost_calculator.common.models import Model, PriceRecord, Tier
from bedrock_cost_calculator.store import MemoryStorage, ModelStore


class FeedBuilder:
    """Builds AWS Price List offer documents for normalizer tests."""

    def __init__(self):
        self.products = {}
        self.on_demand = {}

    def add(self, sku, usagetype, region="us-east-1", price="0.001",
            servicecode="AmazonBedrock", provider=None):
        attributes = {"servicecode": servicecode, "usagetype": usagetype, "regionCode": region}
        if provider:
            attributes["providerName"] = provider
        self.products[sku] = {"sku": sku, "attributes": attributes}
        if price is not None:
            self.on_demand[sku] = {
                f"{sku}.JRTCKXETXF": {
                    "priceDimensions": {
                        f"{sku}.JRTCKXETXF.6YS6EN2CT7": {
                            "unit": "1K tokens",
                            "pricePerUnit": {"USD": price},
                        }
                    }
                }
            }
        return self

    def build(self):
        return {"products": self.products, "terms": {"OnDemand": self.on_demand}}


@pytest.fixture
def feed_builder():
    return FeedBuilder()


@pytest.fixture
def catalog():
    return [
        PriceRecord("AWS Bedrock", "claude-3-haiku", "us-east-1", 0.00025, 0.00125),
        PriceRecord("AWS Bedrock", "titan-text-g1", "us-east-1", 0.0005, 0.0065),
        PriceRecord("AWS Bedrock", "llama3-70b-instruct", "ap-south-1", 0.00318, 0.0042),
        PriceRecord("AWS Bedrock", "mistral-large", "us-west-2", 0.004, 0.012),
        PriceRecord("AWS Bedrock", "Claude 3 Sonnet", "us-east-1", 0.0025, 0.0125),
    ]


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def store(storage):
    model_store = ModelStore(storage)
    model_store.load([])
    return model_store


@pytest.fixture
def sample_models():
    return [
        Model("AWS", "Claude 3 Haiku", "us-east-1", 0.00025, 0.00125, Tier.DEFAULT),
        Model("AWS", "Claude 3 Sonnet", "us-east-1", 0.003, 0.015, Tier.DEFAULT),
        Model("AWS", "Titan Text G1", "us-east-1", 0.0005, 0.0065, Tier.DEFAULT),
        Model("Meta", "Llama 3 Instruct (70B)", "mumbai", 0.00265, 0.0035, Tier.DEFAULT),
    ]
