"""Environment-driven settings. Call ``load_dotenv()`` before reading them."""

import os
from pathlib import Path
from typing import Optional

DEFAULT_BEDROCK_PRICING_URL = (
    "https://pricing.us-east-1.amazonaws.com/offers/v1.0/aws/AmazonBedrock/current/index.json"
)
DEFAULT_CATALOG_PATH = "normalized-pricing.json"
DEFAULT_CUSTOM_MODELS_PATH = ".custom-models.json"
DEFAULT_HTTP_TIMEOUT_SECONDS = 30.0


def get_catalog_path() -> Path:
    """Path of the normalized pricing file written by the sync job."""
    return Path(os.getenv("PRICING_CATALOG_PATH", DEFAULT_CATALOG_PATH))


def get_catalog_url() -> Optional[str]:
    """Optional HTTP location of the normalized pricing file; overrides the local path."""
    return os.getenv("PRICING_CATALOG_URL") or None


def get_custom_models_path() -> Path:
    return Path(os.getenv("CUSTOM_MODELS_PATH", DEFAULT_CUSTOM_MODELS_PATH))


def get_bedrock_pricing_url() -> str:
    return os.getenv("BEDROCK_PRICING_URL", DEFAULT_BEDROCK_PRICING_URL)


def get_http_timeout() -> float:
    value = os.getenv("HTTP_TIMEOUT_SECONDS")
    if not value:
        return DEFAULT_HTTP_TIMEOUT_SECONDS
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"HTTP_TIMEOUT_SECONDS must be a number, got '{value}'")
