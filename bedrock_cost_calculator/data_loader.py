"""Catalog loading and session store wiring for the app."""

import logging
from pathlib import Path
from typing import Optional

import requests
import streamlit as st

from bedrock_cost_calculator.catalog.normalizer import parse_catalog_json
from bedrock_cost_calculator.common.models import PriceRecord, fallback_catalog
from bedrock_cost_calculator.common.settings import (
    get_catalog_path,
    get_catalog_url,
    get_custom_models_path,
    get_http_timeout,
)
from bedrock_cost_calculator.store import JsonFileStorage, ModelStore

logger = logging.getLogger(__name__)


def read_catalog_file(path: Path) -> list[PriceRecord]:
    """
    Read the normalized catalog from disk.

    When the file does not exist the hardcoded fallback catalog is returned,
    whose values equal the curated default models.

    Args:
        path: Location of the normalized pricing JSON

    Returns:
        Catalog records

    Raises:
        ValueError: If the file exists but is not a valid catalog
    """
    path = Path(path)
    if not path.exists():
        logger.info("Pricing file %s not found, using fallback catalog", path)
        return fallback_catalog()

    records = parse_catalog_json(path.read_text(encoding="utf-8"))
    logger.info("Pricing data read from %s (%d entries)", path, len(records))
    return records


def fetch_catalog(url: str, timeout: Optional[float] = None) -> list[PriceRecord]:
    """
    Fetch the normalized catalog over HTTP.

    Raises:
        requests.RequestException: On network errors or a non-success status
        ValueError: If the payload is not a valid catalog
    """
    response = requests.get(url, timeout=timeout or get_http_timeout())
    response.raise_for_status()
    return parse_catalog_json(response.json())


def load_catalog_uncached(
    url: Optional[str] = None,
    path: Optional[Path] = None
) -> list[PriceRecord]:
    """
    Load the pricing catalog, never failing.

    Any network, file or format error results in an empty catalog, which makes
    the model store fall back to the curated defaults.

    Args:
        url: HTTP location of the catalog; takes precedence over ``path``
        path: Local catalog file

    Returns:
        Catalog records, possibly empty
    """
    try:
        if url:
            return fetch_catalog(url)
        return read_catalog_file(path or get_catalog_path())
    except (requests.RequestException, OSError, ValueError) as e:
        logger.error("Pricing catalog load failed, using curated defaults: %s", e)
        return []


@st.cache_data(ttl=60)
def load_catalog() -> list[PriceRecord]:
    """Load the pricing catalog from the configured URL or file."""
    return load_catalog_uncached(url=get_catalog_url(), path=get_catalog_path())


def get_model_store() -> ModelStore:
    """
    Return the model store of the current session, creating it on first use.

    Returns:
        The session's ModelStore
    """
    if "model_store" not in st.session_state:
        store = ModelStore(JsonFileStorage(get_custom_models_path()))
        store.load(load_catalog())
        st.session_state["model_store"] = store
    return st.session_state["model_store"]
