"""
Bedrock pricing sync job.

Downloads the AWS Bedrock price list, normalizes it and replaces the
normalized pricing file in one atomic rename. Meant to be run on a schedule:

    bedrock-pricing-sync [--url URL] [--output PATH]
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

import requests
from dotenv import load_dotenv

from bedrock_cost_calculator.catalog.normalizer import (
    PricingFeedError,
    normalize_pricing_feed,
    to_catalog_json,
)
from bedrock_cost_calculator.common.settings import (
    get_bedrock_pricing_url,
    get_catalog_path,
    get_http_timeout,
)
from bedrock_cost_calculator.common.utils import atomic_write_text

logger = logging.getLogger(__name__)


def fetch_pricing_feed(url: str, timeout: Optional[float] = None) -> dict:
    """
    Download the raw price list.

    Raises:
        requests.RequestException: On network errors or a non-success status
        ValueError: If the body is not JSON
    """
    logger.info("Fetching pricing feed from %s", url)
    response = requests.get(url, timeout=timeout or get_http_timeout())
    response.raise_for_status()
    return response.json()


def sync_pricing(url: str, output_path: Path) -> int:
    """
    Fetch, normalize and publish the pricing catalog.

    The output file is only replaced once the whole catalog has been built.

    Args:
        url: Price list URL
        output_path: Destination of the normalized JSON

    Returns:
        Number of catalog records written
    """
    feed = fetch_pricing_feed(url)
    records = normalize_pricing_feed(feed)
    atomic_write_text(Path(output_path), to_catalog_json(records))
    logger.info("Normalized %d entries into %s", len(records), output_path)
    return len(records)


def handler(event=None, context=None) -> dict:
    """Scheduled-function entry point."""
    count = sync_pricing(get_bedrock_pricing_url(), get_catalog_path())
    return {
        "statusCode": 200,
        "body": f"Bedrock pricing sync completed ({count} entries)",
    }


def main(argv: Optional[list[str]] = None) -> int:
    load_dotenv()

    parser = argparse.ArgumentParser(description="Normalize the AWS Bedrock price list.")
    parser.add_argument("--url", default=None, help="Price list URL")
    parser.add_argument("--output", type=Path, default=None, help="Normalized pricing JSON path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    try:
        sync_pricing(args.url or get_bedrock_pricing_url(), args.output or get_catalog_path())
    except (requests.RequestException, PricingFeedError, ValueError, OSError) as e:
        logger.error("Pricing sync failed: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
