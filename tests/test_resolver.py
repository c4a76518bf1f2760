from bedrock_cost_calculator.catalog.resolver import find_catalog_record, resolve_default_models
from bedrock_cost_calculator.common.models import CURATED_DEFAULTS, PriceRecord, Tier


def test_empty_catalog_returns_curated_defaults():
    resolved = resolve_default_models([])

    assert [(m.name, m.region, m.input_cost, m.output_cost) for m in resolved] == [
        (m.name, m.region, m.input_cost, m.output_cost) for m in CURATED_DEFAULTS
    ]
    assert all(m.tier is Tier.DEFAULT for m in resolved)


def test_exact_match_overrides_costs(catalog):
    resolved = resolve_default_models(catalog)

    sonnet = next(m for m in resolved if m.name == "Claude 3 Sonnet")
    assert sonnet.input_cost == 0.0025
    assert sonnet.output_cost == 0.0125
    assert sonnet.provider == "AWS"
    assert sonnet.region == "us-east-1"


def test_non_matching_defaults_keep_placeholder_costs(catalog):
    resolved = resolve_default_models(catalog)

    # "claude-3-haiku" is not an exact match for "Claude 3 Haiku"
    haiku = next(m for m in resolved if m.name == "Claude 3 Haiku")
    assert haiku.input_cost == 0.00025
    assert haiku.output_cost == 0.00125


def test_region_must_match():
    catalog = [PriceRecord("AWS Bedrock", "Claude 3 Opus", "us-west-2", 0.02, 0.09)]

    opus = next(m for m in resolve_default_models(catalog) if m.name == "Claude 3 Opus")

    assert opus.input_cost == 0.015
    assert opus.output_cost == 0.075


def test_order_preserved_and_curated_untouched(catalog):
    before = [(m.name, m.input_cost) for m in CURATED_DEFAULTS]

    resolved = resolve_default_models(catalog)

    assert [m.name for m in resolved] == [m.name for m in CURATED_DEFAULTS]
    assert [(m.name, m.input_cost) for m in CURATED_DEFAULTS] == before
    assert all(r is not c for r, c in zip(resolved, CURATED_DEFAULTS))


def test_resolved_models_get_distinct_ids():
    first = resolve_default_models([])
    second = resolve_default_models([])

    ids = {m.id for m in first} | {m.id for m in second}
    assert len(ids) == 2 * len(CURATED_DEFAULTS)


def test_find_catalog_record_is_case_sensitive(catalog):
    assert find_catalog_record(catalog, "Claude 3 Sonnet", "us-east-1") is catalog[4]
    assert find_catalog_record(catalog, "claude 3 sonnet", "us-east-1") is None
