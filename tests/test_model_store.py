import json

import pytest

from bedrock_cost_calculator.common.models import CURATED_DEFAULTS, Tier
from bedrock_cost_calculator.store import (
    CUSTOM_MODELS_KEY,
    JsonFileStorage,
    MemoryStorage,
    ModelNotFoundError,
    ModelStore,
    ModelValidationError,
)


def stored_custom(storage):
    return json.loads(storage.get_item(CUSTOM_MODELS_KEY))


def test_load_uses_curated_defaults_without_catalog(store):
    assert [m.name for m in store.defaults] == [m.name for m in CURATED_DEFAULTS]
    assert store.custom == ()


def test_load_enriches_defaults_from_catalog(storage, catalog):
    model_store = ModelStore(storage)
    model_store.load(catalog)

    sonnet = next(m for m in model_store.defaults if m.name == "Claude 3 Sonnet")
    assert sonnet.input_cost == 0.0025


def test_load_reads_persisted_custom_models():
    storage = MemoryStorage({CUSTOM_MODELS_KEY: json.dumps([
        {"provider": "Acme", "name": "acme-1", "region": "us-east-1",
         "inputCost": 0.001, "outputCost": 0.002, "source": "custom"},
    ])})
    model_store = ModelStore(storage)
    model_store.load([])

    assert len(model_store.custom) == 1
    custom = model_store.custom[0]
    assert custom.tier is Tier.CUSTOM
    assert custom.name == "acme-1"
    assert custom.id


@pytest.mark.parametrize("payload", ["not json", '{"a": 1}', '[{"name": "missing fields"}]'])
def test_load_fails_soft_on_bad_custom_storage(payload):
    model_store = ModelStore(MemoryStorage({CUSTOM_MODELS_KEY: payload}))
    model_store.load([])

    assert model_store.custom == ()
    assert len(model_store.defaults) == 5


def test_merged_is_defaults_then_custom(store):
    created = store.add_custom("Acme", "acme-1", "us-east-1", "0.001", "0.002")

    merged = store.merged()

    assert merged[:5] == list(store.defaults)
    assert merged[5:] == created
    merged.clear()
    assert len(store.merged()) == 6


def test_add_custom_fans_out_per_region(store, storage):
    created = store.add_custom("Meta", "Llama 3.1 8B", ["us-east-1", "mumbai"], 0.0003, 0.0006)

    assert len(created) == 2
    assert [m.region for m in created] == ["us-east-1", "mumbai"]
    assert {(m.provider, m.name, m.input_cost, m.output_cost) for m in created} == {
        ("Meta", "Llama 3.1 8B", 0.0003, 0.0006)
    }
    assert created[0].id != created[1].id
    assert [entry["region"] for entry in stored_custom(storage)] == ["us-east-1", "mumbai"]


def test_add_custom_skips_blank_and_duplicate_regions(store):
    created = store.add_custom("Acme", "acme-1", [" us-east-1 ", "", "us-east-1"], 0, 0)

    assert [m.region for m in created] == ["us-east-1"]


@pytest.mark.parametrize("provider,name,regions,input_cost,output_cost", [
    ("", "acme-1", ["us-east-1"], 0.1, 0.1),
    ("Acme", "  ", ["us-east-1"], 0.1, 0.1),
    ("Acme", "acme-1", [], 0.1, 0.1),
    ("Acme", "acme-1", ["  "], 0.1, 0.1),
    ("Acme", "acme-1", ["us-east-1"], "abc", 0.1),
    ("Acme", "acme-1", ["us-east-1"], 0.1, ""),
    ("Acme", "acme-1", ["us-east-1"], -0.1, 0.1),
])
def test_add_custom_rejects_invalid_input(store, storage, provider, name, regions, input_cost, output_cost):
    with pytest.raises(ModelValidationError):
        store.add_custom(provider, name, regions, input_cost, output_cost)

    assert store.custom == ()
    assert storage.writes == 0


def test_update_default_is_session_only(store, storage):
    updated = store.update_at(0, "us-west-2", "0.1", "0.2")

    assert store.defaults[0] is updated
    assert (updated.region, updated.input_cost, updated.output_cost) == ("us-west-2", 0.1, 0.2)
    assert storage.writes == 0


def test_update_custom_persists(store, storage):
    created = store.add_custom("Acme", "acme-1", "us-east-1", 0.001, 0.002)[0]

    store.update(created.id, "eu-west-1", 0.003, 0.004)

    assert stored_custom(storage)[0]["region"] == "eu-west-1"
    assert stored_custom(storage)[0]["inputCost"] == 0.003
    assert storage.writes == 2


def test_update_rejects_invalid_values_without_change(store):
    before = (store.defaults[0].region, store.defaults[0].input_cost)

    with pytest.raises(ModelValidationError):
        store.update_at(0, "us-east-1", "free", 0.1)

    assert (store.defaults[0].region, store.defaults[0].input_cost) == before


def test_delete_default_does_not_touch_storage(store, storage):
    store.add_custom("Acme", "acme-1", "us-east-1", 0.001, 0.002)
    writes = storage.writes

    removed = store.delete_at(0)

    assert removed.tier is Tier.DEFAULT
    assert len(store.defaults) == 4
    assert storage.writes == writes
    assert len(stored_custom(storage)) == 1


def test_delete_custom_persists(store, storage):
    first, second = store.add_custom("Acme", "acme-1", ["us-east-1", "mumbai"], 0.001, 0.002)

    store.delete(first.id)

    assert store.custom == (second,)
    assert [entry["id"] for entry in stored_custom(storage)] == [second.id]


def test_index_resolution_uses_current_defaults_length(store):
    custom = store.add_custom("Acme", "acme-1", "us-east-1", 0.001, 0.002)[0]
    assert store.index_of(custom.id) == 5

    store.delete_at(0)

    assert store.index_of(custom.id) == 4
    store.delete_at(4)
    assert store.custom == ()
    assert len(store.defaults) == 4


def test_ids_stay_valid_after_other_deletions(store):
    target = store.defaults[3]

    store.delete(store.defaults[0].id)
    store.update(target.id, "mumbai", 1, 2)

    assert store.get(target.id).region == "mumbai"


def test_unknown_id_or_index_raises(store):
    with pytest.raises(ModelNotFoundError):
        store.delete("missing")
    with pytest.raises(ModelNotFoundError):
        store.delete_at(99)
    with pytest.raises(ModelNotFoundError):
        store.update_at(-1, "us-east-1", 0, 0)


def test_reset_custom_clears_and_persists(store, storage):
    store.add_custom("Acme", "acme-1", "us-east-1", 0.001, 0.002)

    store.reset_custom()

    assert store.custom == ()
    assert stored_custom(storage) == []
    assert len(store.defaults) == 5


def test_queries(store):
    store.add_custom("Acme", "acme-1", "eu-west-1", 0.001, 0.002)

    assert store.regions() == ["us-east-1", "mumbai", "eu-west-1"]
    assert store.providers() == ["AWS", "Acme"]
    assert store.providers("eu-west-1") == ["Acme"]
    assert [m.name for m in store.filter(region="mumbai")] == ["Llama 3 Instruct (70B)"]
    assert [m.name for m in store.filter(provider="Acme", region="us-east-1")] == []
    assert len(store.models_in_region("us-east-1")) == 4


def test_custom_models_survive_reload(tmp_path):
    storage = JsonFileStorage(tmp_path / "custom.json")
    first = ModelStore(storage)
    first.load([])
    created = first.add_custom("Acme", "acme-1", ["us-east-1", "mumbai"], 0.001, 0.002)
    first.delete_at(0)

    second = ModelStore(JsonFileStorage(tmp_path / "custom.json"))
    second.load([])

    assert [m.id for m in second.custom] == [m.id for m in created]
    assert len(second.defaults) == 5


def test_json_file_storage_round_trip(tmp_path):
    storage = JsonFileStorage(tmp_path / "nested" / "store.json")

    assert storage.get_item("missing") is None
    storage.set_item("a", "1")
    storage.set_item("b", "2")

    assert storage.get_item("a") == "1"
    assert json.loads((tmp_path / "nested" / "store.json").read_text()) == {"a": "1", "b": "2"}
    assert list((tmp_path / "nested").iterdir()) == [tmp_path / "nested" / "store.json"]


class FailingStorage(MemoryStorage):
    """Storage whose writes fail, as on a read-only or full disk."""

    def __init__(self, items=None):
        super().__init__(items)
        self.fail = False

    def set_item(self, key, value):
        if self.fail:
            raise OSError("No space left on device")
        super().set_item(key, value)


@pytest.fixture
def failing_store():
    storage = FailingStorage()
    model_store = ModelStore(storage)
    model_store.load([])
    model_store.add_custom("Acme", "acme-1", "us-east-1", 0.001, 0.002)
    storage.fail = True
    return model_store


def test_failed_save_leaves_custom_tier_unchanged(failing_store):
    before = failing_store.merged()
    custom = failing_store.custom[0]

    with pytest.raises(OSError):
        failing_store.add_custom("Acme", "acme-2", ["us-east-1", "mumbai"], 0.1, 0.2)
    with pytest.raises(OSError):
        failing_store.update(custom.id, "eu-west-1", 0.5, 0.5)
    with pytest.raises(OSError):
        failing_store.delete(custom.id)
    with pytest.raises(OSError):
        failing_store.reset_custom()

    assert failing_store.merged() == before
    assert (custom.region, custom.input_cost) == ("us-east-1", 0.001)
    assert stored_custom(failing_store.storage)[0]["name"] == "acme-1"


def test_default_tier_changes_need_no_storage(failing_store):
    target = failing_store.defaults[0]

    failing_store.update(target.id, "us-west-2", 0.1, 0.2)
    failing_store.delete(failing_store.defaults[1].id)

    assert failing_store.get(target.id).region == "us-west-2"
    assert len(failing_store.defaults) == 4


@pytest.mark.parametrize("cost", [float("inf"), "inf", "-Infinity", float("nan"), "nan"])
def test_non_finite_costs_are_rejected(store, storage, cost):
    with pytest.raises(ModelValidationError):
        store.add_custom("Acme", "acme-1", "us-east-1", cost, 0.1)

    assert store.custom == ()
    assert storage.writes == 0


@pytest.mark.parametrize("cost", [-0.5, "NaN", {"a": 1}, True])
def test_persisted_entries_with_invalid_costs_are_ignored(cost):
    storage = MemoryStorage({CUSTOM_MODELS_KEY: json.dumps([
        {"provider": "Acme", "name": "acme-1", "region": "us-east-1", "inputCost": cost, "outputCost": 0.002},
    ])})
    model_store = ModelStore(storage)
    model_store.load([])

    assert model_store.custom == ()
