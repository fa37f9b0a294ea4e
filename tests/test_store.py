from dataclasses import replace

import numpy as np
import pytest

from trefila_core.conversions import ConversionError
from trefila_core.engine import schedule_uniform
from trefila_core.models import DieSchedule, DrawingSpec, Recipe
from trefila_core.store import RecipeStore, RecipeStoreError, snapshot_recipe


@pytest.fixture
def store(tmp_path) -> RecipeStore:
    return RecipeStore(str(tmp_path / "recipes.yaml"))


def test_empty_store_loads_nothing(store: RecipeStore) -> None:
    assert store.load() == []
    assert store.get("missing") is None
    assert store.delete("missing") is False


def test_save_load_and_delete(store: RecipeStore, wire_rod_spec: DrawingSpec) -> None:
    recipe = snapshot_recipe("CA-60", wire_rod_spec, schedule_uniform(wire_rod_spec), date="2025-02-02")
    stored = store.save(recipe)

    assert stored.id
    assert stored.date == "2025-02-02"
    assert store.load() == [stored]
    assert store.get(stored.id) == stored

    assert store.delete(stored.id) is True
    assert store.load() == []


def test_save_replaces_recipe_with_same_id(store: RecipeStore, wire_rod_spec: DrawingSpec) -> None:
    first = store.save(snapshot_recipe("A", wire_rod_spec, DieSchedule((4.5, 4.0, 3.6, 3.2))))
    other = store.save(snapshot_recipe("B", wire_rod_spec, DieSchedule((4.6, 4.0, 3.6, 3.2))))
    renamed = store.save(replace(first, name="A2"))

    names = [r.name for r in store.load()]
    assert sorted(names) == ["A2", "B"]
    assert renamed.id == first.id
    assert other.id != first.id


def test_numpy_values_are_written_as_plain_numbers(store: RecipeStore) -> None:
    recipe = Recipe(
        name="np",
        date="2025-02-02",
        entry_diameter=np.float64(5.5),
        exit_diameter=np.float64(3.2),
        pass_count=np.int64(4),  # type: ignore[arg-type]
        diameters=tuple(np.array([4.7, 4.05, 3.56, 3.2])),
    )
    stored = store.save(recipe)

    with open(store.yaml_file, encoding="utf-8") as f:
        text = f.read()
    assert "numpy" not in text
    assert store.get(stored.id).diameters == (4.7, 4.05, 3.56, 3.2)


def test_snapshot_requires_name(wire_rod_spec: DrawingSpec) -> None:
    with pytest.raises(ConversionError):
        snapshot_recipe("   ", wire_rod_spec, DieSchedule((3.2,)))


def test_snapshot_is_dated_today_by_default(wire_rod_spec: DrawingSpec) -> None:
    recipe = snapshot_recipe("today", wire_rod_spec, DieSchedule((4.5, 4.0, 3.6, 3.2)))

    assert len(recipe.date) == 10
    assert recipe.pass_count == 4


def test_corrupt_file_raises_store_error(store: RecipeStore) -> None:
    with open(store.yaml_file, "w", encoding="utf-8") as f:
        f.write("recipes: [unclosed\n")

    with pytest.raises(RecipeStoreError):
        store.load()


@pytest.mark.parametrize(
    "content",
    [
        "recipes:\n  - name: broken\n    entry: 5.5\n",
        "recipes: 5\n",
        "recipes: [3]\n",
        "recipes:\n  - name: bad dies\n    entry: 5.5\n    exit: 3.2\n    passes: 1\n    dies: 7\n",
        "- 3\n",
    ],
)
def test_invalid_content_raises_store_error(
    store: RecipeStore, content: str, caplog: pytest.LogCaptureFixture
) -> None:
    with open(store.yaml_file, "w", encoding="utf-8") as f:
        f.write(content)

    with caplog.at_level("ERROR", logger="trefila_core.store"):
        with pytest.raises(RecipeStoreError):
            store.load()
    assert store.yaml_file in caplog.text
