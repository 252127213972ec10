"""Shared test fixtures for the chartgallery package."""

from datetime import date

import pytest

from chartgallery.store import DataStore

TODAY = date(2024, 6, 30)


@pytest.fixture
def store() -> DataStore:
    """Seeded store with a fixed calendar date."""
    return DataStore(seed=42, today=TODAY)


@pytest.fixture
def empty_store() -> DataStore:
    """Store with every list dataset cleared."""
    store = DataStore(seed=1, today=TODAY)
    for name in store.dataset_names():
        if name in ("correlation", "surface"):
            continue
        setattr(store, name, [])
    return store


@pytest.fixture
def renderer():
    pytest.importorskip("matplotlib")
    from chartgallery.render import ChartRenderer

    return ChartRenderer(figsize=(6, 3), dpi=40)
