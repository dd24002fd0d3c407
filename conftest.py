from __future__ import annotations

import itertools
import random
from datetime import datetime, timedelta

import pytest

from tuition_center.container import build_container
from tuition_center.store.memory_record_store import InMemoryRecordStore


@pytest.fixture
def clock():
    """Strictly increasing timestamps, one second apart."""
    ticks = itertools.count()
    start = datetime(2024, 3, 1, 9, 0, 0)
    return lambda: start + timedelta(seconds=next(ticks))


@pytest.fixture
def store(clock):
    return InMemoryRecordStore(clock=clock)


@pytest.fixture
def container(store):
    return build_container(store=store, organization={"name": "Test Tuition Center", "address": "1 Test Road"})


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
def app():
    from tuition_center.main import create_app

    return create_app("config.testing")


@pytest.fixture
def client(app):
    return app.test_client()
