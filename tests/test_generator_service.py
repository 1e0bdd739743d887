from __future__ import annotations

import pytest

from idworker.core.config import settings
from idworker.core.exceptions import InvalidIdentityError
from idworker.services import generator as service
from idworker.utils.snowflake import parse_id


@pytest.fixture(autouse=True)
def clean_generator():
    service.reset_generator()
    yield
    service.reset_generator()


def test_get_generator_requires_init() -> None:
    with pytest.raises(RuntimeError):
        service.get_generator()

    with pytest.raises(RuntimeError):
        service.generate_id()


def test_init_generator_with_explicit_identity() -> None:
    created = service.init_generator(worker_id=12, datacenter_id=21)

    assert service.get_generator() is created

    parts = parse_id(service.generate_id())
    assert parts.worker_id == 12
    assert parts.datacenter_id == 21


def test_init_generator_reads_settings(monkeypatch) -> None:
    monkeypatch.setattr(settings, "WORKER_ID", 7)
    monkeypatch.setattr(settings, "DATACENTER_ID", 9)

    created = service.init_generator()

    assert created.worker_id == 7
    assert created.datacenter_id == 9


def test_invalid_settings_keep_previous_generator(monkeypatch) -> None:
    previous = service.init_generator(worker_id=1, datacenter_id=1)
    monkeypatch.setattr(settings, "WORKER_ID", 40)

    with pytest.raises(InvalidIdentityError):
        service.init_generator()

    assert service.get_generator() is previous


def test_init_generator_replaces_existing() -> None:
    first = service.init_generator(worker_id=1, datacenter_id=1)
    second = service.init_generator(worker_id=2, datacenter_id=2)

    assert first is not second
    assert service.get_generator() is second


def test_generate_id_is_unique() -> None:
    service.init_generator(worker_id=3, datacenter_id=3)

    ids = {service.generate_id() for _ in range(100)}

    assert len(ids) == 100
