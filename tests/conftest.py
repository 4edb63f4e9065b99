"""Shared fixtures: a seeded store, an app over it, and a captured event sink."""

from collections.abc import Iterator

import pytest

from commentwall.config import AppConfig
from commentwall.security.audit import SecurityEvent, set_security_event_sink
from commentwall.store import DEFAULT_COMMENTS, Store, default_users
from commentwall.views import create_app

SECRET = "test-secret"


@pytest.fixture
def store() -> Store:
    return Store(default_users(), comments=DEFAULT_COMMENTS)


@pytest.fixture
def app(store: Store):
    return create_app(AppConfig(secret_key=SECRET), store=store)


@pytest.fixture
def events() -> Iterator[list[SecurityEvent]]:
    captured: list[SecurityEvent] = []
    previous = set_security_event_sink(captured.append)
    try:
        yield captured
    finally:
        set_security_event_sink(previous)
