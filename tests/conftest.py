"""Shared fixtures for the studio desk test suite."""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from studio_desk.main import app
from studio_desk.routing.domain import DEFAULT_RULEBOOK, ClassificationEngine
from studio_desk.routing.infrastructure import RuleBookManager


@pytest.fixture
def t0() -> datetime:
    return datetime(2026, 3, 8, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def engine() -> ClassificationEngine:
    return ClassificationEngine(DEFAULT_RULEBOOK)


@pytest.fixture
def manager() -> RuleBookManager:
    manager = RuleBookManager()
    manager.load(None)
    return manager


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
