"""Shared fixtures for the test suite."""

from __future__ import annotations

import pytest

from core.registry import FetcherRegistry
from models.company import CheckMethod
from storage.memory import InMemoryCompanyRepository
from tests.helpers import FakeSource


@pytest.fixture
def repository() -> InMemoryCompanyRepository:
    return InMemoryCompanyRepository()


@pytest.fixture
def feed_source() -> FakeSource:
    return FakeSource(CheckMethod.FEED)


@pytest.fixture
def page_source() -> FakeSource:
    return FakeSource(CheckMethod.SCRAPE)


@pytest.fixture
def registry(feed_source: FakeSource, page_source: FakeSource) -> FetcherRegistry:
    registry = FetcherRegistry()
    registry.register(feed_source)
    registry.register(page_source)
    return registry
