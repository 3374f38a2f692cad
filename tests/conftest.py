"""Root pytest fixtures for handler-errors tests."""

from __future__ import annotations

import io
from collections.abc import Iterator

import pytest

from handler_errors.catalog import CatalogRegistry, get_catalog_registry, set_catalog_registry
from handler_errors.core import (
    CapabilityRegistry,
    get_capability_registry,
    set_capability_registry,
)
from handler_errors.loggers import HandlerErrorsLogger, LogLevel, clear_log_context


@pytest.fixture(autouse=True)
def capability_registry() -> Iterator[CapabilityRegistry]:
    """Install a fresh capability registry for each test."""
    previous = get_capability_registry()
    registry = CapabilityRegistry()
    set_capability_registry(registry)
    yield registry
    set_capability_registry(previous)


@pytest.fixture(autouse=True)
def catalog_registry() -> Iterator[CatalogRegistry]:
    """Install a fresh catalog registry for each test."""
    previous = get_catalog_registry()
    registry = CatalogRegistry()
    set_catalog_registry(registry)
    yield registry
    set_catalog_registry(previous)


@pytest.fixture
def log_stream() -> Iterator[io.StringIO]:
    """Route structured log output to an in-memory text stream."""
    stream = io.StringIO()
    HandlerErrorsLogger.configure(level=LogLevel.DEBUG, format="text", stream=stream)
    yield stream
    HandlerErrorsLogger.reset()


@pytest.fixture
def json_log_stream() -> Iterator[io.StringIO]:
    """Route structured log output to a stream as JSON lines."""
    stream = io.StringIO()
    HandlerErrorsLogger.configure(level=LogLevel.DEBUG, format="json", stream=stream)
    yield stream
    HandlerErrorsLogger.reset()


@pytest.fixture(autouse=True)
def log_context() -> Iterator[None]:
    """Start every test with an empty logging context."""
    clear_log_context()
    yield
    clear_log_context()
