"""
Shared fixtures for dialog_sdk tests.
"""

import logging

import pytest
from typing import Any

from pydantic import BaseModel, Field

from dialog_sdk.clients.dialog.models.registry import build_default_registry
from dialog_sdk.clients.dialog.models.Record import Record, RecordSet
from dialog_sdk.decoding.TaggedDecoder import TaggedDecoder
from dialog_sdk.decoding.TypeRegistry import TypeRegistry
from dialog_sdk.helper.HelperConfig import HelperConfig


class Foo(BaseModel):
    type: str | None = "Foo"
    id: int | None = None
    name: str | None = None
    child: Any = None
    items: list = Field(default_factory=list)


class Bar(BaseModel):
    type: str | None = "Bar"
    id: int | None = None


@pytest.fixture
def logger():
    return logging.getLogger("dialog_sdk.tests")


@pytest.fixture
def helper_config(logger):
    return HelperConfig(logger=logger)


@pytest.fixture
def foo_registry():
    """A small registry with two plain test types next to the dialog API redirections."""
    registry = build_default_registry()
    test_registry = TypeRegistry()
    for tag, cls in registry.classes.items():
        test_registry.register_class(tag, cls)
    test_registry.register_class("Foo", Foo)
    test_registry.register_class("Bar", Bar)
    return test_registry.freeze()


@pytest.fixture
def foo_decoder(foo_registry, logger):
    return TaggedDecoder(foo_registry, logger=logger)


@pytest.fixture
def dialog_decoder(logger):
    return TaggedDecoder(build_default_registry(), logger=logger)


@pytest.fixture
def make_records():
    """Build Records with the given ids.

    Usage:
        make_records("1", "2", "3")
    """
    def _make(*ids):
        return [Record(id=str(i)) for i in ids]
    return _make


@pytest.fixture
def make_record_set(make_records):
    def _make(ids, has_more=True):
        return RecordSet(records=make_records(*ids), hasMore=has_more)
    return _make


@pytest.fixture
def rest_env(monkeypatch):
    monkeypatch.setenv("DIALOG_REST_BASE_URL", "https://dialog.test")
    monkeypatch.delenv("DIALOG_REST_API_VERSION", raising=False)
    monkeypatch.delenv("DIALOG_REST_API_KEY", raising=False)
    monkeypatch.delenv("DIALOG_ENGINE", raising=False)
    monkeypatch.delenv("DIALOG_QUERY_PAGE_SIZE", raising=False)
