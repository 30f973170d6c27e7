from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from appimport.config import ImportConfig
from appimport.domain.errors import TransportError
from appimport.domain.model import CategoryRecord, ObjectMeta
from appimport.domain.model.constants import CREATOR_ANNOTATION

if TYPE_CHECKING:
    from collections.abc import Callable

    from appimport.domain.import_workflow import ImportWorkflow
    from tests.helpers.stores import FakeResourceStore


def test_create_category_creates_missing_category(
    make_workflow: Callable[..., ImportWorkflow],
    resource_store: FakeResourceStore,
) -> None:
    workflow = make_workflow(ImportConfig(category_icon={"Database": "database"}))

    category = workflow.create_category("Database")

    assert category.id == "ctg-0001"
    assert category.display_name == "Database"
    assert category.description == "database"
    assert category.meta.annotations[CREATOR_ANNOTATION] == "admin"
    assert list(resource_store.categories.items) == ["ctg-0001"]


def test_create_category_defaults_icon(make_workflow: Callable[..., ImportWorkflow]) -> None:
    workflow = make_workflow()

    category = workflow.create_category("Networking")

    assert category.description == "documentation"


def test_create_category_reuses_existing_name(
    make_workflow: Callable[..., ImportWorkflow],
    resource_store: FakeResourceStore,
) -> None:
    existing = resource_store.categories.seed(
        CategoryRecord(meta=ObjectMeta(name="ctg-existing"), display_name="Database")
    )
    workflow = make_workflow()

    first = workflow.create_category("Database")
    second = workflow.create_category("Database")

    assert first.id == second.id == existing.id
    assert resource_store.categories.calls["create"] == 0


def test_create_category_matches_case_sensitively(
    make_workflow: Callable[..., ImportWorkflow],
    resource_store: FakeResourceStore,
) -> None:
    resource_store.categories.seed(
        CategoryRecord(meta=ObjectMeta(name="ctg-existing"), display_name="database")
    )
    workflow = make_workflow()

    category = workflow.create_category("Database")

    assert category.id != "ctg-existing"
    assert len(resource_store.categories.items) == 2


def test_create_category_propagates_store_errors(
    make_workflow: Callable[..., ImportWorkflow],
    resource_store: FakeResourceStore,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def broken_list(selector: object = None) -> list[CategoryRecord]:
        raise TransportError("api server down")

    monkeypatch.setattr(resource_store.categories, "list", broken_list)
    workflow = make_workflow()

    with pytest.raises(TransportError):
        workflow.create_category("Database")
