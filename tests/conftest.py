from __future__ import annotations

import itertools
from typing import TYPE_CHECKING

import pytest

from appimport.config import ImportConfig
from appimport.domain.import_workflow import ImportWorkflow
from tests.helpers.clock import FIXED_NOW
from tests.helpers.stores import FakeBundleDecoder, FakeContentStore, FakeResourceStore

if TYPE_CHECKING:
    from collections.abc import Callable


@pytest.fixture
def resource_store() -> FakeResourceStore:
    return FakeResourceStore.empty()


@pytest.fixture
def content_store() -> FakeContentStore:
    return FakeContentStore()


@pytest.fixture
def decoder() -> FakeBundleDecoder:
    return FakeBundleDecoder()


@pytest.fixture
def sequential_ids() -> Callable[[str], str]:
    counter = itertools.count(1)

    def new_id(prefix: str) -> str:
        return f"{prefix}{next(counter):04d}"

    return new_id


@pytest.fixture
def make_workflow(
    resource_store: FakeResourceStore,
    content_store: FakeContentStore,
    decoder: FakeBundleDecoder,
    sequential_ids: Callable[[str], str],
) -> Callable[..., ImportWorkflow]:
    def factory(config: ImportConfig | None = None) -> ImportWorkflow:
        return ImportWorkflow(
            store=resource_store.as_port(),
            content_store=content_store,
            decoder=decoder,
            config=config or ImportConfig(),
            new_id=sequential_ids,
            now=lambda: FIXED_NOW,
        )

    return factory
