"""Port for reading bundle archives."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pathlib import Path

    from appimport.domain.model import BundleDescriptor


@runtime_checkable
class BundleDecoder(Protocol):
    """Decode the metadata embedded in a bundle file, raising ``DecodeError`` if malformed."""

    def decode(self, path: Path) -> BundleDescriptor: ...


class IdGenerator(Protocol):
    def __call__(self, prefix: str) -> str: ...
