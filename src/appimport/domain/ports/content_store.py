"""Port for the binary payload store."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from typing import BinaryIO


@runtime_checkable
class ContentStore(Protocol):
    """Object storage for bundle payloads. Uploading to an existing key overwrites it."""

    def upload(self, key_prefix: str, key: str, body: BinaryIO) -> None: ...
