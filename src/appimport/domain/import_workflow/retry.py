"""Optimistic-concurrency retry loop: mutate the latest copy, submit, re-read on conflict."""

from __future__ import annotations

import copy
from logging import getLogger
from typing import TYPE_CHECKING

from appimport.domain.errors import ConflictError, ExhaustedRetriesError

if TYPE_CHECKING:
    from collections.abc import Callable

log = getLogger(__name__)


def retry_on_conflict[TRecord](
    record: TRecord,
    *,
    name: str,
    operation: str,
    attempts: int,
    is_done: Callable[[TRecord], bool],
    mutate: Callable[[TRecord], None],
    submit: Callable[[TRecord, TRecord], TRecord],
    fetch: Callable[[str], TRecord],
) -> TRecord:
    """Apply ``mutate`` to ``record`` and write it back, retrying on stale revisions.

    ``mutate`` edits a deep copy of the latest observed record in place; ``submit``
    receives ``(base, modified)`` and performs the compare-and-swap write. When the
    write is rejected with ``ConflictError`` the record is re-read by ``name`` and the
    mutation is applied again on the fresh copy, so a stale payload is never
    resubmitted. ``is_done`` is checked before every attempt; a record that already
    satisfies it is returned without writing. Other errors propagate unchanged.
    """

    current = record
    for attempt in range(attempts):
        if is_done(current):
            return current

        modified = copy.deepcopy(current)
        mutate(modified)
        try:
            updated = submit(current, modified)
        except ConflictError as exc:
            log.warning(
                "%s %s conflicted, attempt %d/%d: %s",
                operation,
                name,
                attempt + 1,
                attempts,
                exc,
            )
        else:
            log.debug("%s %s succeeded on attempt %d", operation, name, attempt + 1)
            return updated

        current = fetch(name)

    if is_done(current):
        return current
    raise ExhaustedRetriesError(operation, name, attempts)
