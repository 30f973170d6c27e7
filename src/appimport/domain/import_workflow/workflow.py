"""Reconcile decoded bundles into application, version and category records.

Every step lists what already exists before writing, so a run that stopped halfway
(application created, payload missing, version never activated, ...) is completed
by simply importing the same bundles again.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING, Final

from appimport.domain.errors import NotFoundError
from appimport.domain.ids import generate_id
from appimport.domain.model import (
    ApplicationRecord,
    AuditEntry,
    CategoryRecord,
    ObjectMeta,
    OwnerReference,
    RecordKind,
    VersionMetadata,
    VersionRecord,
    VersionState,
)
from appimport.domain.model.constants import (
    API_GROUP,
    API_VERSION,
    APPLICATION_ID_LABEL,
    APPLICATION_ID_PREFIX,
    BUILTIN_LABEL,
    CATEGORY_ID_LABEL,
    CATEGORY_ID_PREFIX,
    CREATOR_ANNOTATION,
    STORE_APPLICATION_SUFFIX,
    SYSTEM_OPERATOR,
    SYSTEM_WORKSPACE,
    VERSION_ID_PREFIX,
    WORKSPACE_LABEL,
)

from .retry import retry_on_conflict

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from appimport.config.import_config import ImportConfig
    from appimport.domain.model import BundleDescriptor
    from appimport.domain.ports import BundleDecoder, ContentStore, IdGenerator, ResourceStore

log = getLogger(__name__)

RENAME_ATTEMPTS: Final[int] = 10
ACTIVATE_ATTEMPTS: Final[int] = 5


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True)
class ImportWorkflow:
    """Import engine bound to its stores and the run's import configuration."""

    store: ResourceStore
    content_store: ContentStore
    decoder: BundleDecoder
    config: ImportConfig
    new_id: IdGenerator = field(default=generate_id)
    now: Callable[[], datetime] = field(default=_utcnow)
    rename_attempts: int = RENAME_ATTEMPTS
    activate_attempts: int = ACTIVATE_ATTEMPTS

    def create_category(self, name: str) -> CategoryRecord:
        """Return the category called ``name``, creating it if no record has that name."""

        log.info("Resolving category %s", name)
        for category in self.store.categories.list():
            if category.display_name == name:
                return category

        icon = self.config.icon_for(name)
        category = CategoryRecord(
            meta=ObjectMeta(
                name=self.new_id(CATEGORY_ID_PREFIX),
                annotations={CREATOR_ANNOTATION: SYSTEM_OPERATOR},
            ),
            display_name=name,
            description=icon,
        )
        log.info("Creating category %s (%s), icon: %s", name, category.id, icon)
        return self.store.categories.create(category)

    def create_app(self, bundle: BundleDescriptor) -> ApplicationRecord:
        """Find the built-in application for ``bundle`` or create it.

        An application already carrying the resolved display name is reused as is. One
        still named after the bundle's intrinsic name (imported before a rename was
        configured) is renamed. Either way the store mirror follows the new name.
        """

        log.info("Start to create app, chart name: %s, version: %s", bundle.name, bundle.version)
        applications = self.store.applications.list({BUILTIN_LABEL: "true"})
        resolved_name = self.config.replace_app_name(bundle)

        for app in applications:
            if app.id.endswith(STORE_APPLICATION_SUFFIX):
                continue
            if app.display_name == resolved_name:
                log.info("Application %s already imported as %s", resolved_name, app.id)
                self.sync_store_app_name(app, resolved_name)
                return app
            if app.display_name == bundle.name:
                log.info("Chart name: %s, replace name: %s", bundle.name, resolved_name)
                renamed = self.update_app_name(app, resolved_name)
                self.sync_store_app_name(renamed, resolved_name)
                return renamed

        category: CategoryRecord | None = None
        if bundle.category:
            category = self.create_category(bundle.category)

        labels = {BUILTIN_LABEL: "true", WORKSPACE_LABEL: SYSTEM_WORKSPACE}
        if category is not None:
            labels[CATEGORY_ID_LABEL] = category.id
        annotations = self.config.annotations_for(bundle)
        annotations[CREATOR_ANNOTATION] = SYSTEM_OPERATOR

        app = ApplicationRecord(
            meta=ObjectMeta(
                name=self.new_id(APPLICATION_ID_PREFIX),
                labels=labels,
                annotations=annotations,
            ),
            display_name=resolved_name,
            description=bundle.description,
            icon=bundle.icon,
        )
        log.info("Creating application %s (%s)", resolved_name, app.id)
        return self.store.applications.create(app)

    def update_app_name(self, app: ApplicationRecord, name: str) -> ApplicationRecord:
        if app.display_name == name:
            return app

        def rename(record: ApplicationRecord) -> None:
            record.display_name = name

        renamed = retry_on_conflict(
            app,
            name=app.id,
            operation="rename application",
            attempts=self.rename_attempts,
            is_done=lambda record: record.display_name == name,
            mutate=rename,
            submit=self.store.applications.patch,
            fetch=self.store.applications.get,
        )
        log.info("Renamed application %s to %s", app.id, name)
        return renamed

    def sync_store_app_name(self, app: ApplicationRecord, name: str) -> ApplicationRecord | None:
        """Mirror ``name`` onto the application's store copy, if there is one."""

        try:
            mirror = self.store.applications.get(app.store_id)
        except NotFoundError:
            return None
        if mirror.display_name == name:
            return mirror
        return self.update_app_name(mirror, name)

    def create_app_version(self, app: ApplicationRecord, bundle_path: Path) -> VersionRecord:
        """Import the bundle at ``bundle_path`` as an active version of ``app``.

        The payload is uploaded before any record publishes its key, so a version never
        points at a missing object.
        """

        bundle = self.decoder.decode(bundle_path)
        log.info(
            "Start to create app version, chart name: %s, version: %s",
            bundle.name,
            bundle.version,
        )
        versions = self.store.versions.list({APPLICATION_ID_LABEL: app.application_id})

        target: VersionRecord | None = None
        for version in versions:
            if version.version != bundle.version:
                continue
            log.info(
                "Application version exists, name: %s, version: %s", version.id, bundle.version
            )
            if version.is_complete:
                return version
            target = version
            break

        version_id = target.id if target is not None else self.new_id(VERSION_ID_PREFIX)

        if target is None or not target.payload_key:
            with bundle_path.open("rb") as body:
                self.content_store.upload(app.workspace, version_id, body)
            log.info("Uploaded payload %s/%s", app.workspace, version_id)

        if target is None:
            target = self.store.versions.create(self._new_version(app, bundle, version_id))
            log.info("Created application version %s", version_id)
        elif not target.payload_key:
            target = self._publish_payload_key(target, version_id)

        return self.update_app_version_status(target)

    def update_app_version_status(self, version: VersionRecord) -> VersionRecord:
        """Move ``version`` to active, appending one audit entry with the write that does it."""

        log.info(
            "Update app version status, chart name: %s, version: %s",
            version.metadata.name,
            version.version,
        )
        if version.is_active:
            return version

        def activate(record: VersionRecord) -> None:
            record.status.state = VersionState.ACTIVE
            record.status.audit.append(
                AuditEntry(
                    state=VersionState.ACTIVE.value, time=self.now(), operator=SYSTEM_OPERATOR
                )
            )

        activated = retry_on_conflict(
            version,
            name=version.id,
            operation="activate application version",
            attempts=self.activate_attempts,
            is_done=lambda record: record.is_active,
            mutate=activate,
            submit=lambda _base, modified: self.store.versions.update_status(modified),
            fetch=self.store.versions.get,
        )
        log.info("Application version %s is active", version.id)
        return activated

    def _publish_payload_key(self, version: VersionRecord, key: str) -> VersionRecord:
        def set_key(record: VersionRecord) -> None:
            record.payload_key = key

        return retry_on_conflict(
            version,
            name=version.id,
            operation="publish payload key",
            attempts=self.rename_attempts,
            is_done=lambda record: bool(record.payload_key),
            mutate=set_key,
            submit=self.store.versions.patch,
            fetch=self.store.versions.get,
        )

    def _new_version(
        self, app: ApplicationRecord, bundle: BundleDescriptor, version_id: str
    ) -> VersionRecord:
        return VersionRecord(
            meta=ObjectMeta(
                name=version_id,
                labels={
                    APPLICATION_ID_LABEL: app.application_id,
                    WORKSPACE_LABEL: app.workspace,
                },
                annotations={CREATOR_ANNOTATION: SYSTEM_OPERATOR},
                owner_references=[
                    OwnerReference(
                        api_version=f"{API_GROUP}/{API_VERSION}",
                        kind=RecordKind.APPLICATION.value,
                        name=app.id,
                        uid=app.meta.uid,
                    )
                ],
            ),
            metadata=VersionMetadata(
                name=bundle.name,
                version=bundle.version,
                app_version=bundle.app_version,
                description=bundle.description,
                icon=bundle.icon,
                home=bundle.home,
                sources=list(bundle.sources),
                maintainers=list(bundle.maintainers),
                keywords=list(bundle.keywords),
            ),
            payload_key=version_id,
        )
