"""Latest-version resolution.

This module owns the single operation of the project: validate a
namespace/artifact pair, issue one request through a `VersionSource` and
return the `version` string. Two entry-points share the same flow:

- `resolve_latest_version` is awaitable and raises typed errors.
- `latest_version` keeps the fire-and-forget callback contract: failures are
  logged and the callback simply never runs.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable

from adapters.version_sources import JitPackSource, YqlRelaySource
from core.config import AppSettings
from core.domain.errors import InvalidInputError, VersionLookupError
from core.domain.models import VersionQuery
from core.interfaces.version_source import VersionSource

logger = logging.getLogger(__name__)

VersionCallback = Callable[[str], Any]


def build_query(namespace: Any, artifact: Any) -> VersionQuery:
    """Validate raw inputs into a `VersionQuery`.

    Only real `str` instances are accepted; nothing is coerced.
    """

    if not isinstance(namespace, str) or not isinstance(artifact, str):
        raise InvalidInputError(
            "namespace and artifact required (both must be strings)",
            namespace=namespace,
            artifact=artifact,
        )
    return VersionQuery(namespace=namespace, artifact=artifact)


def default_source(settings: AppSettings, *, relay: bool | None = None) -> VersionSource:
    use_relay = settings.use_relay if relay is None else relay
    if use_relay:
        return YqlRelaySource(settings)
    return JitPackSource(settings)


class VersionFetcher:
    """Resolves the latest published version of an artifact.

    Each call is independent: besides configuration the fetcher only keeps
    strong references to in-flight callback tasks, so it is safe to share
    across concurrent tasks.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        source: VersionSource | None = None,
        relay: bool | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._source = source or default_source(self._settings, relay=relay)
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def source(self) -> VersionSource:
        return self._source

    def request_url(self, namespace: Any, artifact: Any) -> str:
        """URL that a lookup for this pair would hit (no network)."""

        return self._source.build_url(build_query(namespace, artifact))

    async def resolve_latest_version(self, namespace: Any, artifact: Any) -> str:
        """Return the latest version string for `namespace`/`artifact`.

        Raises:
            InvalidInputError: before any network activity.
            ParseFailureError: the response has no string `version`.
            TransportFailureError: network error or non-2xx response.
        """

        query = build_query(namespace, artifact)
        version = await self._source.fetch_latest(query)
        logger.info("Latest version of %s/%s is %s", query.namespace, query.artifact, version)
        return version

    @property
    def pending_tasks(self) -> frozenset[asyncio.Task[None]]:
        """Lookups scheduled by `latest_version` that have not finished yet."""

        return frozenset(self._pending)

    def latest_version(
        self,
        namespace: Any,
        artifact: Any,
        callback: VersionCallback | None = None,
    ) -> asyncio.Task[None] | None:
        """Schedule a lookup and hand the version to `callback`.

        Returns the scheduled task (callers may await or cancel it), or None
        when the call is rejected: bad names, missing callback, or no running
        event loop. The fetcher keeps the task alive until it finishes, so the
        return value may be dropped.
        """

        try:
            build_query(namespace, artifact)
        except InvalidInputError as exc:
            logger.error("Error: %s", exc)
            return None
        if callback is None or not callable(callback):
            logger.error("Error: callback required.")
            return None

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.error("Error: latest_version needs a running event loop.")
            return None

        task = loop.create_task(self._deliver(namespace, artifact, callback))
        self._pending.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task[None]) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Version callback raised: %r", exc)

    async def _deliver(self, namespace: str, artifact: str, callback: VersionCallback) -> None:
        try:
            version = await self.resolve_latest_version(namespace, artifact)
        except VersionLookupError as exc:
            logger.error("Error resolving %s/%s: %s", namespace, artifact, exc)
            return
        callback(version)
