"""Tests for VersionFetcher (awaitable and callback forms)."""

from __future__ import annotations

import asyncio
import gc
import logging
from unittest.mock import MagicMock

import httpx
import pytest

from adapters.version_sources import JitPackSource, YqlRelaySource
from core.domain.errors import InvalidInputError, ParseFailureError, TransportFailureError
from core.services.version_fetcher import VersionFetcher, build_query


NON_STRINGS = [None, 42, 4.2, ["acme"], {"acme": 1}, b"acme"]


def _fetcher(settings, transport, *, relay: bool = False) -> VersionFetcher:
    source_cls = YqlRelaySource if relay else JitPackSource
    return VersionFetcher(settings, source=source_cls(settings, transport=transport))


class TestBuildQuery:
    @pytest.mark.parametrize("bad", NON_STRINGS)
    def test_rejects_non_string_namespace(self, bad) -> None:
        with pytest.raises(InvalidInputError):
            build_query(bad, "widget")

    @pytest.mark.parametrize("bad", NON_STRINGS)
    def test_rejects_non_string_artifact(self, bad) -> None:
        with pytest.raises(InvalidInputError):
            build_query("acme", bad)

    def test_accepts_strings(self) -> None:
        query = build_query("acme", "widget")

        assert (query.namespace, query.artifact) == ("acme", "widget")


class TestSourceSelection:
    def test_direct_by_default(self, settings) -> None:
        assert isinstance(VersionFetcher(settings).source, JitPackSource)

    def test_relay_from_settings(self, settings) -> None:
        relay_settings = settings.model_copy(update={"use_relay": True})

        assert isinstance(VersionFetcher(relay_settings).source, YqlRelaySource)

    def test_explicit_flag_wins_over_settings(self, settings) -> None:
        relay_settings = settings.model_copy(update={"use_relay": True})

        assert isinstance(VersionFetcher(relay_settings, relay=False).source, JitPackSource)

    def test_request_url(self, settings) -> None:
        fetcher = VersionFetcher(settings)

        assert fetcher.request_url("acme", "widget") == "https://jitpack.io/api/builds/acme/widget/latest"


class TestResolveLatestVersion:
    async def test_direct_variant(self, settings, json_transport) -> None:
        transport = json_transport({"version": "2.4"})

        version = await _fetcher(settings, transport).resolve_latest_version("acme", "widget")

        assert version == "2.4"
        assert len(transport.requests) == 1

    async def test_relay_variant(self, settings, json_transport) -> None:
        transport = json_transport({"query": {"results": {"json": {"version": "1.0.0"}}}})

        version = await _fetcher(settings, transport, relay=True).resolve_latest_version(
            "acme", "widget"
        )

        assert version == "1.0.0"

    @pytest.mark.parametrize("bad", NON_STRINGS)
    async def test_invalid_input_never_hits_network(self, settings, json_transport, bad) -> None:
        transport = json_transport({"version": "2.4"})

        with pytest.raises(InvalidInputError):
            await _fetcher(settings, transport).resolve_latest_version(bad, "widget")

        assert transport.requests == []

    async def test_parse_failure_propagates(self, settings, json_transport) -> None:
        with pytest.raises(ParseFailureError):
            await _fetcher(settings, json_transport({})).resolve_latest_version("acme", "widget")

    async def test_transport_failure_propagates(self, settings, json_transport) -> None:
        with pytest.raises(TransportFailureError):
            await _fetcher(settings, json_transport({}, 503)).resolve_latest_version(
                "acme", "widget"
            )


class TestLatestVersionCallback:
    async def test_callback_invoked_once_with_version(self, settings, json_transport) -> None:
        callback = MagicMock()
        transport = json_transport({"version": "2.4"})

        task = _fetcher(settings, transport).latest_version("acme", "widget", callback)
        assert task is not None
        await task

        callback.assert_called_once_with("2.4")
        assert str(transport.requests[0].url) == "https://jitpack.io/api/builds/acme/widget/latest"

    async def test_relay_callback(self, settings, json_transport) -> None:
        callback = MagicMock()
        transport = json_transport({"query": {"results": {"json": {"version": "1.0.0"}}}})

        await _fetcher(settings, transport, relay=True).latest_version("acme", "widget", callback)

        callback.assert_called_once_with("1.0.0")

    async def test_returns_before_response(self, settings, recording_transport) -> None:
        callback = MagicMock()
        transport = recording_transport(lambda request: httpx.Response(200, json={"version": "2.4"}))

        task = _fetcher(settings, transport).latest_version("acme", "widget", callback)

        callback.assert_not_called()
        await task
        callback.assert_called_once_with("2.4")

    @pytest.mark.parametrize("bad", NON_STRINGS)
    async def test_invalid_names_log_and_skip(self, settings, json_transport, caplog, bad) -> None:
        caplog.set_level(logging.ERROR)
        callback = MagicMock()
        transport = json_transport({"version": "2.4"})

        task = _fetcher(settings, transport).latest_version("acme", bad, callback)
        await asyncio.sleep(0)

        assert task is None
        assert transport.requests == []
        callback.assert_not_called()
        assert "namespace and artifact required" in caplog.text

    @pytest.mark.parametrize("bad_callback", [None, "not-callable"])
    async def test_missing_callback_logs_and_skips(
        self, settings, json_transport, caplog, bad_callback
    ) -> None:
        caplog.set_level(logging.ERROR)
        transport = json_transport({"version": "2.4"})

        task = _fetcher(settings, transport).latest_version("acme", "widget", bad_callback)
        await asyncio.sleep(0)

        assert task is None
        assert transport.requests == []
        assert "callback required" in caplog.text

    async def test_missing_version_logs_without_callback(
        self, settings, json_transport, caplog
    ) -> None:
        caplog.set_level(logging.ERROR)
        callback = MagicMock()

        await _fetcher(settings, json_transport({"status": "ok"})).latest_version(
            "acme", "widget", callback
        )

        callback.assert_not_called()
        assert "acme/widget" in caplog.text
        assert "no 'version'" in caplog.text

    async def test_broken_relay_envelope_logs_without_callback(
        self, settings, json_transport, caplog
    ) -> None:
        caplog.set_level(logging.ERROR)
        callback = MagicMock()
        transport = json_transport({"query": {"count": 0}})

        await _fetcher(settings, transport, relay=True).latest_version("acme", "widget", callback)

        callback.assert_not_called()
        assert "query.results.json" in caplog.text

    async def test_transport_failure_logs_without_callback(
        self, settings, caplog, recording_transport
    ) -> None:
        caplog.set_level(logging.ERROR)
        callback = MagicMock()

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        task = _fetcher(settings, recording_transport(handler)).latest_version(
            "acme", "widget", callback
        )
        await task

        callback.assert_not_called()
        assert "Error resolving acme/widget" in caplog.text

    async def test_invocations_are_independent(self, settings, recording_transport) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            artifact = request.url.path.split("/")[-2]
            return httpx.Response(200, json={"version": f"{artifact}-1"})

        transport = recording_transport(handler)
        fetcher = _fetcher(settings, transport)
        seen: list[str] = []

        tasks = [fetcher.latest_version("acme", name, seen.append) for name in ("a", "b", "c")]
        await asyncio.gather(*tasks)

        assert sorted(seen) == ["a-1", "b-1", "c-1"]
        assert len(transport.requests) == 3

    async def test_omitted_callback_logs_and_skips(self, settings, json_transport, caplog) -> None:
        caplog.set_level(logging.ERROR)
        transport = json_transport({"version": "2.4"})

        task = _fetcher(settings, transport).latest_version("acme", "widget")
        await asyncio.sleep(0)

        assert task is None
        assert transport.requests == []
        assert "callback required" in caplog.text

    def test_without_running_loop_logs_and_skips(self, settings, json_transport, caplog) -> None:
        caplog.set_level(logging.ERROR)
        callback = MagicMock()
        transport = json_transport({"version": "2.4"})

        task = _fetcher(settings, transport).latest_version("acme", "widget", callback)

        assert task is None
        assert transport.requests == []
        callback.assert_not_called()
        assert "running event loop" in caplog.text

    async def test_dropped_task_still_delivers(self, settings, json_transport) -> None:
        callback = MagicMock()
        fetcher = _fetcher(settings, json_transport({"version": "2.4"}))

        fetcher.latest_version("acme", "widget", callback)
        gc.collect()

        assert len(fetcher.pending_tasks) == 1
        await asyncio.gather(*fetcher.pending_tasks)

        callback.assert_called_once_with("2.4")
        assert fetcher.pending_tasks == frozenset()

    async def test_raising_callback_surfaces_on_task(self, settings, json_transport, caplog) -> None:
        caplog.set_level(logging.ERROR)
        callback = MagicMock(side_effect=ValueError("boom"))
        fetcher = _fetcher(settings, json_transport({"version": "2.4"}))

        task = fetcher.latest_version("acme", "widget", callback)
        with pytest.raises(ValueError, match="boom"):
            await task

        callback.assert_called_once_with("2.4")
        assert fetcher.pending_tasks == frozenset()
        assert "Version callback raised" in caplog.text
