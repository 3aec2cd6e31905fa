"""Tests for provider configurations and the parallel parameter batch."""

from __future__ import annotations

import json
import threading
import time

import httpx
import pytest

from scalr import ScalrClient, ScalrConfig
from scalr.client import ParameterChanges
from scalr.context import Context
from scalr.errors import InvalidValueError, ParameterChangeError, ResourceNotFoundError, is_not_found
from scalr.models import (
    ProviderConfigurationLinkCreateOptions,
    ProviderConfiguration,
    ProviderConfigurationParameterCreateOptions,
    ProviderConfigurationParameterUpdateOptions,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _parameter_document(parameter_id: str, key: str) -> dict:
    return {
        "data": {
            "type": "provider-configuration-parameters",
            "id": parameter_id,
            "attributes": {"key": key, "value": "v", "sensitive": False},
        }
    }


class _Recorder:
    """MockTransport handler answering parameter calls and recording them."""

    def __init__(self, fail_on: int | None = None, fail_status: int = 404):
        self.calls: list[tuple[str, str]] = []
        self.fail_on = fail_on
        self.fail_status = fail_status
        self.release = threading.Event()
        self._lock = threading.Lock()

    def __call__(self, request: httpx.Request) -> httpx.Response:
        with self._lock:
            self.calls.append((request.method, request.url.path))
            number = len(self.calls)
        if self.fail_on is not None:
            if number == self.fail_on:
                return httpx.Response(self.fail_status, json={"errors": [{"title": "Not Found"}]})
            if number > self.fail_on:
                # Hold later calls so the failure is observed first.
                self.release.wait(0.5)

        if request.method == "DELETE":
            return httpx.Response(204)
        body = json.loads(request.content)
        key = body["data"]["attributes"].get("key", "")
        parameter_id = request.url.path.rsplit("/", 1)[-1] if request.method == "PATCH" else f"pcp-{number}"
        return httpx.Response(200, json=_parameter_document(parameter_id, key))


def _client(handler, num_parallel: int = 1) -> ScalrClient:
    http = httpx.Client(transport=httpx.MockTransport(handler))
    return ScalrClient(
        ScalrConfig(address="https://scalr.test", token="t", http_client=http, num_parallel=num_parallel)
    )


def _creates(*keys: str) -> list[ProviderConfigurationParameterCreateOptions]:
    return [ProviderConfigurationParameterCreateOptions(key=key, value="v") for key in keys]


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestChangeParameters:
    def test_empty_batch(self):
        recorder = _Recorder()
        changes = _client(recorder).provider_configurations.change_parameters("pcfg-1")
        assert changes == ParameterChanges()
        assert recorder.calls == []

    def test_delete_update_create_order(self):
        recorder = _Recorder()
        client = _client(recorder, num_parallel=1)

        changes = client.provider_configurations.change_parameters(
            "pcfg-1",
            to_create=_creates("c1"),
            to_update=[ProviderConfigurationParameterUpdateOptions(id="pcp-u1", value="new")],
            to_delete=["pcp-d1", "pcp-d2"],
        )

        assert recorder.calls == [
            ("DELETE", "/api/iacp/v3/provider-configuration-parameters/pcp-d1"),
            ("DELETE", "/api/iacp/v3/provider-configuration-parameters/pcp-d2"),
            ("PATCH", "/api/iacp/v3/provider-configuration-parameters/pcp-u1"),
            ("POST", "/api/iacp/v3/provider-configurations/pcfg-1/parameters"),
        ]
        assert changes.deleted == ["pcp-d1", "pcp-d2"]
        assert [p.id for p in changes.updated] == ["pcp-u1"]
        assert [p.key for p in changes.created] == ["c1"]

    def test_update_body_has_no_id(self):
        bodies = []

        def handler(request):
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json=_parameter_document("pcp-u1", "k"))

        _client(handler).provider_configurations.change_parameters(
            "pcfg-1", to_update=[ProviderConfigurationParameterUpdateOptions(id="pcp-u1", key="k")]
        )
        assert "id" not in bodies[0]["data"]

    def test_parallel_creates(self):
        recorder = _Recorder()
        created = _client(recorder, num_parallel=4).provider_configurations.create_parameters(
            "pcfg-1", _creates("a", "b", "c", "d", "e", "f")
        )
        assert sorted(p.key for p in created) == ["a", "b", "c", "d", "e", "f"]
        assert len(recorder.calls) == 6

    def test_first_error_stops_the_batch(self):
        recorder = _Recorder(fail_on=2)
        client = _client(recorder, num_parallel=1)

        started = time.monotonic()
        with pytest.raises(ParameterChangeError) as exc_info:
            client.provider_configurations.create_parameters("pcfg-1", _creates("a", "b", "c", "d", "e"))
        recorder.release.set()

        assert time.monotonic() - started < 5
        error = exc_info.value
        assert isinstance(error.error, ResourceNotFoundError)
        assert error.__cause__ is error.error
        assert is_not_found(error)
        assert len(error.changes.created) <= 2
        assert len(recorder.calls) <= 3

    def test_first_error_among_parallel_calls(self):
        recorder = _Recorder(fail_on=3)
        client = _client(recorder, num_parallel=3)
        keys = [f"k{i}" for i in range(10)]

        started = time.monotonic()
        with pytest.raises(ParameterChangeError) as exc_info:
            client.provider_configurations.create_parameters("pcfg-1", _creates(*keys))
        recorder.release.set()

        assert time.monotonic() - started < 5
        assert isinstance(exc_info.value.error, ResourceNotFoundError)
        assert len(exc_info.value.changes.created) <= 2

    def test_invalid_ids_fail_before_any_call(self):
        recorder = _Recorder()
        with pytest.raises(InvalidValueError, match="provider configuration parameter ID"):
            _client(recorder, num_parallel=4).provider_configurations.change_parameters(
                "pcfg-1",
                to_delete=["pcp-1"],
                to_update=[ProviderConfigurationParameterUpdateOptions(id="bad id")],
            )
        assert recorder.calls == []

    def test_invalid_configuration_id_with_creates(self):
        recorder = _Recorder()
        with pytest.raises(InvalidValueError, match="provider configuration ID"):
            _client(recorder).provider_configurations.change_parameters(
                "pcfg 1", to_create=_creates("a"), to_delete=["pcp-1"]
            )
        assert recorder.calls == []

    def test_batches_do_not_accumulate_on_caller_context(self):
        app_ctx = Context.background()
        client = _client(_Recorder())
        for _ in range(5):
            client.provider_configurations.change_parameters("pcfg-1", to_delete=["pcp-1"], ctx=app_ctx)
        with pytest.raises(ParameterChangeError):
            _client(_Recorder(fail_on=1)).provider_configurations.change_parameters(
                "pcfg-1", to_delete=["pcp-1"], ctx=app_ctx
            )

        assert app_ctx._children == []
        assert not app_ctx.done()


class TestProviderConfigurations:
    def test_read_includes_parameters(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(
                200,
                json={
                    "data": {
                        "type": "provider-configurations",
                        "id": "pcfg-1",
                        "attributes": {"name": "aws", "provider-name": "aws"},
                        "relationships": {
                            "parameters": {"data": [{"type": "provider-configuration-parameters", "id": "pcp-1"}]}
                        },
                    },
                    "included": [_parameter_document("pcp-1", "region")["data"]],
                },
            )

        configuration = _client(handler).provider_configurations.read("pcfg-1")

        assert isinstance(configuration, ProviderConfiguration)
        assert configuration.parameters[0].key == "region"
        assert seen[0].url.params["include"] == "parameters"

    def test_invalid_id_fails_before_io(self):
        recorder = _Recorder()
        with pytest.raises(InvalidValueError, match="provider configuration ID"):
            _client(recorder).provider_configurations.read("../etc")
        assert recorder.calls == []

    def test_link_create_path(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(
                201, json={"data": {"type": "provider-configuration-links", "id": "pcl-1"}}
            )

        link = _client(handler).provider_configuration_links.create(
            "ws-1",
            ProviderConfigurationLinkCreateOptions(provider_configuration=ProviderConfiguration(id="pcfg-1")),
        )
        assert link.id == "pcl-1"
        assert seen[0].url.path == "/api/iacp/v3/workspaces/ws-1/provider-configuration-links"
        body = json.loads(seen[0].content)
        assert body["data"]["relationships"]["provider-configuration"]["data"] == {
            "type": "provider-configurations",
            "id": "pcfg-1",
        }
