"""Tests for the resource clients' paths, payloads and argument checks."""

from __future__ import annotations

import json

import httpx
import pytest

from scalr import ScalrClient, ScalrConfig
from scalr.errors import (
    InvalidValueError,
    ResourceNotFoundError,
    WorkspaceLockedError,
    WorkspaceNotLockedError,
)
from scalr.models import (
    Account,
    CategoryType,
    ConfigurationVersion,
    ConfigurationVersionCreateOptions,
    EnvironmentCreateOptions,
    RunCreateOptions,
    TagCreateOptions,
    TagRelation,
    TeamCreateOptions,
    User,
    VariableCreateOptions,
    VariableUpdateOptions,
    WebhookCreateOptions,
    Workspace,
    WorkspaceCreateOptions,
    WorkspaceListOptions,
    WorkspaceRunScheduleOptions,
    WorkspaceUpdateOptions,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class _Server:
    """Records requests and replies with a canned status and document."""

    def __init__(self, status: int = 200, document: dict | None = None):
        self.status = status
        self.document = document
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.document is None:
            return httpx.Response(self.status)
        return httpx.Response(self.status, json=self.document)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def body(self) -> dict:
        return json.loads(self.last.content)


def _client(server: _Server) -> ScalrClient:
    http = httpx.Client(transport=httpx.MockTransport(server))
    return ScalrClient(ScalrConfig(address="https://scalr.test", token="t", http_client=http))


def _document(kind: str, resource_id: str, **attributes) -> dict:
    return {"data": {"type": kind, "id": resource_id, "attributes": attributes}}


def _workspaces(count: int) -> dict:
    return {
        "data": [_document("workspaces", f"ws-{i}", name="prod")["data"] for i in range(count)],
        "meta": {"pagination": {"current-page": 1, "total-count": count}},
    }


# ---------------------------------------------------------------------------
# Workspaces
# ---------------------------------------------------------------------------


class TestWorkspaces:
    def test_list_filters(self):
        server = _Server(document=_workspaces(2))
        page = _client(server).workspaces.list(WorkspaceListOptions(environment="env-1", page_size=10))

        assert len(page.items) == 2
        assert server.last.url.params["filter[environment]"] == "env-1"
        assert server.last.url.params["page[size]"] == "10"

    def test_read_by_name(self):
        server = _Server(document=_workspaces(1))
        workspace = _client(server).workspaces.read("env-1", "prod")

        assert workspace.id == "ws-0"
        params = server.last.url.params
        assert params["filter[environment]"] == "env-1"
        assert params["filter[name]"] == "prod"
        assert params["include"] == "created-by"

    def test_read_by_name_ambiguous(self):
        with pytest.raises(InvalidValueError, match="invalid filters"):
            _client(_Server(document=_workspaces(2))).workspaces.read("env-1", "prod")

    def test_read_by_name_missing(self):
        with pytest.raises(ResourceNotFoundError):
            _client(_Server(document=_workspaces(0))).workspaces.read("env-1", "prod")

    def test_read_by_id(self):
        server = _Server(document=_document("workspaces", "ws-1", name="prod", locked=True))
        workspace = _client(server).workspaces.read_by_id("ws-1")

        assert isinstance(workspace, Workspace)
        assert workspace.locked is True
        assert server.last.url.path == "/api/iacp/v3/workspaces/ws-1"
        assert server.last.url.params["include"] == "created-by"

    def test_create_requires_name(self):
        server = _Server()
        with pytest.raises(InvalidValueError, match="name is required"):
            _client(server).workspaces.create(WorkspaceCreateOptions())
        with pytest.raises(InvalidValueError, match="invalid value for name"):
            _client(server).workspaces.create(WorkspaceCreateOptions(name="my workspace"))
        assert server.requests == []

    def test_update_blanks_id(self):
        server = _Server(document=_document("workspaces", "ws-1", name="renamed"))
        _client(server).workspaces.update("ws-1", WorkspaceUpdateOptions(id="ws-other", name="renamed"))

        assert server.last.method == "PATCH"
        assert server.body() == {"data": {"type": "workspaces", "attributes": {"name": "renamed"}}}

    def test_delete(self):
        server = _Server(status=204)
        assert _client(server).workspaces.delete("ws-1") is None
        assert server.last.method == "DELETE"

    def test_set_schedule_sends_plain_json(self):
        server = _Server(document=_document("workspaces", "ws-1", **{"apply-schedule": "0 1 * * *"}))
        workspace = _client(server).workspaces.set_schedule(
            "ws-1", WorkspaceRunScheduleOptions(apply_schedule="0 1 * * *")
        )

        assert workspace.apply_schedule == "0 1 * * *"
        assert server.last.url.path == "/api/iacp/v3/workspaces/ws-1/actions/set-schedule"
        assert server.last.headers["Content-Type"] == "application/json"
        assert server.body() == {"apply-schedule": "0 1 * * *"}

    def test_lock_conflict(self):
        with pytest.raises(WorkspaceLockedError):
            _client(_Server(status=409)).workspaces.lock("ws-1")

    def test_unlock_conflicts(self):
        client = _client(_Server(status=409))
        with pytest.raises(WorkspaceNotLockedError):
            client.workspaces.unlock("ws-1")
        with pytest.raises(WorkspaceNotLockedError):
            client.workspaces.force_unlock("ws-1")

    def test_invalid_id(self):
        server = _Server()
        with pytest.raises(InvalidValueError, match="invalid value for workspace ID"):
            _client(server).workspaces.read_by_id("ws/1")
        assert server.requests == []


# ---------------------------------------------------------------------------
# Environments and tags
# ---------------------------------------------------------------------------


class TestEnvironments:
    def test_create(self):
        server = _Server(status=201, document=_document("environments", "env-1", name="staging"))
        environment = _client(server).environments.create(
            EnvironmentCreateOptions(name="staging", account=Account(id="acc-1"))
        )

        assert environment.name == "staging"
        assert server.body()["data"]["relationships"] == {
            "account": {"data": {"type": "accounts", "id": "acc-1"}}
        }

    def test_create_requires_name(self):
        with pytest.raises(InvalidValueError, match="name is required"):
            _client(_Server()).environments.create(EnvironmentCreateOptions(name=" "))


class TestTags:
    def test_create_requires_account(self):
        with pytest.raises(InvalidValueError, match="account is required"):
            _client(_Server()).tags.create(TagCreateOptions(name="prod"))

    @pytest.mark.parametrize("operation, method", [("add", "POST"), ("replace", "PATCH"), ("delete", "DELETE")])
    def test_environment_tag_relationships(self, operation, method):
        server = _Server(status=204)
        tags = _client(server).environment_tags
        getattr(tags, operation)("env-1", [TagRelation(id="tag-1"), TagRelation(id="tag-2")])

        assert server.last.method == method
        assert server.last.url.path == "/api/iacp/v3/environments/env-1/relationships/tags"
        assert server.body() == {"data": [{"type": "tags", "id": "tag-1"}, {"type": "tags", "id": "tag-2"}]}

    def test_workspace_tags_replace_with_nothing(self):
        server = _Server(status=204)
        _client(server).workspace_tags.replace("ws-1", [])

        assert server.last.url.path == "/api/iacp/v3/workspaces/ws-1/relationships/tags"
        assert server.body() == {"data": []}


# ---------------------------------------------------------------------------
# Variables, teams, webhooks
# ---------------------------------------------------------------------------


class TestVariables:
    def test_create_with_force(self):
        server = _Server(status=201, document=_document("vars", "var-1", key="region", category="env"))
        variable = _client(server).variables.create(
            VariableCreateOptions(key="region", value="eu", category=CategoryType.ENV),
            force=True,
        )

        assert variable.key == "region"
        assert server.last.url.path == "/api/iacp/v3/vars"
        assert server.last.url.params["force"] == "true"
        assert server.body()["data"]["attributes"]["category"] == "env"

    def test_update_without_force(self):
        server = _Server(document=_document("vars", "var-1", key="region"))
        _client(server).variables.update("var-1", VariableUpdateOptions(value="us"))
        assert "force" not in server.last.url.params

    @pytest.mark.parametrize(
        "options, message",
        [
            (VariableCreateOptions(category=CategoryType.ENV), "key is required"),
            (VariableCreateOptions(key="region"), "category is required"),
        ],
    )
    def test_create_validation(self, options, message):
        with pytest.raises(InvalidValueError, match=message):
            _client(_Server()).variables.create(options)


class TestTeams:
    def test_create_checks_user_ids(self):
        server = _Server()
        with pytest.raises(InvalidValueError, match="invalid value for user ID"):
            _client(server).teams.create(TeamCreateOptions(name="ops", users=[User(id="bad id")]))
        assert server.requests == []


class TestWebhooks:
    def test_create_requires_name(self):
        with pytest.raises(InvalidValueError, match="missing name"):
            _client(_Server()).webhooks.create(WebhookCreateOptions())


# ---------------------------------------------------------------------------
# Runs and configuration versions
# ---------------------------------------------------------------------------


class TestRuns:
    def test_create_requires_configuration_version(self):
        with pytest.raises(InvalidValueError, match="configuration-version is required"):
            _client(_Server()).runs.create(RunCreateOptions(workspace=Workspace(id="ws-1")))

    def test_read_includes_vcs_revision(self):
        server = _Server(document=_document("runs", "run-1", status="applied"))
        run = _client(server).runs.read("run-1")

        assert run.status == "applied"
        assert server.last.url.params["include"] == "vcs-revision"

    def test_create(self):
        server = _Server(status=201, document=_document("runs", "run-1", status="pending"))
        _client(server).runs.create(
            RunCreateOptions(
                workspace=Workspace(id="ws-1"),
                configuration_version=ConfigurationVersion(id="cv-1"),
                message="deploy",
            )
        )
        relationships = server.body()["data"]["relationships"]
        assert relationships["workspace"]["data"]["id"] == "ws-1"
        assert relationships["configuration-version"]["data"]["id"] == "cv-1"


class TestConfigurationVersions:
    def test_create_and_upload(self):
        server = _Server(
            status=201,
            document=_document(
                "configuration-versions", "cv-1", status="pending", **{"upload-url": "https://uploads.test/cv-1"}
            ),
        )
        client = _client(server)
        version = client.configuration_versions.create(
            ConfigurationVersionCreateOptions(workspace=Workspace(id="ws-1"))
        )
        client.configuration_versions.upload(version.upload_url, b"tarball")

        assert str(server.last.url) == "https://uploads.test/cv-1"
        assert server.last.method == "PUT"
        assert server.last.headers["Content-Type"] == "application/octet-stream"
        assert server.last.content == b"tarball"

    def test_create_requires_workspace(self):
        with pytest.raises(InvalidValueError, match="workspace is required"):
            _client(_Server()).configuration_versions.create(ConfigurationVersionCreateOptions())
