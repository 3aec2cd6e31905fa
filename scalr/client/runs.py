"""Runs and configuration versions."""

from __future__ import annotations

from scalr.client.base import ResourceClient, path_escape, require_id
from scalr.context import Context
from scalr.errors import InvalidValueError
from scalr.models import (
    ConfigurationVersion,
    ConfigurationVersionCreateOptions,
    Run,
    RunCreateOptions,
)


class RunClient(ResourceClient):
    def create(self, options: RunCreateOptions, *, ctx: Context | None = None) -> Run:
        if options.workspace is None:
            raise InvalidValueError("workspace is required")
        require_id(options.workspace.id, "workspace ID")
        if options.configuration_version is None:
            raise InvalidValueError("configuration-version is required")
        require_id(options.configuration_version.id, "configuration-version ID")
        options = options.model_copy(update={"id": ""})
        return self._do("POST", "runs", options, Run, ctx=ctx)

    def read(self, run_id: str, *, ctx: Context | None = None) -> Run:
        require_id(run_id, "run ID")
        return self._do("GET", f"runs/{path_escape(run_id)}", {"include": "vcs-revision"}, Run, ctx=ctx)


class ConfigurationVersionClient(ResourceClient):
    def create(
        self, options: ConfigurationVersionCreateOptions, *, ctx: Context | None = None
    ) -> ConfigurationVersion:
        if options.workspace is None:
            raise InvalidValueError("workspace is required")
        require_id(options.workspace.id, "workspace ID")
        options = options.model_copy(update={"id": ""})
        return self._do("POST", "configuration-versions", options, ConfigurationVersion, ctx=ctx)

    def read(self, configuration_version_id: str, *, ctx: Context | None = None) -> ConfigurationVersion:
        require_id(configuration_version_id, "configuration version ID")
        path = f"configuration-versions/{path_escape(configuration_version_id)}"
        return self._do("GET", path, None, ConfigurationVersion, ctx=ctx)

    def upload(self, upload_url: str, content: bytes, *, ctx: Context | None = None) -> None:
        """Upload a packed configuration (``.tar.gz``) to ``upload_url``."""
        if not upload_url:
            raise InvalidValueError("upload URL is required")
        self._do("PUT", upload_url, content, ctx=ctx)
