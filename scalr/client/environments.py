"""Environments client."""

from __future__ import annotations

from scalr.client.base import ResourceClient, path_escape, require_id
from scalr.context import Context
from scalr.errors import InvalidValueError
from scalr.models import (
    Environment,
    EnvironmentCreateOptions,
    EnvironmentList,
    EnvironmentListOptions,
    EnvironmentUpdateOptions,
)
from scalr.validations import valid_string, valid_string_id


class EnvironmentClient(ResourceClient):
    def list(self, options: EnvironmentListOptions | None = None, *, ctx: Context | None = None) -> EnvironmentList:
        return self._do("GET", "environments", options or EnvironmentListOptions(), EnvironmentList, ctx=ctx)

    def create(self, options: EnvironmentCreateOptions, *, ctx: Context | None = None) -> Environment:
        if not valid_string(options.name):
            raise InvalidValueError("name is required")
        if options.account is not None and not valid_string_id(options.account.id):
            raise InvalidValueError("invalid value for account ID")
        options = options.model_copy(update={"id": ""})
        return self._do("POST", "environments", options, Environment, ctx=ctx)

    def read(self, environment_id: str, *, ctx: Context | None = None) -> Environment:
        require_id(environment_id, "environment")
        return self._do("GET", f"environments/{path_escape(environment_id)}", None, Environment, ctx=ctx)

    def update(
        self, environment_id: str, options: EnvironmentUpdateOptions, *, ctx: Context | None = None
    ) -> Environment:
        require_id(environment_id, "environment")
        options = options.model_copy(update={"id": ""})
        return self._do("PATCH", f"environments/{path_escape(environment_id)}", options, Environment, ctx=ctx)

    def delete(self, environment_id: str, *, ctx: Context | None = None) -> None:
        require_id(environment_id, "environment")
        self._do("DELETE", f"environments/{path_escape(environment_id)}", ctx=ctx)
