"""Workspaces client."""

from __future__ import annotations

from scalr.client.base import ResourceClient, path_escape, require_id
from scalr.context import Context
from scalr.errors import InvalidValueError, ResourceNotFoundError
from scalr.models import (
    Workspace,
    WorkspaceCreateOptions,
    WorkspaceList,
    WorkspaceListOptions,
    WorkspaceLockOptions,
    WorkspaceRunScheduleOptions,
    WorkspaceUpdateOptions,
)
from scalr.validations import valid_string, valid_string_id


class WorkspaceClient(ResourceClient):
    def list(self, options: WorkspaceListOptions | None = None, *, ctx: Context | None = None) -> WorkspaceList:
        return self._do("GET", "workspaces", options or WorkspaceListOptions(), WorkspaceList, ctx=ctx)

    def create(self, options: WorkspaceCreateOptions, *, ctx: Context | None = None) -> Workspace:
        if not valid_string(options.name):
            raise InvalidValueError("name is required")
        if not valid_string_id(options.name):
            raise InvalidValueError("invalid value for name")
        if options.environment is not None:
            require_id(options.environment.id, "environment ID")
        options = options.model_copy(update={"id": ""})
        return self._do("POST", "workspaces", options, Workspace, ctx=ctx)

    def read(self, environment_id: str, workspace_name: str, *, ctx: Context | None = None) -> Workspace:
        """Find a workspace by name within an environment."""
        if not valid_string_id(environment_id):
            raise InvalidValueError("invalid value for environment")
        if not valid_string_id(workspace_name):
            raise InvalidValueError("invalid value for workspace")

        options = WorkspaceListOptions(
            environment=environment_id, name=workspace_name, include="created-by"
        )
        found = self._do("GET", "workspaces", options, WorkspaceList, ctx=ctx)
        if not found.items:
            raise ResourceNotFoundError(f"workspace {workspace_name!r} not found")
        if len(found.items) != 1:
            raise InvalidValueError("invalid filters")
        return found.items[0]

    def read_by_id(self, workspace_id: str, *, ctx: Context | None = None) -> Workspace:
        require_id(workspace_id, "workspace ID")
        path = f"workspaces/{path_escape(workspace_id)}"
        return self._do("GET", path, {"include": "created-by"}, Workspace, ctx=ctx)

    def update(self, workspace_id: str, options: WorkspaceUpdateOptions, *, ctx: Context | None = None) -> Workspace:
        require_id(workspace_id, "workspace ID")
        options = options.model_copy(update={"id": ""})
        return self._do("PATCH", f"workspaces/{path_escape(workspace_id)}", options, Workspace, ctx=ctx)

    def delete(self, workspace_id: str, *, ctx: Context | None = None) -> None:
        require_id(workspace_id, "workspace ID")
        self._do("DELETE", f"workspaces/{path_escape(workspace_id)}", ctx=ctx)

    def set_schedule(
        self,
        workspace_id: str,
        options: WorkspaceRunScheduleOptions,
        *,
        ctx: Context | None = None,
    ) -> Workspace:
        """Set the apply/destroy cron schedules of a workspace."""
        return self._action(workspace_id, "set-schedule", options, ctx)

    def lock(self, workspace_id: str, reason: str | None = None, *, ctx: Context | None = None) -> Workspace:
        """Lock a workspace.

        Raises:
            WorkspaceLockedError: The workspace is already locked.
        """
        return self._action(workspace_id, "lock", WorkspaceLockOptions(reason=reason), ctx)

    def unlock(self, workspace_id: str, *, ctx: Context | None = None) -> Workspace:
        """Raises WorkspaceNotLockedError if the workspace is not locked."""
        return self._action(workspace_id, "unlock", None, ctx)

    def force_unlock(self, workspace_id: str, *, ctx: Context | None = None) -> Workspace:
        return self._action(workspace_id, "force-unlock", None, ctx)

    def _action(self, workspace_id: str, verb: str, payload, ctx: Context | None) -> Workspace:
        require_id(workspace_id, "workspace ID")
        request = self.client.new_json_request(
            "POST", f"workspaces/{path_escape(workspace_id)}/actions/{verb}", payload
        )
        return self.client.do(request, Workspace, ctx=ctx)
