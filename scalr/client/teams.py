"""Teams client."""

from __future__ import annotations

from scalr.client.base import ResourceClient, path_escape, require_id, require_ids
from scalr.context import Context
from scalr.errors import InvalidValueError
from scalr.models import Team, TeamCreateOptions, TeamList, TeamListOptions, TeamUpdateOptions
from scalr.validations import valid_string


class TeamClient(ResourceClient):
    def list(self, options: TeamListOptions | None = None, *, ctx: Context | None = None) -> TeamList:
        return self._do("GET", "teams", options or TeamListOptions(), TeamList, ctx=ctx)

    def create(self, options: TeamCreateOptions, *, ctx: Context | None = None) -> Team:
        if not valid_string(options.name):
            raise InvalidValueError("name is required")
        if options.account is not None:
            require_id(options.account.id, "account ID")
        if options.identity_provider is not None:
            require_id(options.identity_provider.id, "identity provider ID")
        require_ids(options.users or [], "user ID")
        options = options.model_copy(update={"id": ""})
        return self._do("POST", "teams", options, Team, ctx=ctx)

    def read(self, team_id: str, *, ctx: Context | None = None) -> Team:
        require_id(team_id, "team ID")
        return self._do("GET", f"teams/{path_escape(team_id)}", None, Team, ctx=ctx)

    def update(self, team_id: str, options: TeamUpdateOptions, *, ctx: Context | None = None) -> Team:
        require_id(team_id, "team ID")
        require_ids(options.users or [], "user ID")
        options = options.model_copy(update={"id": ""})
        return self._do("PATCH", f"teams/{path_escape(team_id)}", options, Team, ctx=ctx)

    def delete(self, team_id: str, *, ctx: Context | None = None) -> None:
        require_id(team_id, "team ID")
        self._do("DELETE", f"teams/{path_escape(team_id)}", ctx=ctx)
