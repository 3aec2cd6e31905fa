"""Variables client."""

from __future__ import annotations

from scalr.client.base import ResourceClient, path_escape, require_id
from scalr.context import Context
from scalr.errors import InvalidValueError
from scalr.models import (
    Variable,
    VariableCreateOptions,
    VariableList,
    VariableListOptions,
    VariableUpdateOptions,
)
from scalr.validations import valid_string


def _forced(path: str, force: bool) -> str:
    # Overrides "final" variables of higher scopes.
    return f"{path}?force=true" if force else path


class VariableClient(ResourceClient):
    def list(self, options: VariableListOptions | None = None, *, ctx: Context | None = None) -> VariableList:
        return self._do("GET", "vars", options or VariableListOptions(), VariableList, ctx=ctx)

    def create(self, options: VariableCreateOptions, *, force: bool = False, ctx: Context | None = None) -> Variable:
        if not valid_string(options.key):
            raise InvalidValueError("key is required")
        if options.category is None:
            raise InvalidValueError("category is required")
        options = options.model_copy(update={"id": ""})
        return self._do("POST", _forced("vars", force), options, Variable, ctx=ctx)

    def read(self, variable_id: str, *, ctx: Context | None = None) -> Variable:
        require_id(variable_id, "variable ID")
        return self._do("GET", f"vars/{path_escape(variable_id)}", None, Variable, ctx=ctx)

    def update(
        self,
        variable_id: str,
        options: VariableUpdateOptions,
        *,
        force: bool = False,
        ctx: Context | None = None,
    ) -> Variable:
        require_id(variable_id, "variable ID")
        options = options.model_copy(update={"id": ""})
        path = _forced(f"vars/{path_escape(variable_id)}", force)
        return self._do("PATCH", path, options, Variable, ctx=ctx)

    def delete(self, variable_id: str, *, ctx: Context | None = None) -> None:
        require_id(variable_id, "variable ID")
        self._do("DELETE", f"vars/{path_escape(variable_id)}", ctx=ctx)
