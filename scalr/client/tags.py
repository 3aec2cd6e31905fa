"""Tags client and tag relationships of environments and workspaces."""

from __future__ import annotations

from collections.abc import Sequence

from scalr.client.base import ResourceClient, path_escape, require_id, require_ids
from scalr.context import Context
from scalr.errors import InvalidValueError
from scalr.models import (
    Tag,
    TagCreateOptions,
    TagList,
    TagListOptions,
    TagRelation,
    TagUpdateOptions,
)
from scalr.validations import valid_string, valid_string_id


class TagClient(ResourceClient):
    def list(self, options: TagListOptions | None = None, *, ctx: Context | None = None) -> TagList:
        return self._do("GET", "tags", options or TagListOptions(), TagList, ctx=ctx)

    def create(self, options: TagCreateOptions, *, ctx: Context | None = None) -> Tag:
        if options.account is None:
            raise InvalidValueError("account is required")
        if not valid_string_id(options.account.id):
            raise InvalidValueError("invalid value for account ID")
        if not valid_string(options.name):
            raise InvalidValueError("name is required")
        options = options.model_copy(update={"id": ""})
        return self._do("POST", "tags", options, Tag, ctx=ctx)

    def read(self, tag_id: str, *, ctx: Context | None = None) -> Tag:
        require_id(tag_id, "tag ID")
        return self._do("GET", f"tags/{path_escape(tag_id)}", None, Tag, ctx=ctx)

    def update(self, tag_id: str, options: TagUpdateOptions, *, ctx: Context | None = None) -> Tag:
        require_id(tag_id, "tag ID")
        options = options.model_copy(update={"id": ""})
        return self._do("PATCH", f"tags/{path_escape(tag_id)}", options, Tag, ctx=ctx)

    def delete(self, tag_id: str, *, ctx: Context | None = None) -> None:
        require_id(tag_id, "tag ID")
        self._do("DELETE", f"tags/{path_escape(tag_id)}", ctx=ctx)


class TagRelationsClient(ResourceClient):
    """Add, replace or remove the tags linked to a resource.

    ``kind`` is the collection of the tagged resource, e.g. ``environments``.
    """

    kind = ""
    what = ""

    def _change(self, method: str, resource_id: str, tags: Sequence[TagRelation], ctx: Context | None) -> None:
        require_id(resource_id, self.what)
        require_ids(tags, "tag ID")
        path = f"{self.kind}/{path_escape(resource_id)}/relationships/tags"
        self._do(method, path, list(tags), ctx=ctx)

    def add(self, resource_id: str, tags: Sequence[TagRelation], *, ctx: Context | None = None) -> None:
        self._change("POST", resource_id, tags, ctx)

    def replace(self, resource_id: str, tags: Sequence[TagRelation], *, ctx: Context | None = None) -> None:
        """Replace the full tag set; an empty sequence removes every tag."""
        self._change("PATCH", resource_id, tags, ctx)

    def delete(self, resource_id: str, tags: Sequence[TagRelation], *, ctx: Context | None = None) -> None:
        self._change("DELETE", resource_id, tags, ctx)


class EnvironmentTagClient(TagRelationsClient):
    kind = "environments"
    what = "environment ID"


class WorkspaceTagClient(TagRelationsClient):
    kind = "workspaces"
    what = "workspace ID"
