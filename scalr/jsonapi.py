"""JSON:API resource models and document codec built on Pydantic v2.

A resource model subclasses :class:`Resource` and names its JSON:API type in
``jsonapi_type``. Every field other than ``id`` is an attribute whose wire
name is the kebab-case field name (or an explicit alias). Fields annotated
with :class:`Relation` are relationships instead::

    class Tag(Resource):
        jsonapi_type: ClassVar[str] = "tags"

        name: str = ""
        account: Annotated[Account | None, Relation()] = None

Collection responses decode into a :class:`ResourceList` subclass, which
carries the decoded items and the ``meta.pagination`` block.

Reference: https://jsonapi.org/format/
"""

from __future__ import annotations

import types
from collections.abc import Mapping, Sequence
from typing import Any, ClassVar, Generic, TypeVar, Union, get_args, get_origin

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.fields import FieldInfo

from scalr.errors import PayloadError

MEDIA_TYPE = "application/vnd.api+json"


def kebab(name: str) -> str:
    """Wire name for a Python field name."""
    return name.replace("_", "-")


class Relation:
    """Marks a resource field as a JSON:API relationship."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "Relation()"


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class Resource(BaseModel):
    """Base for every JSON:API primary resource and create/update payload."""

    model_config = ConfigDict(alias_generator=kebab, populate_by_name=True)

    jsonapi_type: ClassVar[str] = ""

    id: str = ""

    @classmethod
    def relationship_fields(cls) -> dict[str, FieldInfo]:
        return {
            name: info
            for name, info in cls.model_fields.items()
            if any(isinstance(meta, Relation) for meta in info.metadata)
        }

    @classmethod
    def attribute_fields(cls) -> dict[str, FieldInfo]:
        relations = cls.relationship_fields()
        return {
            name: info
            for name, info in cls.model_fields.items()
            if name != "id" and name not in relations
        }


class Attributes(BaseModel):
    """Base for structured attribute values (nested JSON objects)."""

    model_config = ConfigDict(alias_generator=kebab, populate_by_name=True)


class Pagination(BaseModel):
    """Pagination details of a collection response."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    current_page: int = Field(0, alias="current-page")
    previous_page: int = Field(0, alias="prev-page")
    next_page: int = Field(0, alias="next-page")
    total_pages: int = Field(0, alias="total-pages")
    total_count: int = Field(0, alias="total-count")

    @field_validator("*", mode="before")
    @classmethod
    def _null_is_zero(cls, value: Any) -> Any:
        return 0 if value is None else value


R = TypeVar("R", bound=Resource)


class ResourceList(BaseModel, Generic[R]):
    """A page of resources plus its pagination details."""

    items: list[R] = Field(default_factory=list)
    pagination: Pagination = Field(default_factory=Pagination)

    @classmethod
    def item_type(cls) -> type[Resource]:
        """The resource class of ``items``."""
        annotation = cls.model_fields["items"].annotation
        if get_origin(annotation) is not list:
            raise PayloadError("items must be a list")
        (item,) = get_args(annotation)
        if not (isinstance(item, type) and issubclass(item, Resource)):
            raise PayloadError("items must be a list of resources")
        return item


class ListOptions(BaseModel):
    """Page selection shared by every list call."""

    model_config = ConfigDict(populate_by_name=True)

    page_number: int | None = Field(None, alias="page[number]")
    page_size: int | None = Field(None, alias="page[size]")


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


def _linkage(resource: Resource) -> dict[str, str]:
    return {"type": resource.jsonapi_type, "id": resource.id}


def _encode_node(resource: Resource) -> dict[str, Any]:
    if not resource.jsonapi_type:
        raise PayloadError(f"{type(resource).__name__} has no jsonapi_type")

    node: dict[str, Any] = {"type": resource.jsonapi_type}
    if resource.id:
        node["id"] = resource.id

    dumped = resource.model_dump(mode="json", by_alias=True, exclude_none=True)
    attributes: dict[str, Any] = {}
    for name, info in resource.attribute_fields().items():
        alias = info.alias or kebab(name)
        if alias in dumped:
            attributes[alias] = dumped[alias]

    relationships: dict[str, Any] = {}
    for name, info in resource.relationship_fields().items():
        value = getattr(resource, name)
        if value is None:
            continue
        alias = info.alias or kebab(name)
        if isinstance(value, list):
            relationships[alias] = {"data": [_linkage(item) for item in value]}
        else:
            relationships[alias] = {"data": _linkage(value)}

    if attributes:
        node["attributes"] = attributes
    if relationships:
        node["relationships"] = relationships
    return node


def marshal_payload(payload: Resource | Sequence[Resource]) -> dict[str, Any]:
    """Encode one resource, or a sequence of them, as a JSON:API document.

    Side documents (``included``) are never emitted.
    """
    if isinstance(payload, Resource):
        return {"data": _encode_node(payload)}
    if isinstance(payload, Sequence) and not isinstance(payload, (str, bytes)):
        return {"data": [_encode_node(item) for item in payload]}
    raise PayloadError(f"cannot encode {type(payload).__name__} as JSON:API")


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def _relation_target(annotation: Any) -> type[Resource] | None:
    """Find the Resource class inside ``X | None`` / ``list[X]`` annotations."""
    if isinstance(annotation, type) and issubclass(annotation, Resource):
        return annotation
    origin = get_origin(annotation)
    if origin is list or origin is Union or origin is types.UnionType:
        for arg in get_args(annotation):
            target = _relation_target(arg)
            if target is not None:
                return target
    return None


def _index_included(included: Any) -> dict[tuple[str, str], dict]:
    index: dict[tuple[str, str], dict] = {}
    if isinstance(included, list):
        for node in included:
            if isinstance(node, dict) and "type" in node and "id" in node:
                index[(node["type"], str(node["id"]))] = node
    return index


def _resolve(
    linkage: Any,
    target: type[Resource],
    included: Mapping[tuple[str, str], dict],
    seen: frozenset[tuple[str, str]],
) -> Resource:
    if not isinstance(linkage, dict) or "id" not in linkage:
        raise PayloadError(f"invalid relationship linkage: {linkage!r}")
    key = (linkage.get("type", ""), str(linkage["id"]))
    node = included.get(key)
    if node is None or key in seen:
        return target.model_validate({"id": key[1]})
    return _decode_node(node, target, included, seen | {key})


def _decode_node(
    node: Any,
    cls: type[R],
    included: Mapping[tuple[str, str], dict],
    seen: frozenset[tuple[str, str]] = frozenset(),
) -> R:
    if not isinstance(node, dict):
        raise PayloadError(f"expected a resource object, got {type(node).__name__}")

    values: dict[str, Any] = {}
    attributes = node.get("attributes") or {}
    for name, info in cls.attribute_fields().items():
        alias = info.alias or kebab(name)
        # null leaves the field at its default
        if attributes.get(alias) is not None:
            values[alias] = attributes[alias]
    values["id"] = str(node.get("id") or "")

    relationships = node.get("relationships") or {}
    for name, info in cls.relationship_fields().items():
        alias = info.alias or kebab(name)
        relationship = relationships.get(alias)
        if not isinstance(relationship, dict) or "data" not in relationship:
            continue
        target = _relation_target(info.annotation)
        if target is None:
            raise PayloadError(f"{cls.__name__}.{name} is not a resource relation")
        linkage = relationship["data"]
        if linkage is None:
            values[alias] = None
        elif isinstance(linkage, list):
            values[alias] = [_resolve(item, target, included, seen) for item in linkage]
        else:
            values[alias] = _resolve(linkage, target, included, seen)

    try:
        return cls.model_validate(values)
    except ValidationError as exc:
        raise PayloadError(f"invalid {cls.__name__} payload: {exc}") from exc


def unmarshal_payload(document: Any, cls: type[R]) -> R:
    """Decode the single primary resource of *document* into *cls*."""
    if not isinstance(document, dict) or not isinstance(document.get("data"), dict):
        raise PayloadError("expected a single resource in 'data'")
    included = _index_included(document.get("included"))
    return _decode_node(document["data"], cls, included)


def unmarshal_many_payload(document: Any, cls: type[R]) -> list[R]:
    """Decode the primary resource array of *document*, preserving order."""
    if not isinstance(document, dict) or not isinstance(document.get("data"), list):
        raise PayloadError("expected a list of resources in 'data'")
    included = _index_included(document.get("included"))
    return [_decode_node(node, cls, included) for node in document["data"]]


def parse_pagination(document: Any) -> Pagination:
    """Read ``meta.pagination``; a missing block yields an all-zero record."""
    meta = document.get("meta") if isinstance(document, dict) else None
    raw = meta.get("pagination") if isinstance(meta, dict) else None
    if not isinstance(raw, dict):
        return Pagination()
    try:
        return Pagination.model_validate(raw)
    except ValidationError as exc:
        raise PayloadError(f"invalid pagination block: {exc}") from exc
