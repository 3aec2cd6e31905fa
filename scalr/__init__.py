"""Python client for the Scalr API."""

from scalr.client import ParameterChanges, ScalrClient
from scalr.config import ScalrConfig, default_config
from scalr.context import Context
from scalr.errors import (
    APIError,
    ContextCanceled,
    DeadlineExceeded,
    InvalidValueError,
    ParameterChangeError,
    PayloadError,
    ResourceConflictError,
    ResourceNotFoundError,
    ScalrError,
    UnauthorizedError,
    WorkspaceLockedError,
    WorkspaceNotLockedError,
    is_not_found,
)
from scalr.jsonapi import ListOptions, Pagination, Resource, ResourceList

__all__ = [
    "ScalrClient", "ScalrConfig", "default_config", "Context", "ParameterChanges",
    "ScalrError", "APIError", "ContextCanceled", "DeadlineExceeded",
    "InvalidValueError", "ParameterChangeError", "PayloadError",
    "ResourceConflictError", "ResourceNotFoundError", "UnauthorizedError",
    "WorkspaceLockedError", "WorkspaceNotLockedError", "is_not_found",
    "ListOptions", "Pagination", "Resource", "ResourceList",
]
