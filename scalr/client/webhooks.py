"""Webhooks client."""

from __future__ import annotations

from scalr.client.base import ResourceClient, path_escape, require_id
from scalr.context import Context
from scalr.errors import InvalidValueError
from scalr.models import (
    Webhook,
    WebhookCreateOptions,
    WebhookList,
    WebhookListOptions,
    WebhookUpdateOptions,
)
from scalr.validations import valid_string


class WebhookClient(ResourceClient):
    def list(self, options: WebhookListOptions | None = None, *, ctx: Context | None = None) -> WebhookList:
        return self._do("GET", "webhooks", options or WebhookListOptions(), WebhookList, ctx=ctx)

    def create(self, options: WebhookCreateOptions, *, ctx: Context | None = None) -> Webhook:
        if not valid_string(options.name):
            raise InvalidValueError("missing name")
        options = options.model_copy(update={"id": ""})
        return self._do("POST", "webhooks", options, Webhook, ctx=ctx)

    def read(self, webhook_id: str, *, ctx: Context | None = None) -> Webhook:
        require_id(webhook_id, "webhook ID")
        return self._do("GET", f"webhooks/{path_escape(webhook_id)}", None, Webhook, ctx=ctx)

    def update(self, webhook_id: str, options: WebhookUpdateOptions, *, ctx: Context | None = None) -> Webhook:
        require_id(webhook_id, "webhook ID")
        options = options.model_copy(update={"id": ""})
        return self._do("PATCH", f"webhooks/{path_escape(webhook_id)}", options, Webhook, ctx=ctx)

    def delete(self, webhook_id: str, *, ctx: Context | None = None) -> None:
        require_id(webhook_id, "webhook ID")
        self._do("DELETE", f"webhooks/{path_escape(webhook_id)}", ctx=ctx)
