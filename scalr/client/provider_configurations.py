"""Provider configurations, their parameters and workspace links.

``ProviderConfigurationClient.change_parameters`` applies a batch of
parameter deletes, updates and creates over a bounded worker pool and stops
at the first failure.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import FIRST_COMPLETED, ThreadPoolExecutor, wait
from dataclasses import dataclass, field

from scalr.client.base import ResourceClient, path_escape, require_id
from scalr.context import Context
from scalr.errors import ParameterChangeError
from scalr.models import (
    ProviderConfiguration,
    ProviderConfigurationCreateOptions,
    ProviderConfigurationLink,
    ProviderConfigurationLinkCreateOptions,
    ProviderConfigurationLinkList,
    ProviderConfigurationLinkListOptions,
    ProviderConfigurationLinkUpdateOptions,
    ProviderConfigurationList,
    ProviderConfigurationListOptions,
    ProviderConfigurationParameter,
    ProviderConfigurationParameterCreateOptions,
    ProviderConfigurationParameterList,
    ProviderConfigurationParameterListOptions,
    ProviderConfigurationParameterUpdateOptions,
    ProviderConfigurationUpdateOptions,
)

logger = logging.getLogger("scalr.client.provider_configurations")


@dataclass
class ParameterChanges:
    """Outcome of a parameter batch, each list in completion order."""

    created: list[ProviderConfigurationParameter] = field(default_factory=list)
    updated: list[ProviderConfigurationParameter] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)


class ProviderConfigurationClient(ResourceClient):
    def list(
        self, options: ProviderConfigurationListOptions | None = None, *, ctx: Context | None = None
    ) -> ProviderConfigurationList:
        options = options or ProviderConfigurationListOptions()
        return self._do("GET", "provider-configurations", options, ProviderConfigurationList, ctx=ctx)

    def create(
        self, options: ProviderConfigurationCreateOptions, *, ctx: Context | None = None
    ) -> ProviderConfiguration:
        if options.account is not None:
            require_id(options.account.id, "account ID")
        options = options.model_copy(update={"id": ""})
        return self._do("POST", "provider-configurations", options, ProviderConfiguration, ctx=ctx)

    def read(self, configuration_id: str, *, ctx: Context | None = None) -> ProviderConfiguration:
        require_id(configuration_id, "provider configuration ID")
        path = f"provider-configurations/{path_escape(configuration_id)}"
        return self._do("GET", path, {"include": "parameters"}, ProviderConfiguration, ctx=ctx)

    def update(
        self,
        configuration_id: str,
        options: ProviderConfigurationUpdateOptions,
        *,
        ctx: Context | None = None,
    ) -> ProviderConfiguration:
        require_id(configuration_id, "provider configuration ID")
        options = options.model_copy(update={"id": ""})
        path = f"provider-configurations/{path_escape(configuration_id)}"
        return self._do("PATCH", path, options, ProviderConfiguration, ctx=ctx)

    def delete(self, configuration_id: str, *, ctx: Context | None = None) -> None:
        require_id(configuration_id, "provider configuration ID")
        self._do("DELETE", f"provider-configurations/{path_escape(configuration_id)}", ctx=ctx)

    def change_parameters(
        self,
        configuration_id: str,
        to_create: Sequence[ProviderConfigurationParameterCreateOptions] | None = None,
        to_update: Sequence[ProviderConfigurationParameterUpdateOptions] | None = None,
        to_delete: Sequence[str] | None = None,
        *,
        ctx: Context | None = None,
    ) -> ParameterChanges:
        """Apply parameter deletes, then updates, then creates in parallel.

        At most ``num_parallel`` calls are in flight. Results are collected in
        completion order.

        Raises:
            InvalidValueError: An identifier is malformed. Nothing is sent.
            ParameterChangeError: On the first failed call. Its ``changes``
                holds whatever completed before the failure was observed;
                queued calls are dropped and in-flight ones are cancelled.
        """
        for parameter_id in to_delete or ():
            require_id(parameter_id, "provider configuration parameter ID")
        for update in to_update or ():
            require_id(update.id, "provider configuration parameter ID")
        if to_create:
            require_id(configuration_id, "provider configuration ID")

        parameters = self.client.provider_configuration_parameters
        tasks = []
        for parameter_id in to_delete or ():
            tasks.append(("deleted", parameters.delete, (parameter_id,)))
        for update in to_update or ():
            tasks.append(("updated", parameters.update, (update.id, update)))
        for create in to_create or ():
            tasks.append(("created", parameters.create, (configuration_id, create)))

        changes = ParameterChanges()
        if not tasks:
            return changes

        batch_ctx = (ctx or Context.background()).with_cancel()
        workers = max(1, min(self.client.num_parallel, len(tasks)))
        logger.debug(
            "Changing %d parameters of %s with %d workers", len(tasks), configuration_id, workers
        )

        pool = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="scalr-params")
        try:
            pending = {}
            for kind, call, args in tasks:
                future = pool.submit(call, *args, ctx=batch_ctx)
                pending[future] = (kind, args[0])

            while pending:
                finished, _ = wait(pending, return_when=FIRST_COMPLETED)
                for future in finished:
                    kind, key = pending.pop(future)
                    error = future.exception()
                    if error is not None:
                        batch_ctx.cancel()
                        raise ParameterChangeError(error, changes) from error
                    if kind == "deleted":
                        changes.deleted.append(key)
                    else:
                        getattr(changes, kind).append(future.result())
        finally:
            pool.shutdown(wait=False, cancel_futures=True)
            batch_ctx.release()
        return changes

    def create_parameters(
        self,
        configuration_id: str,
        options_list: Sequence[ProviderConfigurationParameterCreateOptions],
        *,
        ctx: Context | None = None,
    ) -> list[ProviderConfigurationParameter]:
        """Create several parameters in parallel; see :meth:`change_parameters`."""
        return self.change_parameters(configuration_id, to_create=options_list, ctx=ctx).created


class ProviderConfigurationParameterClient(ResourceClient):
    def list(
        self,
        configuration_id: str,
        options: ProviderConfigurationParameterListOptions | None = None,
        *,
        ctx: Context | None = None,
    ) -> ProviderConfigurationParameterList:
        require_id(configuration_id, "provider configuration ID")
        path = f"provider-configurations/{path_escape(configuration_id)}/parameters"
        options = options or ProviderConfigurationParameterListOptions()
        return self._do("GET", path, options, ProviderConfigurationParameterList, ctx=ctx)

    def create(
        self,
        configuration_id: str,
        options: ProviderConfigurationParameterCreateOptions,
        *,
        ctx: Context | None = None,
    ) -> ProviderConfigurationParameter:
        require_id(configuration_id, "provider configuration ID")
        options = options.model_copy(update={"id": ""})
        path = f"provider-configurations/{path_escape(configuration_id)}/parameters"
        return self._do("POST", path, options, ProviderConfigurationParameter, ctx=ctx)

    def read(self, parameter_id: str, *, ctx: Context | None = None) -> ProviderConfigurationParameter:
        require_id(parameter_id, "provider configuration parameter ID")
        path = f"provider-configuration-parameters/{path_escape(parameter_id)}"
        return self._do("GET", path, None, ProviderConfigurationParameter, ctx=ctx)

    def update(
        self,
        parameter_id: str,
        options: ProviderConfigurationParameterUpdateOptions,
        *,
        ctx: Context | None = None,
    ) -> ProviderConfigurationParameter:
        require_id(parameter_id, "provider configuration parameter ID")
        options = options.model_copy(update={"id": ""})
        path = f"provider-configuration-parameters/{path_escape(parameter_id)}"
        return self._do("PATCH", path, options, ProviderConfigurationParameter, ctx=ctx)

    def delete(self, parameter_id: str, *, ctx: Context | None = None) -> None:
        require_id(parameter_id, "provider configuration parameter ID")
        self._do("DELETE", f"provider-configuration-parameters/{path_escape(parameter_id)}", ctx=ctx)


class ProviderConfigurationLinkClient(ResourceClient):
    def list(
        self,
        workspace_id: str,
        options: ProviderConfigurationLinkListOptions | None = None,
        *,
        ctx: Context | None = None,
    ) -> ProviderConfigurationLinkList:
        require_id(workspace_id, "workspace ID")
        path = f"workspaces/{path_escape(workspace_id)}/provider-configuration-links"
        options = options or ProviderConfigurationLinkListOptions()
        return self._do("GET", path, options, ProviderConfigurationLinkList, ctx=ctx)

    def create(
        self,
        workspace_id: str,
        options: ProviderConfigurationLinkCreateOptions,
        *,
        ctx: Context | None = None,
    ) -> ProviderConfigurationLink:
        require_id(workspace_id, "workspace ID")
        if options.provider_configuration is not None:
            require_id(options.provider_configuration.id, "provider configuration ID")
        options = options.model_copy(update={"id": ""})
        path = f"workspaces/{path_escape(workspace_id)}/provider-configuration-links"
        return self._do("POST", path, options, ProviderConfigurationLink, ctx=ctx)

    def read(self, link_id: str, *, ctx: Context | None = None) -> ProviderConfigurationLink:
        require_id(link_id, "provider configuration link ID")
        path = f"provider-configuration-links/{path_escape(link_id)}"
        return self._do("GET", path, None, ProviderConfigurationLink, ctx=ctx)

    def update(
        self,
        link_id: str,
        options: ProviderConfigurationLinkUpdateOptions,
        *,
        ctx: Context | None = None,
    ) -> ProviderConfigurationLink:
        require_id(link_id, "provider configuration link ID")
        options = options.model_copy(update={"id": ""})
        path = f"provider-configuration-links/{path_escape(link_id)}"
        return self._do("PATCH", path, options, ProviderConfigurationLink, ctx=ctx)

    def delete(self, link_id: str, *, ctx: Context | None = None) -> None:
        require_id(link_id, "provider configuration link ID")
        self._do("DELETE", f"provider-configuration-links/{path_escape(link_id)}", ctx=ctx)
