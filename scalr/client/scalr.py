"""Top-level client exposing one sub-client per resource family."""

from __future__ import annotations

from scalr.client.base import BaseClient
from scalr.client.environments import EnvironmentClient
from scalr.client.provider_configurations import (
    ProviderConfigurationClient,
    ProviderConfigurationLinkClient,
    ProviderConfigurationParameterClient,
)
from scalr.client.runs import ConfigurationVersionClient, RunClient
from scalr.client.tags import EnvironmentTagClient, TagClient, WorkspaceTagClient
from scalr.client.teams import TeamClient
from scalr.client.variables import VariableClient
from scalr.client.webhooks import WebhookClient
from scalr.client.workspaces import WorkspaceClient
from scalr.config import ScalrConfig


class ScalrClient(BaseClient):
    """Scalr API client.

    Usage::

        with ScalrClient(ScalrConfig(token="...")) as client:
            workspace = client.workspaces.read_by_id("ws-123")

    Safe to share across threads once configured.
    """

    def __init__(self, config: ScalrConfig | None = None):
        super().__init__(config)
        self.configuration_versions = ConfigurationVersionClient(self)
        self.environments = EnvironmentClient(self)
        self.environment_tags = EnvironmentTagClient(self)
        self.provider_configurations = ProviderConfigurationClient(self)
        self.provider_configuration_links = ProviderConfigurationLinkClient(self)
        self.provider_configuration_parameters = ProviderConfigurationParameterClient(self)
        self.runs = RunClient(self)
        self.tags = TagClient(self)
        self.teams = TeamClient(self)
        self.variables = VariableClient(self)
        self.webhooks = WebhookClient(self)
        self.workspaces = WorkspaceClient(self)
        self.workspace_tags = WorkspaceTagClient(self)
