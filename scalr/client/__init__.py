from scalr.client.base import BaseClient, ResourceClient
from scalr.client.environments import EnvironmentClient
from scalr.client.provider_configurations import (
    ParameterChanges,
    ProviderConfigurationClient,
    ProviderConfigurationLinkClient,
    ProviderConfigurationParameterClient,
)
from scalr.client.runs import ConfigurationVersionClient, RunClient
from scalr.client.scalr import ScalrClient
from scalr.client.tags import EnvironmentTagClient, TagClient, TagRelationsClient, WorkspaceTagClient
from scalr.client.teams import TeamClient
from scalr.client.variables import VariableClient
from scalr.client.webhooks import WebhookClient
from scalr.client.workspaces import WorkspaceClient

__all__ = [
    "BaseClient", "ResourceClient", "ScalrClient", "ParameterChanges",
    "ConfigurationVersionClient", "EnvironmentClient", "EnvironmentTagClient",
    "ProviderConfigurationClient", "ProviderConfigurationLinkClient",
    "ProviderConfigurationParameterClient", "RunClient", "TagClient",
    "TagRelationsClient", "TeamClient", "VariableClient", "WebhookClient",
    "WorkspaceClient", "WorkspaceTagClient",
]
