"""Pydantic models for Scalr resources and their list/create/update options.

Resource models mirror what the API returns. Create/update option models are
resources too (they serialize as the request's primary data); their ``id`` is
blanked by the resource clients before sending. Unset (``None``) attributes
and relationships are left out of request bodies.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from scalr.jsonapi import Attributes, ListOptions, Relation, Resource, ResourceList


# ── Enumerations ──────────────────────────────────────────────────────

class CategoryType(str, Enum):
    ENV = "env"
    TERRAFORM = "terraform"
    SHELL = "shell"


class WorkspaceExecutionMode(str, Enum):
    REMOTE = "remote"
    LOCAL = "local"


class WorkspaceAutoQueueRuns(str, Enum):
    SKIP_FIRST = "skip_first"
    ALWAYS = "always"
    NEVER = "never"


class ConfigurationStatus(str, Enum):
    ERRORED = "errored"
    PENDING = "pending"
    UPLOADED = "uploaded"


class RunStatus(str, Enum):
    APPLIED = "applied"
    APPLY_QUEUED = "apply_queued"
    APPLYING = "applying"
    CANCELED = "canceled"
    CONFIRMED = "confirmed"
    COST_ESTIMATED = "cost_estimated"
    COST_ESTIMATING = "cost_estimating"
    DISCARDED = "discarded"
    ERRORED = "errored"
    PENDING = "pending"
    PLAN_QUEUED = "plan_queued"
    PLANNED = "planned"
    PLANNED_AND_FINISHED = "planned_and_finished"
    PLANNING = "planning"
    POLICY_CHECKED = "policy_checked"
    POLICY_CHECKING = "policy_checking"
    POLICY_OVERRIDE = "policy_override"
    POLICY_SOFT_FAILED = "policy_soft_failed"


class RunSource(str, Enum):
    API = "api"
    CONFIGURATION_VERSION = "configuration-version"
    UI = "ui"
    VCS = "vcs"
    CLI = "cli"


# ── Referenced resources ──────────────────────────────────────────────
# Resources this library does not manage directly but that appear as
# relationship targets.

class Account(Resource):
    jsonapi_type: ClassVar[str] = "accounts"

    name: str = ""


class User(Resource):
    jsonapi_type: ClassVar[str] = "users"

    email: str = ""
    username: str = ""
    full_name: str = ""


class IdentityProvider(Resource):
    jsonapi_type: ClassVar[str] = "identity-providers"

    name: str = ""


class AgentPool(Resource):
    jsonapi_type: ClassVar[str] = "agent-pools"

    name: str = ""


class VcsProvider(Resource):
    jsonapi_type: ClassVar[str] = "vcs-providers"

    name: str = ""
    vcs_type: str = ""


class VcsRevision(Resource):
    jsonapi_type: ClassVar[str] = "vcs-revisions"

    branch: str = ""
    commit_sha: str = ""
    commit_message: str = ""


class ModuleVersion(Resource):
    jsonapi_type: ClassVar[str] = "module-versions"

    version: str = ""


class Endpoint(Resource):
    jsonapi_type: ClassVar[str] = "endpoints"

    name: str = ""
    url: str = ""


class EventDefinition(Resource):
    jsonapi_type: ClassVar[str] = "event-definitions"


# ── Tags ──────────────────────────────────────────────────────────────

class Tag(Resource):
    jsonapi_type: ClassVar[str] = "tags"

    name: str = ""

    account: Annotated[Account | None, Relation()] = None


class TagRelation(Resource):
    """Bare tag reference used by the tag relationship endpoints."""

    jsonapi_type: ClassVar[str] = "tags"


class TagList(ResourceList[Tag]):
    pass


class TagListOptions(ListOptions):
    tag: str | None = Field(None, alias="filter[tag]")
    account: str | None = Field(None, alias="filter[account]")
    name: str | None = Field(None, alias="filter[name]")
    query: str | None = None


class TagCreateOptions(Resource):
    jsonapi_type: ClassVar[str] = "tags"

    name: str | None = None

    account: Annotated[Account | None, Relation()] = None


class TagUpdateOptions(Resource):
    jsonapi_type: ClassVar[str] = "tags"

    name: str | None = None


# ── Environments ──────────────────────────────────────────────────────

class Environment(Resource):
    jsonapi_type: ClassVar[str] = "environments"

    name: str = ""
    status: str = ""
    cost_estimation_enabled: bool = False
    created_at: datetime | None = None

    account: Annotated[Account | None, Relation()] = None
    created_by: Annotated[User | None, Relation()] = None
    tags: Annotated[list[Tag], Relation()] = Field(default_factory=list)


class EnvironmentList(ResourceList[Environment]):
    pass


class EnvironmentListOptions(ListOptions):
    name: str | None = Field(None, alias="filter[name]")
    account: str | None = Field(None, alias="filter[account]")
    include: str | None = None


class EnvironmentCreateOptions(Resource):
    jsonapi_type: ClassVar[str] = "environments"

    name: str | None = None
    cost_estimation_enabled: bool | None = None

    account: Annotated[Account | None, Relation()] = None
    tags: Annotated[list[Tag] | None, Relation()] = None


class EnvironmentUpdateOptions(Resource):
    jsonapi_type: ClassVar[str] = "environments"

    name: str | None = None
    cost_estimation_enabled: bool | None = None


# ── Workspaces ────────────────────────────────────────────────────────

class WorkspaceActions(Attributes):
    is_destroyable: bool = False


class WorkspacePermissions(Attributes):
    can_destroy: bool = False
    can_force_unlock: bool = False
    can_lock: bool = False
    can_queue_apply: bool = False
    can_queue_destroy: bool = False
    can_queue_run: bool = False
    can_read_settings: bool = False
    can_unlock: bool = False
    can_update: bool = False
    can_update_variable: bool = False


class Hooks(Attributes):
    pre_init: str | None = None
    pre_plan: str | None = None
    post_plan: str | None = None
    pre_apply: str | None = None
    post_apply: str | None = None


class WorkspaceVCSRepo(Attributes):
    branch: str | None = None
    identifier: str | None = None
    ingress_submodules: bool | None = None
    path: str | None = None
    trigger_prefixes: list[str] | None = None
    dry_runs_enabled: bool | None = None


class Workspace(Resource):
    jsonapi_type: ClassVar[str] = "workspaces"

    name: str = ""
    actions: WorkspaceActions | None = None
    auto_apply: bool = False
    force_latest_run: bool = False
    can_queue_destroy_plan: bool = False
    created_at: datetime | None = None
    file_triggers_enabled: bool = False
    locked: bool = False
    operations: bool = False
    execution_mode: str = ""
    permissions: WorkspacePermissions | None = None
    terraform_version: str = ""
    vcs_repo: WorkspaceVCSRepo | None = None
    working_directory: str = ""
    apply_schedule: str = ""
    destroy_schedule: str = ""
    has_resources: bool = False
    auto_queue_runs: str = ""
    hooks: Hooks | None = None
    run_operation_timeout: int | None = None
    var_files: list[str] = Field(default_factory=list)

    current_run: Annotated[Run | None, Relation()] = None
    environment: Annotated[Environment | None, Relation()] = None
    created_by: Annotated[User | None, Relation()] = None
    vcs_provider: Annotated[VcsProvider | None, Relation()] = None
    agent_pool: Annotated[AgentPool | None, Relation()] = None
    module_version: Annotated[ModuleVersion | None, Relation()] = None
    tags: Annotated[list[Tag], Relation()] = Field(default_factory=list)


class WorkspaceList(ResourceList[Workspace]):
    pass


class WorkspaceListOptions(ListOptions):
    workspace: str | None = Field(None, alias="filter[workspace]")
    environment: str | None = Field(None, alias="filter[environment]")
    agent_pool: str | None = Field(None, alias="filter[agent-pool]")
    name: str | None = Field(None, alias="filter[name]")
    tag: str | None = Field(None, alias="filter[tag]")
    include: str | None = None


class WorkspaceCreateOptions(Resource):
    jsonapi_type: ClassVar[str] = "workspaces"

    name: str | None = None
    auto_apply: bool | None = None
    force_latest_run: bool | None = None
    operations: bool | None = None
    execution_mode: WorkspaceExecutionMode | None = None
    terraform_version: str | None = None
    vcs_repo: WorkspaceVCSRepo | None = None
    hooks: Hooks | None = None
    working_directory: str | None = None
    auto_queue_runs: WorkspaceAutoQueueRuns | None = None
    var_files: list[str] | None = None
    run_operation_timeout: int | None = None

    environment: Annotated[Environment | None, Relation()] = None
    vcs_provider: Annotated[VcsProvider | None, Relation()] = None
    agent_pool: Annotated[AgentPool | None, Relation()] = None
    module_version: Annotated[ModuleVersion | None, Relation()] = None
    tags: Annotated[list[Tag] | None, Relation()] = None


class WorkspaceUpdateOptions(Resource):
    jsonapi_type: ClassVar[str] = "workspaces"

    name: str | None = None
    auto_apply: bool | None = None
    force_latest_run: bool | None = None
    file_triggers_enabled: bool | None = None
    operations: bool | None = None
    execution_mode: WorkspaceExecutionMode | None = None
    terraform_version: str | None = None
    vcs_repo: WorkspaceVCSRepo | None = None
    hooks: Hooks | None = None
    working_directory: str | None = None
    auto_queue_runs: WorkspaceAutoQueueRuns | None = None
    var_files: list[str] | None = None
    run_operation_timeout: int | None = None

    vcs_provider: Annotated[VcsProvider | None, Relation()] = None
    agent_pool: Annotated[AgentPool | None, Relation()] = None
    module_version: Annotated[ModuleVersion | None, Relation()] = None


class WorkspaceRunScheduleOptions(BaseModel):
    """Plain JSON body of the ``set-schedule`` action."""

    model_config = ConfigDict(populate_by_name=True)

    apply_schedule: str | None = Field(None, alias="apply-schedule")
    destroy_schedule: str | None = Field(None, alias="destroy-schedule")


class WorkspaceLockOptions(BaseModel):
    """Plain JSON body of the ``lock`` action."""

    reason: str | None = None


# ── Variables ─────────────────────────────────────────────────────────

class Variable(Resource):
    jsonapi_type: ClassVar[str] = "vars"

    key: str = ""
    value: str = ""
    category: str = ""
    description: str = ""
    hcl: bool = False
    sensitive: bool = False
    final: bool = False

    workspace: Annotated[Workspace | None, Relation()] = None
    environment: Annotated[Environment | None, Relation()] = None
    account: Annotated[Account | None, Relation()] = None


class VariableList(ResourceList[Variable]):
    pass


class VariableFilter(BaseModel):
    key: str | None = None
    category: str | None = None
    workspace: str | None = None
    environment: str | None = None
    account: str | None = None


class VariableListOptions(ListOptions):
    sort: str | None = None
    include: str | None = None
    filter: VariableFilter | None = None


class VariableCreateOptions(Resource):
    jsonapi_type: ClassVar[str] = "vars"

    key: str | None = None
    value: str | None = None
    category: CategoryType | None = None
    description: str | None = None
    hcl: bool | None = None
    sensitive: bool | None = None
    final: bool | None = None

    workspace: Annotated[Workspace | None, Relation()] = None
    environment: Annotated[Environment | None, Relation()] = None
    account: Annotated[Account | None, Relation()] = None


class VariableUpdateOptions(Resource):
    jsonapi_type: ClassVar[str] = "vars"

    key: str | None = None
    value: str | None = None
    description: str | None = None
    hcl: bool | None = None
    sensitive: bool | None = None
    final: bool | None = None


# ── Teams ─────────────────────────────────────────────────────────────

class Team(Resource):
    jsonapi_type: ClassVar[str] = "teams"

    name: str = ""
    description: str = ""

    account: Annotated[Account | None, Relation()] = None
    identity_provider: Annotated[IdentityProvider | None, Relation()] = None
    users: Annotated[list[User], Relation()] = Field(default_factory=list)


class TeamList(ResourceList[Team]):
    pass


class TeamListOptions(ListOptions):
    team: str | None = Field(None, alias="filter[team]")
    name: str | None = Field(None, alias="filter[name]")
    account: str | None = Field(None, alias="filter[account]")
    identity_provider: str | None = Field(None, alias="filter[identity-provider]")
    query: str | None = None
    sort: str | None = None
    include: str | None = None


class TeamCreateOptions(Resource):
    jsonapi_type: ClassVar[str] = "teams"

    name: str | None = None
    description: str | None = None

    account: Annotated[Account | None, Relation()] = None
    identity_provider: Annotated[IdentityProvider | None, Relation()] = None
    users: Annotated[list[User] | None, Relation()] = None


class TeamUpdateOptions(Resource):
    jsonapi_type: ClassVar[str] = "teams"

    name: str | None = None
    description: str | None = None

    users: Annotated[list[User] | None, Relation()] = None


# ── Webhooks ──────────────────────────────────────────────────────────

class Webhook(Resource):
    jsonapi_type: ClassVar[str] = "webhooks"

    name: str = ""
    enabled: bool = False
    last_triggered_at: datetime | None = None

    workspace: Annotated[Workspace | None, Relation()] = None
    environment: Annotated[Environment | None, Relation()] = None
    account: Annotated[Account | None, Relation()] = None
    endpoint: Annotated[Endpoint | None, Relation()] = None
    events: Annotated[list[EventDefinition], Relation()] = Field(default_factory=list)


class WebhookList(ResourceList[Webhook]):
    pass


class WebhookListOptions(ListOptions):
    query: str | None = None
    sort: str | None = None
    include: str | None = None
    enabled: bool | None = Field(None, alias="filter[webhook][enabled]")
    event: str | None = Field(None, alias="filter[event]")
    workspace: str | None = Field(None, alias="filter[workspace]")
    environment: str | None = Field(None, alias="filter[environment]")
    account: str | None = Field(None, alias="filter[account]")


class WebhookCreateOptions(Resource):
    jsonapi_type: ClassVar[str] = "webhooks"

    name: str | None = None
    enabled: bool | None = None

    workspace: Annotated[Workspace | None, Relation()] = None
    environment: Annotated[Environment | None, Relation()] = None
    account: Annotated[Account | None, Relation()] = None
    endpoint: Annotated[Endpoint | None, Relation()] = None
    events: Annotated[list[EventDefinition] | None, Relation()] = None


class WebhookUpdateOptions(Resource):
    jsonapi_type: ClassVar[str] = "webhooks"

    name: str | None = None
    enabled: bool | None = None

    endpoint: Annotated[Endpoint | None, Relation()] = None
    events: Annotated[list[EventDefinition] | None, Relation()] = None


# ── Configuration versions and runs ───────────────────────────────────

class ConfigurationVersion(Resource):
    jsonapi_type: ClassVar[str] = "configuration-versions"

    status: str = ""
    upload_url: str = ""

    workspace: Annotated[Workspace | None, Relation()] = None


class ConfigurationVersionCreateOptions(Resource):
    jsonapi_type: ClassVar[str] = "configuration-versions"

    workspace: Annotated[Workspace | None, Relation()] = None


class Run(Resource):
    jsonapi_type: ClassVar[str] = "runs"

    source: str = ""
    message: str = ""
    is_destroy: bool = False
    created_at: datetime | None = None
    status: str = ""

    vcs_revision: Annotated[VcsRevision | None, Relation()] = None
    configuration_version: Annotated[ConfigurationVersion | None, Relation()] = None
    workspace: Annotated[Workspace | None, Relation()] = None


class RunCreateOptions(Resource):
    jsonapi_type: ClassVar[str] = "runs"

    message: str | None = None
    is_destroy: bool | None = None

    configuration_version: Annotated[ConfigurationVersion | None, Relation()] = None
    workspace: Annotated[Workspace | None, Relation()] = None


# ── Provider configurations ───────────────────────────────────────────

class ProviderConfigurationParameter(Resource):
    jsonapi_type: ClassVar[str] = "provider-configuration-parameters"

    key: str = ""
    sensitive: bool = False
    value: str = ""
    description: str = ""


class ProviderConfigurationParameterList(ResourceList[ProviderConfigurationParameter]):
    pass


class ProviderConfigurationParameterListOptions(ListOptions):
    sort: str | None = None


class ProviderConfigurationParameterCreateOptions(Resource):
    jsonapi_type: ClassVar[str] = "provider-configuration-parameters"

    key: str | None = None
    sensitive: bool | None = None
    value: str | None = None
    description: str | None = None


class ProviderConfigurationParameterUpdateOptions(Resource):
    """Update payload; ``id`` names the parameter being changed."""

    jsonapi_type: ClassVar[str] = "provider-configuration-parameters"

    key: str | None = None
    sensitive: bool | None = None
    value: str | None = None
    description: str | None = None


class ProviderConfiguration(Resource):
    jsonapi_type: ClassVar[str] = "provider-configurations"

    name: str = ""
    provider_type: str = ""
    export_shell_variables: bool = False
    aws_access_key: str = ""
    aws_secret_key: str = ""
    azurerm_client_id: str = ""
    azurerm_client_secret: str = ""
    azurerm_subscription_id: str = ""
    azurerm_tenant_id: str = ""
    google_project: str = ""
    google_credentials: str = ""

    account: Annotated[Account | None, Relation()] = None
    parameters: Annotated[list[ProviderConfigurationParameter], Relation()] = Field(default_factory=list)


class ProviderConfigurationList(ResourceList[ProviderConfiguration]):
    pass


class ProviderConfigurationFilter(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    provider_type: str | None = Field(None, alias="provider-type")
    name: str | None = None
    account: str | None = None


class ProviderConfigurationListOptions(ListOptions):
    sort: str | None = None
    include: str | None = None
    filter: ProviderConfigurationFilter | None = None


class _ProviderConfigurationFields(Resource):
    jsonapi_type: ClassVar[str] = "provider-configurations"

    name: str | None = None
    export_shell_variables: bool | None = None
    aws_access_key: str | None = None
    aws_secret_key: str | None = None
    azurerm_client_id: str | None = None
    azurerm_client_secret: str | None = None
    azurerm_subscription_id: str | None = None
    azurerm_tenant_id: str | None = None
    google_project: str | None = None
    google_credentials: str | None = None


class ProviderConfigurationCreateOptions(_ProviderConfigurationFields):
    provider_type: str | None = None

    account: Annotated[Account | None, Relation()] = None


class ProviderConfigurationUpdateOptions(_ProviderConfigurationFields):
    pass


class ProviderConfigurationLink(Resource):
    jsonapi_type: ClassVar[str] = "provider-configuration-links"

    default: bool = False
    alias: str = ""

    provider_configuration: Annotated[ProviderConfiguration | None, Relation()] = None
    environment: Annotated[Environment | None, Relation()] = None
    workspace: Annotated[Workspace | None, Relation()] = None


class ProviderConfigurationLinkList(ResourceList[ProviderConfigurationLink]):
    pass


class ProviderConfigurationLinkListOptions(ListOptions):
    include: str | None = None


class ProviderConfigurationLinkCreateOptions(Resource):
    jsonapi_type: ClassVar[str] = "provider-configuration-links"

    alias: str | None = None

    provider_configuration: Annotated[ProviderConfiguration | None, Relation()] = None


class ProviderConfigurationLinkUpdateOptions(Resource):
    jsonapi_type: ClassVar[str] = "provider-configuration-links"

    alias: str | None = None


# Resolve forward references between the resources declared above.
for _model in list(globals().values()):
    if isinstance(_model, type) and issubclass(_model, BaseModel) and _model.__module__ == __name__:
        _model.model_rebuild()
del _model
