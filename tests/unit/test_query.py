"""Tests for GET option encoding."""

from __future__ import annotations

from scalr.jsonapi import ListOptions
from scalr.models import (
    CategoryType,
    ProviderConfigurationFilter,
    ProviderConfigurationListOptions,
    VariableFilter,
    VariableListOptions,
    WebhookListOptions,
    WorkspaceListOptions,
)
from scalr.query import encode_query


class TestEncodeQuery:
    def test_empty_options(self):
        assert encode_query(ListOptions()) == []
        assert encode_query(None) == []

    def test_page_and_filter_aliases(self):
        options = WorkspaceListOptions(page_number=2, page_size=50, environment="env-1", name="prod")
        assert sorted(encode_query(options)) == [
            ("filter[environment]", "env-1"),
            ("filter[name]", "prod"),
            ("page[number]", "2"),
            ("page[size]", "50"),
        ]

    def test_nested_filter_flattens(self):
        options = VariableListOptions(
            filter=VariableFilter(workspace="ws-1", category=CategoryType.SHELL.value)
        )
        assert sorted(encode_query(options)) == [
            ("filter[category]", "shell"),
            ("filter[workspace]", "ws-1"),
        ]

    def test_nested_alias(self):
        options = ProviderConfigurationListOptions(filter=ProviderConfigurationFilter(provider_type="aws"))
        assert encode_query(options) == [("filter[provider-type]", "aws")]

    def test_booleans_are_lowercase(self):
        assert encode_query(WebhookListOptions(enabled=False)) == [("filter[webhook][enabled]", "false")]

    def test_raw_filter_values_pass_through(self):
        options = WorkspaceListOptions(workspace="in:ws-1,ws-2", name="like:prod")
        assert dict(encode_query(options)) == {
            "filter[workspace]": "in:ws-1,ws-2",
            "filter[name]": "like:prod",
        }

    def test_mapping_options(self):
        pairs = encode_query({"include": "created-by", "tags": ["a", "b"], "empty": "", "skip": None})
        assert pairs == [("include", "created-by"), ("tags", "a,b")]

    def test_enum_values(self):
        assert encode_query({"category": CategoryType.TERRAFORM}) == [("category", "terraform")]
