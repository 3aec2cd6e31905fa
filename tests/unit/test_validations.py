"""Tests for identifier and field shape checks."""

from __future__ import annotations

import pytest

from scalr.validations import valid_ipv4_network, valid_string, valid_string_id


class TestValidString:
    @pytest.mark.parametrize("value", ["a", " name ", "x y"])
    def test_accepts_non_blank(self, value):
        assert valid_string(value)

    @pytest.mark.parametrize("value", [None, "", "   ", "\t\n"])
    def test_rejects_blank(self, value):
        assert not valid_string(value)


class TestValidStringID:
    @pytest.mark.parametrize("value", ["ws-123", "env.a_b", "A1", "org-ABC.def_9"])
    def test_accepts_identifiers(self, value):
        assert valid_string_id(value)

    @pytest.mark.parametrize("value", [None, "", "ws 1", "ws/1", "ws-1\n", "ws?x", "ид"])
    def test_rejects_other_characters(self, value):
        assert not valid_string_id(value)


class TestValidIPv4Network:
    @pytest.mark.parametrize("value", ["10.0.0.1", "10.0.0.0/8", "10.0.0.1/24", "0.0.0.0/0"])
    def test_accepts_addresses_and_cidrs(self, value):
        assert valid_ipv4_network(value)

    @pytest.mark.parametrize("value", [None, "", "10.0.0.256", "10.0.0.0/33", "::1", "2001:db8::/32", "host"])
    def test_rejects_everything_else(self, value):
        assert not valid_ipv4_network(value)
