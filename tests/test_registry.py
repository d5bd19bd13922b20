"""Tests for the node registry."""

import pytest

from solmint.errors import UnknownNodeError
from solmint.nodes import NodeRegistry, default_registry
from solmint.nodes.mint_token import MintTokenNode


class TestNodeRegistry:
    def test_default_registry_has_mint_token(self):
        registry = default_registry()
        assert registry.names() == ["mint_token"]
        assert isinstance(registry.build("mint_token"), MintTokenNode)

    def test_build_returns_fresh_nodes(self):
        registry = default_registry()
        assert registry.build("mint_token") is not registry.build("mint_token")

    def test_registries_are_independent(self):
        first = default_registry()
        second = NodeRegistry()
        assert first.names() == ["mint_token"]
        assert second.names() == []

    def test_unknown_node(self):
        with pytest.raises(UnknownNodeError, match="Unknown node: nope"):
            default_registry().build("nope")

    def test_factory_name_mismatch(self):
        registry = NodeRegistry()
        registry.register("other", MintTokenNode)
        with pytest.raises(ValueError, match="built node 'mint_token'"):
            registry.build("other")

    def test_node_definitions(self):
        [definition] = default_registry().node_definitions()
        assert definition["name"] == "mint_token"
        assert "signature" in definition["outputs"]["properties"]
