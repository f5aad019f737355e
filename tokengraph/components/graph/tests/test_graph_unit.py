"""
Graph component unit tests.

Tests for the dependency index, alias chains, tree building and diagnostics.
"""

from __future__ import annotations

from typing import Any

import pytest

from tokengraph.components.graph import (
    BuildTreeInput,
    CyclicAliasError,
    DependencyIndex,
    DependentsInput,
    alias_chain,
    build_tree,
    diagnose,
    find_cycles,
    run_build_tree,
    run_dependents,
)
from tokengraph.components.tokens import TokenRegistry, ingest


def literal(name: str, value: Any = 1, resolved_type: str = "FLOAT") -> dict[str, Any]:
    return {"name": name, "resolvedType": resolved_type, "valuesByMode": {"m": {"value": value}}}


def alias(name: str, target: str, resolved_type: str = "FLOAT") -> dict[str, Any]:
    return {"name": name, "resolvedType": resolved_type, "valuesByMode": {"m": {"aliasOf": target}}}


def registry_of(*variables: dict[str, Any], collection: str = "Primitives") -> TokenRegistry:
    return ingest({"collections": [{"name": collection, "variables": list(variables)}]})


@pytest.fixture
def chain_registry() -> TokenRegistry:
    """A (literal 4) <- B <- C."""
    return registry_of(literal("A", 4), alias("B", "A"), alias("C", "B"))


@pytest.fixture
def cyclic_registry() -> TokenRegistry:
    """A <-> B, with X aliasing A."""
    return registry_of(alias("A", "B"), alias("B", "A"), alias("X", "A"))


# --- Dependency Index Tests ---


class TestDependencyIndex:
    """Test reverse alias lookups."""

    def test_chain_scenario(self, chain_registry: TokenRegistry) -> None:
        index = DependencyIndex(chain_registry)
        a, b, c = chain_registry.tokens

        assert index.is_leaf(a) is False
        assert index.is_leaf(b) is False
        assert index.is_leaf(c) is True
        assert index.dependents_of("A") == (b,)
        assert index.dependents_of("B") == (c,)

    def test_unknown_name_has_no_dependents(self, chain_registry: TokenRegistry) -> None:
        index = DependencyIndex(chain_registry)
        assert index.dependents_of("nope") == ()

    def test_dependents_keep_registry_order(self) -> None:
        registry = registry_of(
            alias("z", "base"), literal("base"), alias("a", "base"), alias("m", "base")
        )
        index = DependencyIndex(registry)
        assert [t.name for t in index.dependents_of("base")] == ["z", "a", "m"]

    def test_dangling_target_indexed(self) -> None:
        """Dangling targets still collect their dependents."""
        registry = registry_of(alias("a", "ghost"))
        index = DependencyIndex(registry)
        assert [t.name for t in index.dependents_of("ghost")] == ["a"]
        assert index.has_token("ghost") is False

    def test_lookup_returns_first_of_same_name(self) -> None:
        registry = ingest(
            {
                "collections": [
                    {"name": "One", "variables": [literal("dup", 1)]},
                    {"name": "Two", "variables": [literal("dup", 2)]},
                ]
            }
        )
        index = DependencyIndex(registry)
        found = index.lookup("dup")
        assert found is not None
        assert found.collection_name == "One"


# --- Alias Chain Tests ---


class TestAliasChain:
    def test_resolves_to_literal(self, chain_registry: TokenRegistry) -> None:
        index = DependencyIndex(chain_registry)
        chain = alias_chain(chain_registry.tokens[2], index)
        assert chain.names == ("C", "B", "A")
        assert chain.resolved is chain_registry.tokens[0]
        assert not chain.cyclic and not chain.dangling

    def test_literal_chain_is_itself(self, chain_registry: TokenRegistry) -> None:
        index = DependencyIndex(chain_registry)
        chain = alias_chain(chain_registry.tokens[0], index)
        assert chain.names == ("A",)
        assert chain.resolved is chain_registry.tokens[0]

    def test_dangling(self) -> None:
        registry = registry_of(alias("a", "ghost"))
        chain = alias_chain(registry.tokens[0], DependencyIndex(registry))
        assert chain.names == ("a", "ghost")
        assert chain.dangling
        assert chain.resolved is None

    def test_cycle(self, cyclic_registry: TokenRegistry) -> None:
        chain = alias_chain(cyclic_registry.tokens[2], DependencyIndex(cyclic_registry))
        assert chain.names == ("X", "A", "B", "A")
        assert chain.cyclic
        assert chain.resolved is None


# --- Tree Builder Tests ---


class TestBuildTree:
    """Test bounded-depth dependency trees."""

    def test_chain_shape(self, chain_registry: TokenRegistry) -> None:
        index = DependencyIndex(chain_registry)
        tree = build_tree(chain_registry.tokens[0], index, max_depth=4)

        assert tree.token.name == "A"
        assert [child.token.name for child in tree.children] == ["B"]
        assert [grand.token.name for grand in tree.children[0].children] == ["C"]
        assert tree.size() == 3
        assert tree.height() == 2

    def test_depth_cap_truncates(self) -> None:
        registry = registry_of(
            literal("t0"),
            alias("t1", "t0"),
            alias("t2", "t1"),
            alias("t3", "t2"),
        )
        index = DependencyIndex(registry)
        tree = build_tree(registry.tokens[0], index, max_depth=2)

        assert tree.height() == 2
        deepest = tree.children[0].children[0]
        assert deepest.token.name == "t2"
        assert deepest.children == ()
        assert deepest.truncated is True

    def test_zero_depth_is_root_only(self, chain_registry: TokenRegistry) -> None:
        tree = build_tree(chain_registry.tokens[0], DependencyIndex(chain_registry), max_depth=0)
        assert tree.size() == 1
        assert tree.truncated is True

    def test_leaf_root(self, chain_registry: TokenRegistry) -> None:
        tree = build_tree(chain_registry.tokens[2], DependencyIndex(chain_registry))
        assert tree.children == ()
        assert tree.truncated is False

    def test_negative_depth_rejected(self, chain_registry: TokenRegistry) -> None:
        with pytest.raises(ValueError):
            build_tree(chain_registry.tokens[0], DependencyIndex(chain_registry), max_depth=-1)

    def test_cycle_marked_not_reexpanded(self, cyclic_registry: TokenRegistry) -> None:
        index = DependencyIndex(cyclic_registry)
        tree = build_tree(cyclic_registry.tokens[0], index, max_depth=10)

        # A's dependents: B (alias of A) and X
        assert [child.token.name for child in tree.children] == ["B", "X"]
        b_node = tree.children[0]
        assert [n.token.name for n in b_node.children] == ["A"]
        assert b_node.children[0].cycle is True
        assert b_node.children[0].children == ()
        assert tree.height() == 2

    def test_self_alias(self) -> None:
        registry = registry_of(alias("loop", "loop"))
        tree = build_tree(registry.tokens[0], DependencyIndex(registry))
        assert len(tree.children) == 1
        assert tree.children[0].cycle is True

    def test_strict_raises_on_cycle(self, cyclic_registry: TokenRegistry) -> None:
        index = DependencyIndex(cyclic_registry)
        with pytest.raises(CyclicAliasError) as exc:
            build_tree(cyclic_registry.tokens[0], index, strict=True)
        assert exc.value.path == ("A", "B", "A")

    def test_diamond_expands_both_paths(self) -> None:
        """Shared dependents are not mistaken for cycles."""
        registry = registry_of(
            literal("base"),
            alias("left", "base"),
            alias("right", "base"),
            alias("joined", "left"),
        )
        tree = build_tree(registry.tokens[0], DependencyIndex(registry))
        assert tree.size() == 4
        assert not any(node.cycle for node in tree.flatten())

    def test_flatten_preorder(self, chain_registry: TokenRegistry) -> None:
        tree = build_tree(chain_registry.tokens[0], DependencyIndex(chain_registry))
        assert [(n.depth, n.token.name) for n in tree.flatten()] == [
            (0, "A"),
            (1, "B"),
            (2, "C"),
        ]


# --- Diagnostics Tests ---


class TestDiagnose:
    def test_clean_registry(self, chain_registry: TokenRegistry) -> None:
        diagnostics = diagnose(chain_registry, DependencyIndex(chain_registry))
        assert diagnostics.is_clean
        assert diagnostics.dangling_count == 0

    def test_dangling_aliases(self) -> None:
        registry = registry_of(literal("a"), alias("b", "ghost"), alias("c", "a"))
        diagnostics = diagnose(registry, DependencyIndex(registry))
        assert diagnostics.dangling_count == 1
        warning = diagnostics.dangling_aliases[0]
        assert warning.token.name == "b"
        assert warning.target == "ghost"
        assert "ghost" in warning.message

    def test_name_collisions(self) -> None:
        registry = ingest(
            {
                "collections": [
                    {"name": "Color", "variables": [literal("shared"), literal("only")]},
                    {"name": "Components", "variables": [literal("shared")]},
                ]
            }
        )
        diagnostics = diagnose(registry, DependencyIndex(registry))
        assert len(diagnostics.name_collisions) == 1
        assert diagnostics.name_collisions[0].name == "shared"
        assert diagnostics.name_collisions[0].collections == ("Color", "Components")

    def test_cycles(self, cyclic_registry: TokenRegistry) -> None:
        assert find_cycles(cyclic_registry) == (("A", "B"),)

    def test_longer_cycle_reported_once(self) -> None:
        registry = registry_of(alias("a", "b"), alias("b", "c"), alias("c", "a"), alias("d", "a"))
        assert find_cycles(registry) == (("a", "b", "c"),)

    def test_acyclic_has_no_cycles(self, chain_registry: TokenRegistry) -> None:
        assert find_cycles(chain_registry) == ()


class TestNamesakeAliases:
    """A component token aliasing a same-named token in another collection."""

    @pytest.fixture
    def namesake_registry(self) -> TokenRegistry:
        return ingest(
            {
                "collections": [
                    {"name": "Color", "variables": [literal("primary", resolved_type="COLOR")]},
                    {
                        "name": "Components",
                        "variables": [
                            alias("primary", "primary", resolved_type="COLOR"),
                            alias("button/bg", "primary", resolved_type="COLOR"),
                        ],
                    },
                ]
            }
        )

    def test_not_reported_as_cycle(self, namesake_registry: TokenRegistry) -> None:
        diagnostics = diagnose(namesake_registry, DependencyIndex(namesake_registry))
        assert diagnostics.cycles == ()
        assert [c.name for c in diagnostics.name_collisions] == ["primary"]

    def test_tree_has_no_cycle_nodes(self, namesake_registry: TokenRegistry) -> None:
        index = DependencyIndex(namesake_registry)
        color_primary = namesake_registry.tokens[0]

        tree = build_tree(color_primary, index, strict=True)

        assert not any(node.cycle for node in tree.flatten())
        component_primary = tree.children[0]
        assert component_primary.token.collection_name == "Components"
        assert [n.token.name for n in component_primary.children] == ["button/bg"]

    def test_chain_resolves_across_collections(self, namesake_registry: TokenRegistry) -> None:
        index = DependencyIndex(namesake_registry)
        chain = alias_chain(namesake_registry.tokens[1], index)
        assert chain.names == ("primary", "primary")
        assert chain.resolved is namesake_registry.tokens[0]
        assert not chain.cyclic

    def test_unshared_self_alias_is_still_a_cycle(self) -> None:
        registry = registry_of(alias("loop", "loop"))
        assert find_cycles(registry) == (("loop",),)


# --- Entry Point Tests ---


class TestEntryPoints:
    def test_run_dependents(self, chain_registry: TokenRegistry) -> None:
        result = run_dependents(DependentsInput(name="A"), DependencyIndex(chain_registry))
        assert result.total == 1
        assert result.is_leaf is False

    def test_run_dependents_leaf(self, chain_registry: TokenRegistry) -> None:
        result = run_dependents(DependentsInput(name="C"), DependencyIndex(chain_registry))
        assert result.dependents == ()
        assert result.is_leaf is True

    def test_run_build_tree(self, chain_registry: TokenRegistry) -> None:
        result = run_build_tree(BuildTreeInput(root_name="A"), DependencyIndex(chain_registry))
        assert result.success is True
        assert result.tree is not None
        assert result.tree.size() == 3

    def test_run_build_tree_unknown_root(self, chain_registry: TokenRegistry) -> None:
        result = run_build_tree(BuildTreeInput(root_name="nope"), DependencyIndex(chain_registry))
        assert result.success is False
        assert result.tree is None
        assert result.error == "Token 'nope' not found"

    def test_run_build_tree_strict_cycle(self, cyclic_registry: TokenRegistry) -> None:
        result = run_build_tree(
            BuildTreeInput(root_name="A", strict=True), DependencyIndex(cyclic_registry)
        )
        assert result.success is False
        assert result.error is not None
        assert "Cyclic alias chain" in result.error
