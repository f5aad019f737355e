"""
Graph component - Data models.

Dependency tree nodes, diagnostics records and graph errors.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from tokengraph.components.tokens.models import Token, TokenGraphError

DEFAULT_MAX_DEPTH = 4

# --- Tree ---


@dataclass(frozen=True)
class TreeNode:
    """
    One node of a dependency tree.

    ``children`` are the tokens that alias this node's token. A node is a
    leaf of the *tree* when the depth cap or a cycle stopped expansion,
    independent of whether its token is a leaf in the dataset.
    """

    token: Token
    depth: int = 0
    children: tuple[TreeNode, ...] = ()
    truncated: bool = False
    cycle: bool = False

    def size(self) -> int:
        """Number of nodes in this subtree, including this one."""
        return 1 + sum(child.size() for child in self.children)

    def height(self) -> int:
        """Longest path from this node to a descendant, in edges."""
        if not self.children:
            return 0
        return 1 + max(child.height() for child in self.children)

    def flatten(self) -> Iterator[TreeNode]:
        """Yield nodes in pre-order."""
        yield self
        for child in self.children:
            yield from child.flatten()


# --- Input Models ---


@dataclass(frozen=True)
class BuildTreeInput:
    """Input for building a dependency tree."""

    root_name: str
    max_depth: int = DEFAULT_MAX_DEPTH
    strict: bool = False


@dataclass(frozen=True)
class DependentsInput:
    """Input for listing a token's dependents."""

    name: str


# --- Output Models ---


@dataclass(frozen=True)
class BuildTreeOutput:
    """Output from tree building."""

    tree: TreeNode | None
    success: bool
    error: str | None = None


@dataclass(frozen=True)
class DependentsOutput:
    """Output from a dependents lookup."""

    dependents: tuple[Token, ...]
    total: int
    is_leaf: bool


# --- Diagnostics ---


@dataclass(frozen=True)
class DanglingAliasWarning:
    """Alias whose target names no token in the registry."""

    token: Token
    target: str

    @property
    def message(self) -> str:
        return f"'{self.token.name}' aliases unknown token '{self.target}'"


@dataclass(frozen=True)
class NameCollision:
    """Token name shared by more than one collection."""

    name: str
    collections: tuple[str, ...]


@dataclass(frozen=True)
class GraphDiagnostics:
    """Data-quality findings for one registry snapshot."""

    dangling_aliases: tuple[DanglingAliasWarning, ...] = ()
    name_collisions: tuple[NameCollision, ...] = ()
    cycles: tuple[tuple[str, ...], ...] = ()

    @property
    def dangling_count(self) -> int:
        return len(self.dangling_aliases)

    @property
    def is_clean(self) -> bool:
        return not (self.dangling_aliases or self.name_collisions or self.cycles)


# --- Error Types ---


class CyclicAliasError(TokenGraphError):
    """Alias relation loops back on itself."""

    def __init__(self, path: tuple[str, ...]) -> None:
        self.path = path
        super().__init__(f"Cyclic alias chain: {' -> '.join(path)}")


# --- Alias Chains ---


@dataclass(frozen=True)
class AliasChain:
    """Forward walk from a token through its alias targets."""

    names: tuple[str, ...]
    resolved: Token | None
    cyclic: bool = False
    dangling: bool = False
