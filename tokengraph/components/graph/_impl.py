"""
Dependency graph - Reverse alias index, dependency trees and diagnostics.

Functional Core - pure business logic.
"""

from __future__ import annotations

from collections import Counter

from tokengraph.components.tokens.models import Token, TokenRegistry

from .models import (
    DEFAULT_MAX_DEPTH,
    AliasChain,
    CyclicAliasError,
    DanglingAliasWarning,
    GraphDiagnostics,
    NameCollision,
    TreeNode,
)

# --- Dependency Index ---


class DependencyIndex:
    """
    Reverse alias index: token name -> tokens that alias it.

    Built in a single pass over the registry; lookups are O(1). Keys are
    bare names, so same-named tokens from different collections share an
    entry.
    """

    def __init__(self, registry: TokenRegistry) -> None:
        """Index the registry."""
        dependents: dict[str, list[Token]] = {}
        by_name: dict[str, Token] = {}

        for token in registry.tokens:
            by_name.setdefault(token.name, token)
            if token.alias_target is not None:
                dependents.setdefault(token.alias_target, []).append(token)

        self._dependents = {name: tuple(tokens) for name, tokens in dependents.items()}
        self._by_name = by_name
        self._name_counts = Counter(token.name for token in registry.tokens)

    def dependents_of(self, name: str) -> tuple[Token, ...]:
        """Tokens whose alias target is ``name``, in registry order."""
        return self._dependents.get(name, ())

    def is_leaf(self, token: Token) -> bool:
        """True when no token aliases this one."""
        return not self.dependents_of(token.name)

    def has_token(self, name: str) -> bool:
        return name in self._by_name

    def lookup(self, name: str) -> Token | None:
        """First token with this name, in registry order."""
        return self._by_name.get(name)

    def aliases_namesake(self, token: Token) -> bool:
        """
        True when ``token`` aliases its own name and another collection
        carries a token of that name.

        Such an alias points across collections (``Components/primary`` ->
        ``Color/primary``), not back at itself.
        """
        return token.alias_target == token.name and self._name_counts[token.name] > 1


# --- Alias Chains ---


def alias_chain(token: Token, index: DependencyIndex, max_steps: int = 64) -> AliasChain:
    """
    Follow alias targets forward from ``token``.

    Stops at the first literal, at a dangling target, when a token repeats,
    or after ``max_steps`` hops.
    """
    names = [token.name]
    seen = {token.key}
    current = token

    for _ in range(max_steps):
        target = current.alias_target
        if target is None:
            return AliasChain(names=tuple(names), resolved=current)

        names.append(target)
        next_token = index.lookup(target)
        if next_token is None:
            return AliasChain(names=tuple(names), resolved=None, dangling=True)
        if next_token.key in seen:
            return AliasChain(names=tuple(names), resolved=None, cyclic=True)
        seen.add(next_token.key)
        current = next_token

    return AliasChain(
        names=tuple(names),
        resolved=current if current.alias_target is None else None,
    )


# --- Tree Builder ---


def build_tree(
    root: Token,
    index: DependencyIndex,
    max_depth: int = DEFAULT_MAX_DEPTH,
    strict: bool = False,
) -> TreeNode:
    """
    Build the dependency tree rooted at ``root``.

    Children of a node are the tokens aliasing it. Expansion stops at
    ``max_depth`` edges from the root, and when a dependent is already an
    ancestor on the current path. Such a node is marked ``cycle`` and left
    unexpanded, unless ``strict`` is set. A token aliasing a same-named
    token in another collection is not its own dependent.

    Raises:
        ValueError: If max_depth is negative.
        CyclicAliasError: If strict and the alias relation loops.
    """
    if max_depth < 0:
        raise ValueError(f"max_depth must be >= 0, got {max_depth}")

    def expand(token: Token, depth: int, path: tuple[Token, ...]) -> TreeNode:
        dependents = [
            dependent
            for dependent in index.dependents_of(token.name)
            if not (dependent is token and index.aliases_namesake(token))
        ]
        if depth >= max_depth:
            return TreeNode(token=token, depth=depth, truncated=bool(dependents))

        ancestors = {ancestor.key for ancestor in path}
        children: list[TreeNode] = []
        for dependent in dependents:
            if dependent.key in ancestors:
                if strict:
                    names = tuple(ancestor.name for ancestor in path)
                    raise CyclicAliasError(names + (dependent.name,))
                children.append(TreeNode(token=dependent, depth=depth + 1, cycle=True))
            else:
                children.append(expand(dependent, depth + 1, path + (dependent,)))

        return TreeNode(token=token, depth=depth, children=tuple(children))

    return expand(root, 0, (root,))


# --- Diagnostics ---


def find_dangling_aliases(
    registry: TokenRegistry,
    index: DependencyIndex,
) -> tuple[DanglingAliasWarning, ...]:
    return tuple(
        DanglingAliasWarning(token=token, target=token.alias_target)
        for token in registry.tokens
        if token.alias_target is not None and not index.has_token(token.alias_target)
    )


def find_name_collisions(registry: TokenRegistry) -> tuple[NameCollision, ...]:
    """Names carried by more than one token."""
    occurrences: dict[str, list[str]] = {}
    for token in registry.tokens:
        occurrences.setdefault(token.name, []).append(token.collection_name)

    return tuple(
        NameCollision(name=name, collections=tuple(collections))
        for name, collections in occurrences.items()
        if len(collections) > 1
    )


def find_cycles(registry: TokenRegistry) -> tuple[tuple[str, ...], ...]:
    """
    Alias cycles, each as the names along the loop in chain order.

    Walks alias edges depth-first with an explicit stack and an on-path set.
    A self-named alias on a name shared across collections is a name
    collision, not a loop, and is left to ``find_name_collisions``.
    """
    name_counts = Counter(token.name for token in registry.tokens)
    edges: dict[str, list[str]] = {}
    for token in registry.tokens:
        if token.alias_target is None:
            continue
        if token.alias_target == token.name and name_counts[token.name] > 1:
            continue
        targets = edges.setdefault(token.name, [])
        if token.alias_target not in targets:
            targets.append(token.alias_target)

    done: set[str] = set()
    cycles: list[tuple[str, ...]] = []

    for start in edges:
        if start in done:
            continue

        path = [start]
        on_path = {start}
        stack = [iter(edges[start])]

        while stack:
            target = next(stack[-1], None)
            if target is None:
                stack.pop()
                finished = path.pop()
                on_path.discard(finished)
                done.add(finished)
                continue
            if target in on_path:
                cycles.append(tuple(path[path.index(target) :]))
            elif target not in done:
                path.append(target)
                on_path.add(target)
                stack.append(iter(edges.get(target, ())))

    return tuple(cycles)


def diagnose(registry: TokenRegistry, index: DependencyIndex) -> GraphDiagnostics:
    """Collect data-quality findings for a registry."""
    return GraphDiagnostics(
        dangling_aliases=find_dangling_aliases(registry, index),
        name_collisions=find_name_collisions(registry),
        cycles=find_cycles(registry),
    )
