"""
Graph component - Dependency lookups and tree building.

Shell Layer - resolves names and converts engine errors to outputs.
"""

from __future__ import annotations

from ._impl import DependencyIndex, build_tree
from .models import (
    BuildTreeInput,
    BuildTreeOutput,
    CyclicAliasError,
    DependentsInput,
    DependentsOutput,
)


def run_dependents(input_data: DependentsInput, index: DependencyIndex) -> DependentsOutput:
    """List the tokens aliasing a name."""
    dependents = index.dependents_of(input_data.name)
    return DependentsOutput(
        dependents=dependents,
        total=len(dependents),
        is_leaf=not dependents,
    )


def run_build_tree(input_data: BuildTreeInput, index: DependencyIndex) -> BuildTreeOutput:
    """Build the dependency tree for a token, looked up by name."""
    root = index.lookup(input_data.root_name)
    if root is None:
        return BuildTreeOutput(
            tree=None,
            success=False,
            error=f"Token '{input_data.root_name}' not found",
        )

    try:
        tree = build_tree(
            root,
            index,
            max_depth=input_data.max_depth,
            strict=input_data.strict,
        )
    except (CyclicAliasError, ValueError) as e:
        return BuildTreeOutput(tree=None, success=False, error=str(e))

    return BuildTreeOutput(tree=tree, success=True)
