"""
Graph component - Alias dependency index, trees and diagnostics.
"""

from ._impl import (
    DependencyIndex,
    alias_chain,
    build_tree,
    diagnose,
    find_cycles,
    find_dangling_aliases,
    find_name_collisions,
)
from .component import run_build_tree, run_dependents
from .models import (
    DEFAULT_MAX_DEPTH,
    AliasChain,
    BuildTreeInput,
    BuildTreeOutput,
    CyclicAliasError,
    DanglingAliasWarning,
    DependentsInput,
    DependentsOutput,
    GraphDiagnostics,
    NameCollision,
    TreeNode,
)

__all__ = [
    # Entry points
    "run_dependents",
    "run_build_tree",
    # Functional core
    "DependencyIndex",
    "build_tree",
    "alias_chain",
    "diagnose",
    "find_cycles",
    "find_dangling_aliases",
    "find_name_collisions",
    # Models
    "TreeNode",
    "AliasChain",
    "GraphDiagnostics",
    "DanglingAliasWarning",
    "NameCollision",
    "BuildTreeInput",
    "BuildTreeOutput",
    "DependentsInput",
    "DependentsOutput",
    "DEFAULT_MAX_DEPTH",
    # Errors
    "CyclicAliasError",
]
