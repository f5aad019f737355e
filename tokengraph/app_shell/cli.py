import argparse
import logging
import sys
from pathlib import Path

from tokengraph.adapters.clock import SystemClock
from tokengraph.adapters.factory import source_from_rules
from tokengraph.components.catalog import CatalogSnapshot, TokenCatalog
from tokengraph.components.formatter import format_value
from tokengraph.components.graph import BuildTreeInput, TreeNode, run_build_tree
from tokengraph.components.query import (
    ALL,
    TokenQuery,
    category_stats,
    distinct_resolved_types,
    run_query,
)
from tokengraph.components.tokens import DataFormatError, DatasetFetchError
from tokengraph.rules.loader import load_rules
from tokengraph.rules.models import Rules

logger = logging.getLogger("cli")

RULES_PATH = "rules.yaml"


def get_catalog(rules: Rules, rules_dir: Path, dataset: str | None) -> TokenCatalog:
    try:
        source = source_from_rules(rules, rules_dir, override=dataset)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    catalog = TokenCatalog(
        source=source,
        classification=rules.classification.to_rules(),
        clock=SystemClock(),
    )
    try:
        catalog.load()
    except (DataFormatError, DatasetFetchError, FileNotFoundError):
        # Already logged by the catalog
        sys.exit(1)
    return catalog


def render_tree(node: TreeNode, snapshot: CatalogSnapshot, alias_prefix: str) -> list[str]:
    lines = []
    for item in node.flatten():
        markers = []
        if snapshot.index.is_leaf(item.token):
            markers.append("leaf")
        if item.cycle:
            markers.append("cycle")
        if item.truncated:
            markers.append("...")
        suffix = f" [{', '.join(markers)}]" if markers else ""
        value = format_value(item.token, alias_prefix)
        lines.append(f"{'  ' * item.depth}{item.token.name} = {value}{suffix}")
    return lines


def handle_list(snapshot: CatalogSnapshot, rules: Rules, args: argparse.Namespace) -> None:
    result = run_query(
        TokenQuery(search_term=args.search, category=args.category, resolved_type=args.type),
        snapshot.registry,
    )
    for token in result.tokens:
        value = format_value(token, rules.display.alias_prefix)
        print(f"{token.name}\t{token.resolved_type}\t{token.collection_category}\t{value}")
    print(f"{result.total} tokens")


def handle_types(snapshot: CatalogSnapshot) -> None:
    for resolved_type in distinct_resolved_types(snapshot.registry):
        print(resolved_type)


def handle_stats(snapshot: CatalogSnapshot) -> None:
    stats = category_stats(snapshot.registry)
    print(f"Total:      {stats.total}")
    print(f"Raw:        {stats.raw}")
    print(f"Foundation: {stats.foundation}")
    print(f"Component:  {stats.component}")


def handle_tree(snapshot: CatalogSnapshot, rules: Rules, args: argparse.Namespace) -> None:
    max_depth = rules.tree.max_depth if args.max_depth is None else args.max_depth
    result = run_build_tree(
        BuildTreeInput(root_name=args.name, max_depth=max_depth, strict=rules.tree.strict_cycles),
        snapshot.index,
    )
    if result.tree is None:
        logger.error(result.error)
        sys.exit(1)

    for line in render_tree(result.tree, snapshot, rules.display.alias_prefix):
        print(line)


def handle_diagnostics(snapshot: CatalogSnapshot) -> None:
    diagnostics = snapshot.diagnostics
    print(f"Dangling aliases: {diagnostics.dangling_count}")
    for warning in diagnostics.dangling_aliases:
        print(f"  {warning.message}")
    print(f"Name collisions: {len(diagnostics.name_collisions)}")
    for collision in diagnostics.name_collisions:
        print(f"  {collision.name}: {', '.join(collision.collections)}")
    print(f"Alias cycles: {len(diagnostics.cycles)}")
    for cycle in diagnostics.cycles:
        print(f"  {' -> '.join(cycle + cycle[:1])}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Design token graph CLI")
    parser.add_argument("--rules", default=RULES_PATH, help="Path to rules.yaml")
    parser.add_argument("--dataset", help="Dataset path or URL (overrides rules)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # list
    list_parser = subparsers.add_parser("list", help="List tokens")
    list_parser.add_argument("--search", default="", help="Case-insensitive name filter")
    list_parser.add_argument(
        "--category", default=ALL, help="raw, foundation, component or all"
    )
    list_parser.add_argument("--type", default=ALL, help="Resolved type or all")

    # types / stats / diagnostics
    subparsers.add_parser("types", help="List resolved types present")
    subparsers.add_parser("stats", help="Token counts per category")
    subparsers.add_parser("diagnostics", help="Dangling aliases, collisions, cycles")

    # tree
    tree_parser = subparsers.add_parser("tree", help="Show tokens depending on a token")
    tree_parser.add_argument("name", help="Root token name")
    tree_parser.add_argument("--max-depth", type=int, default=None, help="Depth cap")

    return parser


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(level=logging.INFO)
    args = build_parser().parse_args(argv)

    rules_path = Path(args.rules)
    try:
        rules = load_rules(rules_path)
    except FileNotFoundError:
        logger.error(f"Rules file {rules_path} not found.")
        sys.exit(1)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    snapshot = get_catalog(rules, rules_path.parent, args.dataset).snapshot

    if args.command == "list":
        handle_list(snapshot, rules, args)
    elif args.command == "types":
        handle_types(snapshot)
    elif args.command == "stats":
        handle_stats(snapshot)
    elif args.command == "tree":
        handle_tree(snapshot, rules, args)
    elif args.command == "diagnostics":
        handle_diagnostics(snapshot)


if __name__ == "__main__":
    main()
