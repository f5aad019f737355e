"""Read-only routes over the current token snapshot."""

from fastapi import APIRouter, Depends, HTTPException, Query

from tokengraph.api.deps import get_catalog, get_rules
from tokengraph.api.schemas import (
    DanglingAliasModel,
    DiagnosticsResponse,
    NameCollisionModel,
    ReloadResponse,
    StatsResponse,
    TokenDetailResponse,
    TokenListResponse,
    TokenResponse,
    TreeNodeResponse,
    TreeResponse,
    TypesResponse,
)
from tokengraph.components.catalog import CatalogSnapshot, TokenCatalog, run_reload
from tokengraph.components.formatter import color_preview, format_value
from tokengraph.components.graph import (
    BuildTreeInput,
    DependentsInput,
    TreeNode,
    alias_chain,
    run_build_tree,
    run_dependents,
)
from tokengraph.components.query import (
    ALL,
    TokenQuery,
    category_stats,
    distinct_resolved_types,
    run_query,
)
from tokengraph.components.tokens import Token
from tokengraph.rules.models import Rules

router = APIRouter()


# --- Mapping ---


def _token_response(token: Token, snapshot: CatalogSnapshot, rules: Rules) -> TokenResponse:
    dependents = snapshot.index.dependents_of(token.name)
    return TokenResponse(
        name=token.name,
        resolved_type=token.resolved_type,
        collection=token.collection_name,
        category=token.collection_category,
        display_value=format_value(token, rules.display.alias_prefix),
        color_preview=color_preview(token),
        alias_target=token.alias_target,
        is_leaf=not dependents,
        dependent_count=len(dependents),
    )


def _tree_response(node: TreeNode, snapshot: CatalogSnapshot, rules: Rules) -> TreeNodeResponse:
    return TreeNodeResponse(
        name=node.token.name,
        collection=node.token.collection_name,
        display_value=format_value(node.token, rules.display.alias_prefix),
        depth=node.depth,
        is_leaf=snapshot.index.is_leaf(node.token),
        truncated=node.truncated,
        cycle=node.cycle,
        children=[_tree_response(child, snapshot, rules) for child in node.children],
    )


def _get_token(snapshot: CatalogSnapshot, name: str) -> Token:
    token = snapshot.index.lookup(name)
    if token is None:
        raise HTTPException(status_code=404, detail=f"Token '{name}' not found")
    return token


# --- Routes ---


@router.get("", response_model=TokenListResponse)
def list_tokens(
    search: str = "",
    category: str = ALL,
    resolved_type: str = Query(default=ALL, alias="type"),
    catalog: TokenCatalog = Depends(get_catalog),
    rules: Rules = Depends(get_rules),
) -> TokenListResponse:
    """List tokens matching every filter, in dataset order."""
    snapshot = catalog.snapshot
    result = run_query(
        TokenQuery(search_term=search, category=category, resolved_type=resolved_type),
        snapshot.registry,
    )
    return TokenListResponse(
        items=[_token_response(token, snapshot, rules) for token in result.tokens],
        total=result.total,
    )


@router.get("/types", response_model=TypesResponse)
def list_types(catalog: TokenCatalog = Depends(get_catalog)) -> TypesResponse:
    return TypesResponse(types=distinct_resolved_types(catalog.snapshot.registry))


@router.get("/stats", response_model=StatsResponse)
def get_stats(catalog: TokenCatalog = Depends(get_catalog)) -> StatsResponse:
    stats = category_stats(catalog.snapshot.registry)
    return StatsResponse(
        raw=stats.raw,
        foundation=stats.foundation,
        component=stats.component,
        total=stats.total,
    )


@router.get("/diagnostics", response_model=DiagnosticsResponse)
def get_diagnostics(catalog: TokenCatalog = Depends(get_catalog)) -> DiagnosticsResponse:
    diagnostics = catalog.snapshot.diagnostics
    return DiagnosticsResponse(
        dangling_count=diagnostics.dangling_count,
        dangling_aliases=[
            DanglingAliasModel(
                token=warning.token.name,
                collection=warning.token.collection_name,
                target=warning.target,
            )
            for warning in diagnostics.dangling_aliases
        ],
        name_collisions=[
            NameCollisionModel(name=collision.name, collections=list(collision.collections))
            for collision in diagnostics.name_collisions
        ],
        cycles=[list(cycle) for cycle in diagnostics.cycles],
    )


@router.post("/reload", response_model=ReloadResponse)
def reload_tokens(catalog: TokenCatalog = Depends(get_catalog)) -> ReloadResponse:
    """Rebuild the snapshot from the dataset source."""
    result = run_reload(catalog)
    if not result.success:
        raise HTTPException(status_code=422, detail=result.error)
    return ReloadResponse(success=True, total=len(result.snapshot.registry))


# Token names are slash-separated, so ``/{name}/tree`` may itself be the
# full name of a token. An exact token match wins over the sub-resource.


def _namesake(snapshot: CatalogSnapshot, name: str, suffix: str) -> Token | None:
    return snapshot.index.lookup(f"{name}/{suffix}")


def _detail_response(token: Token, snapshot: CatalogSnapshot, rules: Rules) -> TokenDetailResponse:
    chain = alias_chain(token, snapshot.index)
    summary = _token_response(token, snapshot, rules)
    return TokenDetailResponse(
        **summary.model_dump(),
        values_by_mode=token.values_by_mode,
        alias_chain=list(chain.names),
        resolved_value=(
            format_value(chain.resolved, rules.display.alias_prefix) if chain.resolved else None
        ),
        chain_cyclic=chain.cyclic,
        chain_dangling=chain.dangling,
    )


@router.get("/{name:path}/dependents", response_model=TokenListResponse | TokenDetailResponse)
def list_dependents(
    name: str,
    catalog: TokenCatalog = Depends(get_catalog),
    rules: Rules = Depends(get_rules),
) -> TokenListResponse | TokenDetailResponse:
    """Tokens that alias the given token."""
    snapshot = catalog.snapshot
    namesake = _namesake(snapshot, name, "dependents")
    if namesake is not None:
        return _detail_response(namesake, snapshot, rules)

    _get_token(snapshot, name)
    result = run_dependents(DependentsInput(name=name), snapshot.index)
    return TokenListResponse(
        items=[_token_response(token, snapshot, rules) for token in result.dependents],
        total=result.total,
    )


@router.get("/{name:path}/tree", response_model=TreeResponse | TokenDetailResponse)
def get_tree(
    name: str,
    max_depth: int | None = Query(default=None, ge=0, le=32),
    catalog: TokenCatalog = Depends(get_catalog),
    rules: Rules = Depends(get_rules),
) -> TreeResponse | TokenDetailResponse:
    """Dependency tree rooted at the given token."""
    snapshot = catalog.snapshot
    namesake = _namesake(snapshot, name, "tree")
    if namesake is not None:
        return _detail_response(namesake, snapshot, rules)

    depth = rules.tree.max_depth if max_depth is None else max_depth
    result = run_build_tree(
        BuildTreeInput(root_name=name, max_depth=depth, strict=rules.tree.strict_cycles),
        snapshot.index,
    )
    if result.tree is None:
        status = 404 if snapshot.index.lookup(name) is None else 409
        raise HTTPException(status_code=status, detail=result.error)

    return TreeResponse(
        root=_tree_response(result.tree, snapshot, rules),
        max_depth=depth,
        size=result.tree.size(),
        height=result.tree.height(),
    )


@router.get("/{name:path}", response_model=TokenDetailResponse)
def get_token(
    name: str,
    catalog: TokenCatalog = Depends(get_catalog),
    rules: Rules = Depends(get_rules),
) -> TokenDetailResponse:
    """One token with its resolved alias chain."""
    snapshot = catalog.snapshot
    return _detail_response(_get_token(snapshot, name), snapshot, rules)
