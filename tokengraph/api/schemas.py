from __future__ import annotations

from pydantic import BaseModel

from tokengraph.domain.entities import CollectionCategory


# --- Tokens ---
class TokenResponse(BaseModel):
    name: str
    resolved_type: str
    collection: str
    category: CollectionCategory
    display_value: str
    color_preview: str | None = None
    alias_target: str | None = None
    is_leaf: bool
    dependent_count: int


class TokenDetailResponse(TokenResponse):
    values_by_mode: dict[str, object]
    alias_chain: list[str]
    resolved_value: str | None = None
    chain_cyclic: bool = False
    chain_dangling: bool = False


class TokenListResponse(BaseModel):
    items: list[TokenResponse]
    total: int


class TypesResponse(BaseModel):
    types: list[str]


class StatsResponse(BaseModel):
    raw: int
    foundation: int
    component: int
    total: int


# --- Graph ---
class TreeNodeResponse(BaseModel):
    name: str
    collection: str
    display_value: str
    depth: int
    is_leaf: bool
    truncated: bool = False
    cycle: bool = False
    children: list[TreeNodeResponse] = []


class TreeResponse(BaseModel):
    root: TreeNodeResponse
    max_depth: int
    size: int
    height: int


class DanglingAliasModel(BaseModel):
    token: str
    collection: str
    target: str


class NameCollisionModel(BaseModel):
    name: str
    collections: list[str]


class DiagnosticsResponse(BaseModel):
    dangling_count: int
    dangling_aliases: list[DanglingAliasModel]
    name_collisions: list[NameCollisionModel]
    cycles: list[list[str]]


# --- Catalog ---
class ReloadResponse(BaseModel):
    success: bool
    total: int
    error: str | None = None
