from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

# --- Enums / Literals ---
CollectionCategory = Literal["raw", "foundation", "component"]

COLLECTION_CATEGORIES: tuple[CollectionCategory, ...] = ("raw", "foundation", "component")

# --- Raw dataset shape (as exported by the design tool) ---


class RawVariable(BaseModel):
    name: str
    # Open enumeration: unknown types pass through untouched
    resolved_type: str = Field(default="", alias="resolvedType")
    values_by_mode: dict[str, Any] = Field(alias="valuesByMode")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class RawCollection(BaseModel):
    name: str
    variables: list[RawVariable]

    model_config = ConfigDict(extra="ignore")


class RawDataset(BaseModel):
    collections: list[RawCollection]

    model_config = ConfigDict(extra="ignore")
