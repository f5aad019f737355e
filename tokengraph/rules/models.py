from typing import Literal

from pydantic import BaseModel, Field, model_validator

from tokengraph.components.tokens.models import ClassificationRules


class ClassificationSection(BaseModel):
    foundation_collections: list[str] = Field(default_factory=lambda: ["Typography", "Color"])
    component_collections: list[str] = Field(default_factory=lambda: ["Components"])

    @model_validator(mode="after")
    def check_disjoint(self) -> "ClassificationSection":
        overlap = set(self.foundation_collections) & set(self.component_collections)
        if overlap:
            raise ValueError(
                f"collections listed as both foundation and component: {sorted(overlap)}"
            )
        return self

    def to_rules(self) -> ClassificationRules:
        return ClassificationRules(
            foundation_collections=frozenset(self.foundation_collections),
            component_collections=frozenset(self.component_collections),
        )

class TreeSection(BaseModel):
    max_depth: int = Field(default=4, ge=0)
    strict_cycles: bool = False

class SourceSection(BaseModel):
    kind: Literal["file", "http"] = "file"
    path: str | None = None
    url: str | None = None
    timeout_seconds: float = Field(default=10.0, gt=0)
    retries: int = Field(default=2, ge=0)

    @model_validator(mode="after")
    def check_location(self) -> "SourceSection":
        if self.kind == "http" and not self.url:
            raise ValueError("source.url is required when source.kind is 'http'")
        return self

class DisplaySection(BaseModel):
    alias_prefix: str = "→ "

class Rules(BaseModel):
    classification: ClassificationSection = Field(default_factory=ClassificationSection)
    tree: TreeSection = Field(default_factory=TreeSection)
    source: SourceSection = Field(default_factory=SourceSection)
    display: DisplaySection = Field(default_factory=DisplaySection)
