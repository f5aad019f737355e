import os
from functools import lru_cache
from pathlib import Path

from fastapi import Depends, Request

from tokengraph.adapters.clock import SystemClock
from tokengraph.adapters.factory import source_from_rules
from tokengraph.components.catalog import TokenCatalog
from tokengraph.rules.loader import load_rules
from tokengraph.rules.models import Rules


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.rules_path = Path(
            os.environ.get("TOKENGRAPH_RULES_PATH", str(self.base_dir / "rules.yaml"))
        )
        # Path or http(s) URL replacing the configured source
        self.dataset_override = os.environ.get("TOKENGRAPH_DATASET") or None


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules(settings: Settings = Depends(get_settings)) -> Rules:
    return load_rules(settings.rules_path)


# --- Catalog ---
def create_catalog(rules: Rules, settings: Settings) -> TokenCatalog:
    """
    Build a catalog wired to the configured dataset source.

    Raises:
        ValueError: If no dataset location is configured.
    """
    source = source_from_rules(
        rules, settings.rules_path.parent, override=settings.dataset_override
    )
    return TokenCatalog(
        source=source,
        classification=rules.classification.to_rules(),
        clock=SystemClock(),
    )


def get_catalog(request: Request) -> TokenCatalog:
    # Created by the app lifespan
    catalog: TokenCatalog = request.app.state.catalog
    return catalog
