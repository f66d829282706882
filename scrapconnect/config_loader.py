"""Config loading helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

import yaml

DEFAULT_CONFIG_DIR = Path(__file__).resolve().parent / "config"


@dataclass
class ConfigBundle:
    api: Dict[str, Any]
    pricing: Dict[str, Any]
    seed_listings: List[Dict[str, Any]]


@dataclass
class ApiSettings:
    base_url: str
    timeout_ms: int
    country_code: str
    cache_dir: str
    cache_record: str
    use_mocks: bool


def load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_all_configs(base_dir: str | Path = DEFAULT_CONFIG_DIR) -> ConfigBundle:
    base = Path(base_dir)
    return ConfigBundle(
        api=load_yaml(base / "api.yaml"),
        pricing=load_yaml(base / "pricing.yaml"),
        seed_listings=load_yaml(base / "seed_listings.yaml").get("listings", []),
    )


def build_api_settings(configs: ConfigBundle) -> ApiSettings:
    """Merge api.yaml with environment overrides (call load_dotenv first)."""
    api = configs.api
    return ApiSettings(
        base_url=os.getenv("SCRAPCONNECT_API_URL", api.get("base_url", "")),
        timeout_ms=int(os.getenv("SCRAPCONNECT_API_TIMEOUT_MS", api.get("timeout_ms", 30000))),
        country_code=str(api.get("country_code", "91")),
        cache_dir=os.getenv("SCRAPCONNECT_CACHE_DIR", api.get("cache_dir", "data")),
        cache_record=str(api.get("cache_record", "scrapconnect_user")),
        use_mocks=os.getenv("USE_MOCKS", "0") == "1",
    )
