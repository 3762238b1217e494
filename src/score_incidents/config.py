"""Configuration loader for score_incidents."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from common.config import find_config_path, load_yaml
from ingest_reports.models import DEFAULT_USER_AGENT, FetchConfig, StateConfig

CONFIG_DIR = Path(__file__).parent / "configs"


@dataclass
class OutputConfig:
    path: Optional[str] = None  # None writes CSV to stdout
    top_k: int = 10


@dataclass
class Config:
    fetch: FetchConfig
    state: StateConfig = field(default_factory=StateConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    extract_workers: int = 4


def load_config(config_name: str | None = None) -> Config:
    """Load configuration from YAML file.

    Args:
        config_name: Name of a config in the configs directory (without .yaml)
                    or a path to a YAML file. If None, uses the CONFIG_ENV
                    env var or "prod".

    Returns:
        Loaded Config object
    """
    config_path = find_config_path(config_name, CONFIG_DIR, env_var="CONFIG_ENV")
    return _parse_config(load_yaml(config_path))


def _parse_config(data: dict) -> Config:
    """Parse config dictionary into Config object."""
    fetch_data = data.get("fetch", {})
    if not fetch_data.get("url_template"):
        raise ValueError("fetch.url_template is required")

    fetch = FetchConfig(
        url_template=fetch_data["url_template"],
        concurrency=fetch_data.get("concurrency", 4),
        request_timeout=fetch_data.get("request_timeout", 30),
        run_timeout=fetch_data.get("run_timeout"),
        user_agent=fetch_data.get("user_agent", DEFAULT_USER_AGENT),
    )

    state = StateConfig(
        path=data.get("state", {}).get("path", "output/daily_reports.xml"),
        channel_title=data.get("state", {}).get("channel_title", "Daily incident reports"),
    )

    output = OutputConfig(
        path=data.get("output", {}).get("path"),
        top_k=data.get("output", {}).get("top_k", 10),
    )

    return Config(
        fetch=fetch,
        state=state,
        output=output,
        extract_workers=data.get("extract_workers", 4),
    )
