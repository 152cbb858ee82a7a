"""YAML configuration loader for digest segmentation and storage."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Load .env file if it exists
load_dotenv()

# Config directory at the repository root
CONFIG_DIR = Path(__file__).resolve().parent.parent.parent / "configs"

DEFAULT_DATABASE_URL = "sqlite:///data/digest.db"


@dataclass
class SegmentConfig:
    """Configuration for the segmenter."""

    stop_marker: str | None = None

    def __post_init__(self) -> None:
        # An empty marker would truncate every article to nothing
        if self.stop_marker == "":
            self.stop_marker = None
        if self.stop_marker is not None and not isinstance(self.stop_marker, str):
            raise ValueError(f"stop_marker must be a string, got {type(self.stop_marker).__name__}")


@dataclass
class DatabaseConfig:
    url: str = DEFAULT_DATABASE_URL
    echo: bool = False

    def __post_init__(self) -> None:
        if not self.url:
            raise ValueError("database url must not be empty")


@dataclass
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8000


@dataclass
class DigestConfig:
    segment: SegmentConfig = field(default_factory=SegmentConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    server: ServerConfig = field(default_factory=ServerConfig)


def resolve_config_path(config: str) -> Path:
    """Resolve a config name (default/test) or a path to a YAML file."""
    path = Path(config)
    if path.suffix in (".yaml", ".yml"):
        return path
    return CONFIG_DIR / f"{config}.yaml"


def load_config(config: str | None = None) -> DigestConfig:
    """Load configuration from YAML file.

    Args:
        config: Config name (without .yaml extension) or path to a YAML file.
                If None, uses DIGEST_CONFIG env var or "default".

    Returns:
        Loaded DigestConfig object. Built-in defaults are used when the
        "default" config is not installed alongside the package.
    """
    if config is None:
        config = os.environ.get("DIGEST_CONFIG", "default")

    config_path = resolve_config_path(config)
    if not config_path.exists():
        if config == "default":
            logger.warning("Config file not found: %s, using built-in defaults", config_path)
            return _parse_config({})
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return _parse_config(data)


def _parse_config(data: dict) -> DigestConfig:
    """Parse config dictionary into DigestConfig object."""
    segment_raw = data.get("segment") or {}
    database_raw = data.get("database") or {}
    server_raw = data.get("server") or {}

    segment = SegmentConfig(
        stop_marker=segment_raw.get("stop_marker"),
    )

    # DATABASE_URL from the environment wins over the YAML value
    database = DatabaseConfig(
        url=os.environ.get("DATABASE_URL") or database_raw.get("url", DEFAULT_DATABASE_URL),
        echo=database_raw.get("echo", False),
    )

    server = ServerConfig(
        host=server_raw.get("host", "0.0.0.0"),
        port=server_raw.get("port", 8000),
    )

    return DigestConfig(segment=segment, database=database, server=server)
