import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from data.search_normalizer import MAX_QUERY_LENGTH

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineSettings:
    query_max_length: int = MAX_QUERY_LENGTH
    dataset_path: Optional[str] = None
    taxonomy_path: Optional[str] = None
    tag_alias_path: Optional[str] = None
    log_level: str = "INFO"


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        log.warning("%s=%r is not an integer – using default %s", name, raw, default)
        return default
    if value <= 0:
        log.warning("%s=%s must be positive – using default %s", name, value, default)
        return default
    return value


def settings_from_env() -> EngineSettings:
    return EngineSettings(
        query_max_length=_env_int("QUERY_MAX_LENGTH", MAX_QUERY_LENGTH),
        dataset_path=os.environ.get("DATASET_PATH") or None,
        taxonomy_path=os.environ.get("TAXONOMY_PATH") or None,
        tag_alias_path=os.environ.get("TAG_ALIAS_PATH") or None,
        log_level=(os.environ.get("LOG_LEVEL") or "INFO").upper(),
    )


def load_config(env_path: str | None = None) -> EngineSettings:
    env_file = Path(env_path) if env_path else Path(".env")
    if not env_file.exists():
        log.warning("'%s' not found – using defaults. Copy '.env.template' to '.env'.", env_file)
    load_dotenv(dotenv_path=env_file if env_file.exists() else None)
    settings = settings_from_env()
    log.info("Configuration loaded (query_max_length=%s).", settings.query_max_length)
    return settings


def configure_logging(settings: EngineSettings) -> None:
    level = getattr(logging, settings.log_level, None)
    if not isinstance(level, int):
        log.warning("unknown LOG_LEVEL %r – using INFO", settings.log_level)
        level = logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s [%(levelname)s] %(message)s")
