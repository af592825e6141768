from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv

from .config import get_settings_module
from .container import Container, build_container
from .core.constants import DEFAULT_LOG_FORMAT
from .database.bootstrap import apply_schema, list_tables

logger = logging.getLogger(__name__)


def configure_logging(settings) -> None:
    level_name = str(getattr(settings, "LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=getattr(settings, "LOG_FORMAT", DEFAULT_LOG_FORMAT),
    )


def bootstrap() -> Container:
    """Load settings, set up logging and the schema, and wire the container."""
    load_dotenv(override=False)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(settings)

    db_config = getattr(settings, "DB_CONFIG")
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config)
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

    return build_container(db_config=db_config)
