"""Engine and session wiring for the record store."""

from __future__ import annotations

from functools import partial
from typing import Callable, Optional

from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from ..config import BaseConfig
from ..logging_config import get_logger

logger = get_logger(__name__)


def bootstrap_database(config: Optional[BaseConfig] = None) -> tuple[Engine, Callable[[], Session]]:
    """Create the engine, make sure every table exists, and return a session factory.

    Sessions keep loaded attributes after commit so repositories can hand
    detached rows back to the engine.
    """

    cfg = config or BaseConfig()
    engine = create_engine(cfg.DATABASE_URL, **cfg.sqlalchemy_engine_options())

    from .. import models  # noqa: F401  registers every table

    SQLModel.metadata.create_all(engine)
    logger.info("Database schema ready", extra={"url": str(engine.url)})
    return engine, partial(Session, engine, expire_on_commit=False)
