"""
Database engine helpers. The engine is built lazily from
settings.database_url and cached until disposed.
"""

from pathlib import Path

from sqlmodel import SQLModel, create_engine

from ..core.config import settings

_ENGINE = None


def _prepare_sqlite_dir(url: str) -> None:
    if url.startswith("sqlite:///") and ":memory:" not in url:
        Path(url.replace("sqlite:///", "", 1)).parent.mkdir(parents=True, exist_ok=True)


def get_engine():
    global _ENGINE
    if _ENGINE is None:
        url = settings.database_url
        connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
        _prepare_sqlite_dir(url)
        _ENGINE = create_engine(url, echo=False, connect_args=connect_args)
    return _ENGINE


def init_db() -> None:
    from . import db_models  # noqa: F401
    SQLModel.metadata.create_all(get_engine())


def dispose_engine() -> None:
    """Drops the cached engine; the next get_engine() reads settings again."""
    global _ENGINE
    if _ENGINE is not None:
        _ENGINE.dispose()
    _ENGINE = None
