from pathlib import Path
from typing import Generator

from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from matchday import config

DATABASE_URL = config.DATABASE_URL

_is_sqlite = DATABASE_URL.startswith("sqlite")

if _is_sqlite:
    # busy timeout doubles as the per-call store timeout for SQLite
    _connect_args = {"check_same_thread": False, "timeout": config.STORE_TIMEOUT_SECONDS}
    _engine_kwargs = {}
    db_path = DATABASE_URL.replace("sqlite:///", "", 1)
    if db_path and db_path != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
else:
    _connect_args = {"connect_timeout": int(config.STORE_TIMEOUT_SECONDS)}
    _engine_kwargs = {"pool_timeout": config.STORE_TIMEOUT_SECONDS, "pool_pre_ping": True}

engine: Engine = create_engine(
    DATABASE_URL,
    echo=config.SQL_ECHO,
    connect_args=_connect_args,
    **_engine_kwargs,
)


def get_session() -> Generator[Session, None, None]:
    """Get database session"""
    with Session(engine) as session:
        yield session


def init_db() -> None:
    """Initialize database - create all tables"""
    # Import all models to ensure they're registered with SQLModel metadata
    import matchday.models  # noqa: F401

    SQLModel.metadata.create_all(engine)
