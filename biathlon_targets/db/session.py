from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy.pool import StaticPool

from biathlon_targets.core.config import get_settings

settings = get_settings()

# SQLite necesita check_same_thread=False para usarse desde FastAPI
connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}

engine_kwargs = {"connect_args": connect_args}

# SQLite en memoria: una sola conexión compartida (si no, cada conexión ve una BD vacía)
if settings.database_url in ("sqlite://", "sqlite:///:memory:"):
    engine_kwargs["poolclass"] = StaticPool

engine = create_engine(settings.database_url, **engine_kwargs)
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


class Base(DeclarativeBase):
    pass


def init_db(bind=None):
    # Importar modelos para que SQLAlchemy los "vea" antes de crear las tablas
    from biathlon_targets.db.models import _all  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
