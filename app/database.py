"""
Database engine, session factory and schema bootstrap
"""
import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from app.config import settings

logger = logging.getLogger(__name__)


def _engine_options(url: str) -> dict:
    """Pool options per backend; in-memory SQLite must share one connection"""
    if url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            options["poolclass"] = StaticPool
        return options
    return {"pool_pre_ping": True, "pool_size": settings.DB_POOL_SIZE}


engine = create_engine(settings.DATABASE_URL, future=True, **_engine_options(settings.DATABASE_URL))
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)

Base = declarative_base()


def get_db():
    """Yield a request-scoped session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Create tables and seed roles, permissions and the bootstrap admin"""
    # Register every model on Base.metadata before create_all
    import app.models  # noqa: F401
    from app.services.rbac_service import rbac_service

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ensured")

    db = SessionLocal()
    try:
        rbac_service.seed(db)
        rbac_service.ensure_admin_user(db, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD)
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
