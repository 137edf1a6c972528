from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from spendwise.core.config import settings

connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    connect_args = {"check_same_thread": False}

# pool_pre_ping=True handles "stale" connections gracefully
engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True, connect_args=connect_args)

# One session (and one database transaction) per request
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Yield a session for a single request.

    Anything the handler did not commit is rolled back when it raises, so a
    failing mutation sequence leaves no partial writes behind.
    """
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
