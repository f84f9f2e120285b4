from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from portal.core.config import settings

connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    # Sync path functions run in a threadpool
    connect_args["check_same_thread"] = False

engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Yield a request-scoped database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
