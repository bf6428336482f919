import importlib
import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from storefront.config import settings

log = logging.getLogger(__name__)

DATABASE_URL = settings.DATABASE_URL
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, future=True, echo=False, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

# model modules that must be imported so Base.metadata is populated
MODEL_MODULES = [
    "storefront.models.product",
]


def init_db(reset: bool = False, bind=None):
    """
    Initialize DB schema.

    Behavior:
      - If reset is true, drop & recreate tables.
      - Otherwise, leave existing tables in place and create missing ones.

    `bind` defaults to the module engine; tests pass their own.
    """
    bind = bind or engine
    for mod in MODEL_MODULES:
        importlib.import_module(mod)

    if reset:
        log.warning("Resetting database: dropping all tables")
        Base.metadata.drop_all(bind=bind)

    log.info("Creating database tables...")
    Base.metadata.create_all(bind=bind)
    log.info("Database initialized.")


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
