# marketplace/data/database.py
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from marketplace.utils.settings import DATABASE_URL, DB_POOL_SIZE
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)

Base = declarative_base()


class Database:
    """
    Owns the engine and its connection pool.
    One instance per application, handed to the request layer via app.state.
    """

    def __init__(self, url: str | None = None, engine: Engine | None = None):
        self.engine = engine or create_engine(
            url or DATABASE_URL,
            pool_size=DB_POOL_SIZE,
            max_overflow=0,
            pool_pre_ping=True,
        )
        self.SessionLocal = sessionmaker(autoflush=False, bind=self.engine)

    def session(self) -> Session:
        return self.SessionLocal()

    def create_all(self):
        # registers every model on Base.metadata
        import marketplace.data.models  # noqa: F401

        logger.info(f"Creating tables: {list(Base.metadata.tables.keys())}")
        Base.metadata.create_all(bind=self.engine)

    def ping(self) -> bool:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True

    def dispose(self):
        self.engine.dispose()
