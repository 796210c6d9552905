import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .exceptions import ServerError

logger = logging.getLogger(__name__)

Base = declarative_base()


class Database:
    """Owns the engine and session factory for one application instance."""

    def __init__(
        self,
        url: str,
        pool_size: int = 20,
        max_overflow: int = 30,
        pool_timeout: int = 30,
        pool_recycle: int = 300,
        log_slow_queries: bool = True,
        slow_query_threshold: float = 1.0,
    ):
        self.url = url
        self.slow_query_threshold = slow_query_threshold

        try:
            if url.startswith("sqlite"):
                # One shared connection so in-memory databases survive across sessions
                self.engine = create_engine(
                    url,
                    connect_args={"check_same_thread": False},
                    poolclass=StaticPool,
                )
            else:
                self.engine = create_engine(
                    url,
                    pool_pre_ping=True,  # Test connections before using
                    pool_recycle=pool_recycle,
                    pool_size=pool_size,
                    max_overflow=max_overflow,
                    pool_timeout=pool_timeout,
                    echo=False,  # Don't log all SQL (use slow query logging instead)
                )
                logger.info(
                    f"📊 Connection pool: size={pool_size}, max_overflow={max_overflow}, timeout={pool_timeout}s"
                )
            logger.info("✅ Database engine created successfully")
        except Exception as e:
            logger.error(f"❌ Failed to create database engine: {e}")
            raise

        if log_slow_queries:
            self._install_slow_query_logging()

        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def _install_slow_query_logging(self) -> None:
        threshold = self.slow_query_threshold

        @event.listens_for(self.engine, "before_cursor_execute")
        def before_cursor_execute(conn, _cursor, statement, _parameters, context, _executemany):
            conn.info.setdefault("query_start_time", []).append(time.time())

        @event.listens_for(self.engine, "after_cursor_execute")
        def after_cursor_execute(conn, _cursor, statement, _parameters, context, _executemany):
            total = time.time() - conn.info["query_start_time"].pop(-1)
            if total > threshold:
                logger.warning(f"🐌 Slow query ({total:.2f}s): {statement[:200]}...")

    def create_all(self) -> None:
        Base.metadata.create_all(bind=self.engine, checkfirst=True)

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Unit of work outside a request: commit on success, roll back on failure."""
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def ping(self) -> bool:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"❌ Database ping failed: {e}")
            return False

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request) -> Iterator[Session]:
    db = request.app.state.db.SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session, failure_message: str) -> Iterator[Session]:
    """
    Request-scoped unit of work: commit on success, roll back on any failure.

    Database errors are logged and surfaced as ServerError(failure_message);
    application errors raised inside the block propagate unchanged.
    """
    try:
        yield db
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"❌ Transaction failed ({failure_message}): {e}")
        raise ServerError(failure_message) from e
    except Exception:
        db.rollback()
        raise
