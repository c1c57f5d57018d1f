import logging
import threading
from typing import Optional, Tuple

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.core.errors import StoreUnavailable
from app.database.base import Base
from app.database.engine import build_engine

logger = logging.getLogger(__name__)


class DatabaseConnector:
    """
    Owns the single engine shared by every request.

    connect() is idempotent: a ready engine is reused as-is, an engine that no
    longer answers a ping is disposed and rebuilt. session() only connects when
    no engine exists yet; stale pooled connections are replaced by the
    engine's pool_pre_ping. disconnect() is meant for application shutdown.

    Engine state changes happen under one lock, so request threads never see
    a half-built or half-disposed connector.
    """

    def __init__(self, database_url: str):
        self.database_url = database_url
        self._lock = threading.Lock()
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> Engine:
        return self.connect()

    def connect(self) -> Engine:
        engine, _ = self._establish(verify=True)
        return engine

    def disconnect(self) -> None:
        with self._lock:
            if self._engine is None:
                return
            self._dispose()
        logger.info("Disconnected from product store.")

    def session(self) -> Session:
        _, session_factory = self._establish(verify=False)
        return session_factory()

    def ping(self) -> bool:
        engine = self._engine
        if engine is None:
            return False
        return self._ping(engine)

    def _establish(self, verify: bool) -> Tuple[Engine, sessionmaker]:
        with self._lock:
            if self._engine is not None:
                if not verify or self._ping(self._engine):
                    return self._engine, self._session_factory
                logger.warning("Product store connection is not ready; reconnecting.")
                self._dispose()

            engine = self._open()
            session_factory = sessionmaker(
                autoflush=False,
                expire_on_commit=False,
                bind=engine,
            )
            self._engine = engine
            self._session_factory = session_factory

        logger.info(
            "Connected to product store %s",
            engine.url.render_as_string(hide_password=True),
        )
        return engine, session_factory

    def _open(self) -> Engine:
        engine = build_engine(self.database_url)
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            _import_models()
            Base.metadata.create_all(bind=engine)
        except SQLAlchemyError as exc:
            engine.dispose()
            logger.error("Unable to connect to the product store: %s", exc)
            raise StoreUnavailable("Failed to connect to the product store") from exc
        return engine

    @staticmethod
    def _ping(engine: Engine) -> bool:
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError:
            return False
        return True

    # caller holds self._lock
    def _dispose(self) -> None:
        engine = self._engine
        self._engine = None
        self._session_factory = None
        if engine is not None:
            engine.dispose()


def _import_models() -> None:
    from app.models import import_all_models

    import_all_models()


__all__ = ["DatabaseConnector"]
