"""Wire a ChessService from Settings: database -> session -> repository, plus the configured computer opponent."""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from src.core.config import Settings
from src.db.database import create_db_engine, get_db, session_factory
from src.db.sql_repository import SQLGameRepository
from src.engine.opponents import opponent_from_settings
from src.services.chess_service import ChessService

logger = logging.getLogger(__name__)


@contextmanager
def open_chess_service(settings: Optional[Settings] = None) -> Iterator[ChessService]:
    """
    Usage:
    ---
    with open_chess_service() as service:
        response = service.create_new_game(CreateGameRequest())

    Settings default to the `CHESS_*` environment variables.
    The session, the opponent (an engine process, if configured) and the database engine are released on exit.
    """
    settings = settings or Settings.from_env()
    engine = create_db_engine(settings.database_url)
    sessions = get_db(session_factory(engine))
    opponent = opponent_from_settings(settings)
    logger.info("Chess service using %s", settings.database_url)
    try:
        yield ChessService(SQLGameRepository(next(sessions)), opponent=opponent)
    finally:
        opponent.close()
        sessions.close()
        engine.dispose()
