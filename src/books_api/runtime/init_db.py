"""Database initialization script.

Creates the books table ahead of time, for deployments that start the server
with ``app.create_tables`` turned off.
"""

from src.books_api.core.services.database.db_manage import DbManageService
from src.books_api.core.services.database.db_session import DbSessionService
from src.books_api.runtime.context import get_config


def init_db(drop: bool = False) -> None:
    """Create the books table, optionally dropping it first."""
    config = get_config()
    database_service = DbSessionService(config.database, config.app.environment)
    try:
        database_service.ping()
        manage = DbManageService(database_service.engine)
        if drop:
            manage.drop_all()
        manage.create_all()
    finally:
        database_service.dispose()


if __name__ == "__main__":
    init_db()
