from __future__ import annotations

from collections.abc import Generator

from sqlalchemy import create_engine, event

from jobly.config import get_settings
from jobly.db.storage import StorageClient

settings = get_settings()
connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}
engine = create_engine(settings.database_url, connect_args=connect_args, future=True)

if settings.database_url.startswith("sqlite"):

    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
        # SQLite ignores FOREIGN KEY clauses, ON DELETE CASCADE included, unless asked per connection.
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def get_storage() -> Generator[StorageClient, None, None]:
    yield StorageClient(engine)
