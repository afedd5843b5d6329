from typing import Any

from sqlalchemy.orm import Session, sessionmaker

from app.models.database import KeyValueEntry


class SqlKeyValueStore:
    """Key-value store backed by the ``key_values`` table."""

    def __init__(self, session_factory: sessionmaker[Session]):
        self._session_factory = session_factory

    def get(self, key: str) -> Any | None:
        with self._session_factory() as session:
            entry = session.get(KeyValueEntry, key)
            return entry.value if entry is not None else None

    def set(self, key: str, value: Any) -> None:
        with self._session_factory() as session:
            session.merge(KeyValueEntry(key=key, value=value))
            session.commit()
