"""SQLAlchemy-backed record store.

Exposes the ``accounts`` and ``extended_profiles`` tables through the
generic :class:`RecordStore` interface. Blocking database work runs in a
worker thread so callers on the event loop only await it.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from sqlalchemy import inspect
from sqlalchemy.exc import MultipleResultsFound, SQLAlchemyError

from profile_editor.data.db import Base, get_session
from profile_editor.data.models import Account, ExtendedProfile
from profile_editor.errors import RecordStoreError
from profile_editor.services.collaborators import ACCOUNTS_TABLE, PROFILES_TABLE, RecordStore

logger = logging.getLogger(__name__)

__all__ = ["SqlAlchemyRecordStore", "TABLE_MODELS"]

TABLE_MODELS: dict[str, type[Base]] = {
    ACCOUNTS_TABLE: Account,
    PROFILES_TABLE: ExtendedProfile,
}


def _model_for(table: str) -> type[Base]:
    try:
        return TABLE_MODELS[table]
    except KeyError:
        raise RecordStoreError(f"Unknown table '{table}'") from None


def _column_names(model: type[Base]) -> set[str]:
    return {column.key for column in inspect(model).column_attrs}


def _check_fields(model: type[Base], fields: dict[str, Any]) -> None:
    unknown = set(fields) - _column_names(model)
    if unknown:
        raise RecordStoreError(
            f"Unknown fields for {model.__tablename__}: {', '.join(sorted(unknown))}"
        )


def _record_to_dict(record: Base) -> dict[str, Any]:
    """Convert a model instance to a plain dictionary of its columns."""
    return {name: getattr(record, name) for name in _column_names(type(record))}


class SqlAlchemyRecordStore(RecordStore):
    """Record store over the application database."""

    async def fetch_one(self, table: str, **filters: Any) -> dict[str, Any] | None:
        return await asyncio.to_thread(self._fetch_one, table, filters)

    async def update(self, table: str, key: Any, fields: dict[str, Any]) -> bool:
        return await asyncio.to_thread(self._update, table, key, fields)

    async def insert(self, table: str, fields: dict[str, Any]) -> Any:
        return await asyncio.to_thread(self._insert, table, fields)

    def _fetch_one(self, table: str, filters: dict[str, Any]) -> dict[str, Any] | None:
        model = _model_for(table)
        _check_fields(model, filters)
        try:
            with get_session() as session:
                record = session.query(model).filter_by(**filters).one_or_none()
                return _record_to_dict(record) if record is not None else None
        except MultipleResultsFound as exc:
            raise RecordStoreError(f"More than one {table} record matches {filters}") from exc
        except SQLAlchemyError as exc:
            logger.exception("Failed to fetch from %s", table)
            raise RecordStoreError(f"Failed to fetch from {table}: {exc}") from exc

    def _update(self, table: str, key: Any, fields: dict[str, Any]) -> bool:
        model = _model_for(table)
        _check_fields(model, fields)
        try:
            with get_session() as session:
                record = session.get(model, key)
                if record is None:
                    return False
                for name, value in fields.items():
                    setattr(record, name, value)
                return True
        except SQLAlchemyError as exc:
            logger.exception("Failed to update %s %r", table, key)
            raise RecordStoreError(f"Failed to update {table}: {exc}") from exc

    def _insert(self, table: str, fields: dict[str, Any]) -> Any:
        model = _model_for(table)
        _check_fields(model, fields)
        try:
            with get_session() as session:
                record = model(**fields)
                session.add(record)
                session.flush()
                return inspect(record).identity[0]
        except SQLAlchemyError as exc:
            logger.exception("Failed to insert into %s", table)
            raise RecordStoreError(f"Failed to insert into {table}: {exc}") from exc
