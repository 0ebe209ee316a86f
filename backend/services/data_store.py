"""
data_store.py — Row-level data access used by the habit ledger.
Two interchangeable stores: SupabaseStore (PostgREST over HTTP) and SqlStore
(SQLAlchemy session). Both speak plain dict rows and raise BackendOperationError.
"""

import logging
from datetime import date

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import supabase_rest
from errors import BackendOperationError
from models.habit import Habit
from models.habit_log import HabitLog

logger = logging.getLogger(__name__)


class SupabaseStore:
    """Store backed by Supabase's REST API, scoped to a user's access token."""

    def __init__(self, access_token: str = None):
        self.access_token = access_token

    def insert(self, table: str, row: dict) -> dict:
        return supabase_rest.sb_insert(table, row, access_token=self.access_token)

    def insert_ignore_duplicates(self, table: str, row: dict, on_conflict: tuple) -> dict:
        return supabase_rest.sb_upsert_ignore(
            table, row, ",".join(on_conflict), access_token=self.access_token
        )

    def select(self, table: str, filters: dict = None, order_by: str = None, descending: bool = False) -> list[dict]:
        order = f"{order_by}.{'desc' if descending else 'asc'}" if order_by else None
        return supabase_rest.sb_select(table, filters=filters, order=order, access_token=self.access_token)

    def delete(self, table: str, filters: dict) -> int:
        return supabase_rest.sb_delete(table, filters, access_token=self.access_token)


class SqlStore:
    """Store backed by a SQLAlchemy session over the Habit/HabitLog models."""

    MODELS = {
        Habit.__tablename__: Habit,
        HabitLog.__tablename__: HabitLog,
    }

    def __init__(self, db: Session):
        self.db = db

    # ------------------------------------------------------------------
    def _model(self, table: str):
        try:
            return self.MODELS[table]
        except KeyError:
            raise BackendOperationError(f'relation "{table}" does not exist')

    @staticmethod
    def _coerce(model, values: dict) -> dict:
        """Turn wire values (ISO date strings) into column types."""
        out = dict(values)
        if model is HabitLog and isinstance(out.get("completed_at"), str):
            try:
                out["completed_at"] = date.fromisoformat(out["completed_at"])
            except ValueError:
                raise BackendOperationError(f'invalid input syntax for type date: "{out["completed_at"]}"')
        return out

    def _fail(self, action: str, table: str, error: SQLAlchemyError):
        self.db.rollback()
        message = str(getattr(error, "orig", None) or error)
        logger.error(f"SQL {action} on {table} failed: {message}")
        raise BackendOperationError(message) from error

    # ------------------------------------------------------------------
    def insert(self, table: str, row: dict) -> dict:
        model = self._model(table)
        try:
            obj = model(**self._coerce(model, row))
            self.db.add(obj)
            self.db.commit()
            self.db.refresh(obj)
            return obj.to_dict()
        except SQLAlchemyError as e:
            self._fail("insert", table, e)

    def insert_ignore_duplicates(self, table: str, row: dict, on_conflict: tuple) -> dict:
        model = self._model(table)
        values = self._coerce(model, row)
        key = {col: values[col] for col in on_conflict}
        try:
            if self.db.query(model).filter_by(**key).first() is not None:
                return {}
        except SQLAlchemyError as e:
            self._fail("select", table, e)
        try:
            return self.insert(table, row)
        except BackendOperationError:
            # Lost a race against a concurrent insert of the same key
            try:
                exists = self.db.query(model).filter_by(**key).first() is not None
            except SQLAlchemyError as e:
                self._fail("select", table, e)
            if exists:
                return {}
            raise

    def select(self, table: str, filters: dict = None, order_by: str = None, descending: bool = False) -> list[dict]:
        model = self._model(table)
        try:
            q = self.db.query(model).filter_by(**self._coerce(model, filters or {}))
            if order_by:
                column = getattr(model, order_by)
                q = q.order_by(column.desc() if descending else column.asc())
            return [obj.to_dict() for obj in q.all()]
        except SQLAlchemyError as e:
            self._fail("select", table, e)

    def delete(self, table: str, filters: dict) -> int:
        if not filters:
            raise ValueError("Refusing to delete without filters")
        model = self._model(table)
        try:
            count = self.db.query(model).filter_by(**self._coerce(model, filters)).delete(synchronize_session=False)
            self.db.commit()
            return count
        except SQLAlchemyError as e:
            self._fail("delete", table, e)
