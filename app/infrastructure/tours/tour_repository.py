"""
Adapter: Tour repository.

Implements the TourRepository port on top of a SQLAlchemy engine.
Driver errors are classified here, where they are produced: malformed
IDs become CastFailure and unique-constraint violations become
DuplicateKeyFailure. Any other database error propagates unchanged.
"""

import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID, uuid4

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, RowMapping, make_url
from sqlalchemy.exc import IntegrityError
from sqlalchemy.pool import StaticPool

from app.domain.tours.entities import Difficulty, Tour
from app.domain.tours.ports import TourRepository
from app.shared.errors.failures import CastFailure, DuplicateKeyFailure

logger = logging.getLogger(__name__)

COLUMNS = (
    "id",
    "name",
    "duration",
    "max_group_size",
    "difficulty",
    "ratings_average",
    "ratings_quantity",
    "price",
    "price_discount",
    "summary",
    "description",
    "image_cover",
    "created_at",
)
FILTERABLE_COLUMNS = frozenset({"duration", "difficulty", "max_group_size", "price"})
UPDATABLE_COLUMNS = frozenset(COLUMNS) - {"id", "created_at"}
UNIQUE_COLUMNS = ("name",)

UNIQUE_VIOLATION_SQLSTATE = "23505"

CREATE_TOURS_TABLE = """
    CREATE TABLE IF NOT EXISTS tours (
        id VARCHAR(36) PRIMARY KEY,
        name VARCHAR(40) NOT NULL UNIQUE,
        duration INTEGER NOT NULL,
        max_group_size INTEGER NOT NULL,
        difficulty VARCHAR(16) NOT NULL,
        ratings_average REAL NOT NULL DEFAULT 4.5,
        ratings_quantity INTEGER NOT NULL DEFAULT 0,
        price REAL NOT NULL,
        price_discount REAL,
        summary TEXT NOT NULL,
        description TEXT,
        image_cover VARCHAR(255) NOT NULL,
        created_at VARCHAR(40) NOT NULL
    )
"""


def build_engine(database_url: str) -> Engine:
    """Build a SQLAlchemy engine for the tour store.

    In-memory SQLite gets a single shared connection so every request
    sees the same database.
    """
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(database_url, pool_pre_ping=True)


def _parse_id(tour_id: str) -> str:
    """Return the canonical form of a tour ID or raise CastFailure."""
    try:
        return str(UUID(str(tour_id)))
    except ValueError as exc:
        raise CastFailure(path="id", value=tour_id) from exc


def _is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    sqlstate = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if sqlstate == UNIQUE_VIOLATION_SQLSTATE:
        return True
    return "unique" in str(orig).lower()


def _duplicate_key_failure(
    exc: IntegrityError, fields: Mapping[str, Any]
) -> DuplicateKeyFailure:
    message = str(exc.orig)
    key_value = {
        column: fields[column]
        for column in UNIQUE_COLUMNS
        if column in message and column in fields
    }
    return DuplicateKeyFailure(key_value)


def _to_column_value(value: Any) -> Any:
    if isinstance(value, Difficulty):
        return value.value
    return value


def _row_to_tour(row: RowMapping) -> Tour:
    return Tour(
        id=row["id"],
        name=row["name"],
        duration=row["duration"],
        max_group_size=row["max_group_size"],
        difficulty=Difficulty(row["difficulty"]),
        ratings_average=row["ratings_average"],
        ratings_quantity=row["ratings_quantity"],
        price=row["price"],
        price_discount=row["price_discount"],
        summary=row["summary"],
        description=row["description"],
        image_cover=row["image_cover"],
        created_at=datetime.fromisoformat(row["created_at"]),
    )


class SqlTourRepository(TourRepository):
    """Stores tours in a single SQL table.

    Implements the TourRepository port defined in the domain layer.
    Column names in dynamic statements only ever come from the fixed
    whitelists above.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def create_schema(self) -> None:
        """Create the tours table if it does not exist yet."""
        with self._engine.begin() as conn:
            conn.execute(text(CREATE_TOURS_TABLE))
        logger.debug("Ensured tours table exists.")

    def create(self, fields: Mapping[str, Any]) -> Tour:
        """Insert a new tour.

        Raises:
            DuplicateKeyFailure: If the tour name is already taken.
        """
        params: dict[str, Any] = {
            "ratings_average": 4.5,
            "ratings_quantity": 0,
            "price_discount": None,
            "description": None,
        }
        params.update(
            {k: _to_column_value(v) for k, v in fields.items() if k in UPDATABLE_COLUMNS}
        )
        params["id"] = str(uuid4())
        params["created_at"] = datetime.now(timezone.utc).isoformat()

        query = text(
            f"INSERT INTO tours ({', '.join(COLUMNS)}) "
            f"VALUES ({', '.join(':' + c for c in COLUMNS)})"
        )
        try:
            with self._engine.begin() as conn:
                conn.execute(query, params)
        except IntegrityError as exc:
            if _is_unique_violation(exc):
                raise _duplicate_key_failure(exc, params) from exc
            raise

        tour = self.get_by_id(params["id"])
        if tour is None:
            raise RuntimeError(f"Tour {params['id']} vanished after insert")
        return tour

    def get_by_id(self, tour_id: str) -> Optional[Tour]:
        """Return a tour by its ID, or None if not found.

        Raises:
            CastFailure: If tour_id is not a valid UUID.
        """
        query = text(f"SELECT {', '.join(COLUMNS)} FROM tours WHERE id = :id")
        with self._engine.begin() as conn:
            row = conn.execute(query, {"id": _parse_id(tour_id)}).mappings().first()
        return _row_to_tour(row) if row is not None else None

    def find(self, filters: Mapping[str, Any]) -> list[Tour]:
        """Return tours matching every equality filter, newest first.

        Unknown filter keys are ignored.
        """
        clauses = []
        params: dict[str, Any] = {}
        for column in sorted(filters):
            if column not in FILTERABLE_COLUMNS:
                continue
            clauses.append(f"{column} = :{column}")
            params[column] = _to_column_value(filters[column])

        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
        query = text(
            f"SELECT {', '.join(COLUMNS)} FROM tours{where} ORDER BY created_at DESC"
        )
        with self._engine.begin() as conn:
            rows = conn.execute(query, params).mappings().all()
        return [_row_to_tour(row) for row in rows]

    def update(self, tour_id: str, changes: Mapping[str, Any]) -> Optional[Tour]:
        """Apply changes to a tour and return it, or None if not found.

        Raises:
            CastFailure: If tour_id is not a valid UUID.
            DuplicateKeyFailure: If the new name is already taken.
        """
        canonical_id = _parse_id(tour_id)
        params = {
            column: _to_column_value(value)
            for column, value in changes.items()
            if column in UPDATABLE_COLUMNS
        }
        if not params:
            return self.get_by_id(canonical_id)

        assignments = ", ".join(f"{column} = :{column}" for column in sorted(params))
        query = text(f"UPDATE tours SET {assignments} WHERE id = :id")
        try:
            with self._engine.begin() as conn:
                result = conn.execute(query, {**params, "id": canonical_id})
        except IntegrityError as exc:
            if _is_unique_violation(exc):
                raise _duplicate_key_failure(exc, params) from exc
            raise

        if result.rowcount == 0:
            return None
        return self.get_by_id(canonical_id)

    def delete(self, tour_id: str) -> bool:
        """Delete a tour. Return False if it did not exist.

        Raises:
            CastFailure: If tour_id is not a valid UUID.
        """
        query = text("DELETE FROM tours WHERE id = :id")
        with self._engine.begin() as conn:
            result = conn.execute(query, {"id": _parse_id(tour_id)})
        return result.rowcount > 0
