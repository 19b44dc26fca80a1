"""Translation of Supabase query errors into application errors."""

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date, datetime

from supabase import PostgrestAPIError

from fresco_guard.errors import StorageError


@contextmanager
def storage_errors(fallback: str) -> Iterator[None]:
    """Re-raise PostgREST failures as StorageError with the backend code."""
    try:
        yield
    except PostgrestAPIError as exc:
        raise StorageError(exc.message or fallback, code=exc.code) from exc


def parse_timestamp(value: object) -> datetime | None:
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return None


def parse_date(value: object) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])
