"""Expiry status classification.

A food's status is always derived from its expiry date, never stored
independently. Dates are compared as calendar days; any time-of-day component
is discarded, and callers pass ``today`` already resolved in the zone they
care about.
"""

from dataclasses import dataclass
from datetime import date, datetime
from zoneinfo import ZoneInfo

EXPIRED = "expired"
EXPIRING_SOON = "expiring-soon"
SAFE = "safe"

EXPIRING_SOON_DAYS = 3


@dataclass(frozen=True)
class ExpiryClassification:
    """Status plus a day count.

    ``days`` is the number of days remaining for upcoming foods and the number
    of days overdue (as a positive number) for expired ones.
    """

    status: str
    days: int


def local_today(timezone_name: str) -> date:
    """Return the current calendar date in the given IANA timezone."""
    return datetime.now(tz=ZoneInfo(timezone_name)).date()


def days_until(expiry_date: date | datetime, today: date | datetime) -> int:
    """Return the signed number of days from today to the expiry date."""
    return (_as_date(expiry_date) - _as_date(today)).days


def classify_expiry(
    expiry_date: date | datetime, today: date | datetime
) -> ExpiryClassification:
    """Classify an expiry date as expired, expiring-soon or safe."""
    diff_days = days_until(expiry_date, today)
    if diff_days < 0:
        return ExpiryClassification(status=EXPIRED, days=abs(diff_days))
    if diff_days <= EXPIRING_SOON_DAYS:
        return ExpiryClassification(status=EXPIRING_SOON, days=diff_days)
    return ExpiryClassification(status=SAFE, days=diff_days)


def expiry_message(classification: ExpiryClassification) -> str:
    """Return the Spanish label shown next to a food."""
    days = classification.days
    unit = "día" if days == 1 else "días"
    if classification.status == EXPIRED:
        return f"Vencido hace {days} {unit}"
    if days == 0:
        return "Vence hoy"
    return f"Vence en {days} {unit}"


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value
