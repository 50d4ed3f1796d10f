from datetime import date, datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import logging

from config import get_config_value

logger = logging.getLogger(__name__)


def resolve_timezone(name: Optional[str]):
    """Return a tzinfo for an IANA name, or None for the machine's local zone."""
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except ZoneInfoNotFoundError:
        logger.warning("Unknown timezone %r; using local time", name)
        return None


def local_today(tz_name: Optional[str] = None) -> date:
    """Current calendar day at the user's local midnight boundary."""
    if tz_name is None:
        tz_name = get_config_value("schedule", "timezone", "")
    tz = resolve_timezone(tz_name)
    if tz is None:
        return date.today()
    return datetime.now(tz).date()


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_day(value) -> Optional[date]:
    """Accept a date, datetime or ISO string and return the calendar day."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.fromisoformat(value).date()
    except ValueError:
        return date.fromisoformat(value[:10])
