from datetime import datetime, time, timedelta, timezone
import pytz


def utc_now() -> datetime:
    return datetime.now(timezone.utc)

def ensure_aware(value: datetime) -> datetime:
    """Naive datetimes are treated as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value

def get_user_local_time(tz_name: str = None, now: datetime = None) -> datetime:
    """
    Returns the current datetime in the user's timezone (aware).
    Defaults to UTC if timezone is invalid or not set.
    """
    user_tz = _resolve_tz(tz_name)
    server_now = ensure_aware(now) if now else utc_now()
    return server_now.astimezone(user_tz)

def is_valid_timezone(tz_name: str) -> bool:
    return tz_name in pytz.all_timezones_set

def _resolve_tz(tz_name: str = None):
    try:
        return pytz.timezone(tz_name or "UTC")
    except pytz.UnknownTimeZoneError:
        return pytz.UTC

def start_of_week(tz_name: str = None, now: datetime = None) -> datetime:
    """Sunday 00:00 of the current week in the user's timezone."""
    user_tz = _resolve_tz(tz_name)
    local_now = (ensure_aware(now) if now else utc_now()).astimezone(user_tz)
    days_since_sunday = (local_now.weekday() + 1) % 7
    week_start = local_now.date() - timedelta(days=days_since_sunday)
    return user_tz.localize(datetime.combine(week_start, time.min))
