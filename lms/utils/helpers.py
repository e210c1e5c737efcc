from datetime import datetime, timezone


def utc_now():
    """Naive UTC timestamp used for created/updated columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def isoformat(value):
    return value.isoformat() if value else None


def parse_bool_arg(value):
    return str(value).lower() in ('1', 'true', 'yes', 'on')
