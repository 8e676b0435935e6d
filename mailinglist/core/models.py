"""
Subscriber records and request shapes.

Field names on the wire follow the JSON API: ``Id``, ``Email``,
``ConfirmedAt``, ``OptOut`` for records and ``Page``, ``Count`` for batch
queries. Incoming keys are matched case-insensitively.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from .errors import InvalidArgument, StorageFailure

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
TIMESTAMP_FORMAT = '%Y-%m-%dT%H:%M:%SZ'


def _lookup(data, name):
    """Get a JSON field by name, ignoring key case"""
    if name in data:
        return data[name]
    wanted = name.lower()
    for key, value in data.items():
        if key.lower() == wanted:
            return value
    return None


def _int_field(data, name):
    value = _lookup(data, name)
    if value is None:
        return None
    # bool is an int subclass but never a valid id/page/count
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f"{name} must be an integer")
    return value


def _str_field(data, name):
    value = _lookup(data, name)
    if value is None:
        return ''
    if not isinstance(value, str):
        raise InvalidArgument(f"{name} must be a string")
    return value


def _bool_field(data, name):
    value = _lookup(data, name)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise InvalidArgument(f"{name} must be a boolean")
    return value


def format_timestamp(value):
    """Render a datetime as an RFC 3339 UTC string"""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


def parse_timestamp(value, name='ConfirmedAt'):
    """Parse an RFC 3339 string; naive values are taken as UTC"""
    if not isinstance(value, str):
        raise InvalidArgument(f"{name} must be an RFC 3339 timestamp string")

    text = value.strip()
    if text[-1:] in ('Z', 'z'):
        text = text[:-1] + '+00:00'
    try:
        parsed = datetime.fromisoformat(text)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        # must stay representable once shifted to UTC, rows are read back as UTC
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        raise InvalidArgument(f"{name} is not a valid RFC 3339 timestamp: {value!r}") from None


def _require_object(data):
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidArgument("request body must be a JSON object")
    return data


@dataclass
class EmailEntry:
    """A single subscriber row"""
    id: Optional[int] = None
    email: str = ''
    confirmed_at: Optional[datetime] = None
    opt_out: bool = False

    @classmethod
    def from_row(cls, row):
        """Build an entry from an (id, email, confirmed_at, opt_out) row"""
        entry_id, email, confirmed_at, opt_out = row
        try:
            confirmed = datetime.fromtimestamp(confirmed_at or 0, tz=timezone.utc)
        except (ValueError, OverflowError, OSError) as e:
            raise StorageFailure(f"email {email!r} has an unreadable confirmed_at {confirmed_at!r}: {e}") from e
        return cls(
            id=entry_id,
            email=email,
            confirmed_at=confirmed,
            opt_out=bool(opt_out),
        )

    @classmethod
    def from_json(cls, data):
        data = _require_object(data)
        confirmed_at = _lookup(data, 'ConfirmedAt')
        return cls(
            id=_int_field(data, 'Id'),
            email=_str_field(data, 'Email'),
            confirmed_at=parse_timestamp(confirmed_at) if confirmed_at is not None else None,
            opt_out=_bool_field(data, 'OptOut'),
        )

    def to_json(self):
        return {
            'Id': self.id,
            'Email': self.email,
            'ConfirmedAt': format_timestamp(self.confirmed_at) if self.confirmed_at else None,
            'OptOut': self.opt_out,
        }


@dataclass
class BatchQuery:
    """One page of the non-opted-out listing"""
    page: int = 0
    count: int = 0

    @classmethod
    def from_json(cls, data):
        data = _require_object(data)
        return cls(
            page=_int_field(data, 'Page') or 0,
            count=_int_field(data, 'Count') or 0,
        )

    def validate(self):
        if self.page <= 0 or self.count <= 0:
            raise InvalidArgument("page and count fields required and must be > 0")
        return self
