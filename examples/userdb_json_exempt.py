"""Dump a user database as JSON, leaving a library record untouched.

Session stands in for a type owned by another library. Registered as
exempt, it passes through as is: its PasswordAge field survives the
password rule and keeps its own field names.

Run: python examples/userdb_json_exempt.py
"""

from __future__ import annotations

import dataclasses
import json
import logging
import re
import sys
from datetime import UTC, datetime

import structlog

from structfilter import Field, StructFilter, Tag, remove_fields


@dataclasses.dataclass(frozen=True)
class Session:
    Started: datetime
    PasswordAge: int


@dataclasses.dataclass
class User:
    Name: str
    Password: str
    PasswordAdmin: str
    LastSession: Session


USER_DB = [
    User(
        Name="Alice",
        Password="$6$sensitive",
        PasswordAdmin="$6$verysensitive",
        LastSession=Session(datetime(2024, 5, 1, 12, 0, tzinfo=UTC), PasswordAge=30),
    ),
    User(
        Name="Bob",
        Password="$6$private",
        PasswordAdmin="",
        LastSession=Session(datetime(2024, 5, 2, 8, 30, tzinfo=UTC), PasswordAge=2),
    ),
]


def lowercase_json_name(field: Field) -> None:
    field.tag = f'json:"{field.name.lower()}"'


def to_json_ready(value: object) -> object:
    """Records → dicts keyed by their json tag, datetimes → ISO 8601."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            Tag(f.metadata.get("tag", "")).get("json") or f.name:
            to_json_ready(getattr(value, f.name))
            for f in dataclasses.fields(value)
        }
    if isinstance(value, list):
        return [to_json_ready(item) for item in value]
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def configure_logging(level: int = logging.INFO) -> None:
    """Send structured logs to stderr at level and above; stdout stays JSON."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )


def main() -> None:
    configure_logging()
    sf = StructFilter(remove_fields(re.compile("^Password.*$")), lowercase_json_name)
    sf.register_exempt(Session)
    converted = sf.convert(USER_DB, list[User])
    print(json.dumps(to_json_ready(converted), indent=4))


if __name__ == "__main__":
    main()
