"""Dump a user database as JSON without password fields.

Run: python examples/userdb_json.py
"""

from __future__ import annotations

import dataclasses
import json
import logging
import re
import sys

import structlog

from structfilter import Field, StructFilter, Tag, remove_fields


@dataclasses.dataclass
class User:
    Name: str
    Password: str
    PasswordAdmin: str
    LoginTime: int


USER_DB = [
    User(Name="Alice", Password="$6$sensitive", PasswordAdmin="$6$verysensitive", LoginTime=1234567890),
    User(Name="Bob", Password="$6$private", PasswordAdmin="", LoginTime=1357924680),
]


def lowercase_json_name(field: Field) -> None:
    field.tag = f'json:"{field.name.lower()}"'


def to_json_ready(value: object) -> object:
    """Records → dicts keyed by their json tag, recursively."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            Tag(f.metadata.get("tag", "")).get("json") or f.name:
            to_json_ready(getattr(value, f.name))
            for f in dataclasses.fields(value)
        }
    if isinstance(value, list):
        return [to_json_ready(item) for item in value]
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
    converted = sf.convert(USER_DB, list[User])
    print(json.dumps(to_json_ready(converted), indent=4))


if __name__ == "__main__":
    main()
