# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import collections.abc
import datetime
import logging
import pathlib

import msgspec
import timeflake
from dateutil.tz import tzlocal
from sqlalchemy import Column, Integer, MetaData, Table, event, func, select
from sqlalchemy.dialects.sqlite import CHAR, DATETIME
from sqlalchemy.engine import URL as EngineURL
from sqlalchemy.engine import Connection, Engine, create_engine
from sqlalchemy.sql import column, text
from sqlalchemy.types import TypeDecorator, UnicodeText

from .results.types import Result
from .textinput.types import Step

logger = logging.getLogger(__name__)


@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA synchronous=NORMAL")
    cursor.close()


class Timeflake(TypeDecorator):
    """
    A 128-bit, roughly-ordered, URL-safe UUID.
    """

    impl = CHAR
    cache_ok = True

    def load_dialect_impl(self, dialect):
        return dialect.type_descriptor(CHAR(22))

    def process_bind_param(self, value, dialect):
        if isinstance(value, timeflake.Timeflake):
            return value.base62
        return value

    def process_result_value(self, value, dialect):
        if isinstance(value, str):
            return timeflake.parse(from_base62=value)
        return value

    def __repr__(self):
        return "Timeflake()"


class AwareDateTime(TypeDecorator):
    """
    A DateTime type which can only store tz-aware DateTimes
    """

    impl = DATETIME
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if isinstance(value, datetime.datetime):
            if value.tzinfo is None:
                raise ValueError("{!r} must be TZ-aware".format(value))
            else:
                value = value.astimezone(datetime.timezone.utc).replace(tzinfo=None)
        return value

    def process_result_value(self, value, dialect):
        if isinstance(value, datetime.datetime):
            value = value.replace(tzinfo=datetime.timezone.utc).astimezone(tzlocal())
        return value

    def __repr__(self):
        return "AwareDateTime()"


step_list_decoder = msgspec.json.Decoder(list[Step])


class StepList(TypeDecorator):
    """
    The committed steps of a result, stored as a JSON array.
    """

    impl = UnicodeText
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        return msgspec.json.encode(value).decode("utf-8")

    def process_result_value(self, value, dialect):
        if value is None:
            return value
        return step_list_decoder.decode(value)

    def __repr__(self):
        return "StepList()"


metadata = MetaData()

result_table = Table(
    "results",
    metadata,
    Column("seq", Integer, primary_key=True, autoincrement=True),
    Column("id", Timeflake, nullable=False, unique=True),
    Column("text", UnicodeText, nullable=False),
    Column("started_at", AwareDateTime, nullable=False, index=True),
    Column("steps", StepList, nullable=False),
)

DB_VERSION = 1


class DbVersionError(Exception):
    pass


def check_version(conn: Connection, path: pathlib.Path, expected_version: int):
    found_version = conn.scalar(text("PRAGMA user_version").columns(column("version", Integer)))
    if found_version != expected_version:
        raise DbVersionError(f"Expected DB version {expected_version} in {path}, but found {found_version}.")


def set_version(conn: Connection, version: int):
    # looks like pragma does not support bindparams, hence the f-string
    conn.execute(text(f"PRAGMA user_version = {version}"))


def make_db(sqlite_path: pathlib.Path):
    exists = sqlite_path.is_file()
    sqlite_path.parent.mkdir(parents=True, exist_ok=True)
    engine_url = EngineURL.create(drivername="sqlite", database=sqlite_path.__fspath__())
    engine = create_engine(engine_url)
    with engine.begin() as conn:
        if exists:
            check_version(conn, sqlite_path, DB_VERSION)
        else:
            logger.debug("Creating result database in %s", sqlite_path)
            metadata.create_all(conn)
            set_version(conn, DB_VERSION)
    return ResultDb(engine)


class ResultDb:
    """Results stored on this device, in the order they were appended."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def load(self) -> list[Result]:
        s = select(result_table.c.id, result_table.c.text, result_table.c.started_at, result_table.c.steps).order_by(
            result_table.c.seq.asc()
        )
        with self.engine.begin() as conn:
            result = conn.execute(s)
            return [Result(**row._mapping) for row in result]

    def append(self, results: collections.abc.Sequence[Result]):
        if not results:
            return
        with self.engine.begin() as conn:
            conn.execute(
                result_table.insert(),
                [dict(id=r.id, text=r.text, started_at=r.started_at, steps=r.steps) for r in results],
            )

    def count(self) -> int:
        with self.engine.begin() as conn:
            return conn.scalar(select(func.count()).select_from(result_table))

    def clear(self):
        with self.engine.begin() as conn:
            conn.execute(result_table.delete())
