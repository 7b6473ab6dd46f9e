# SPDX-FileCopyrightText: 2023 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import abc
import collections.abc
import logging
import typing

import trio

from .errors import DatabaseError, ReadOnlyStorageError
from .types import OpenRequest, PrivateRequest, ProgressListener, PublicRequest, Result

if typing.TYPE_CHECKING:
    from ..db import ResultDb

logger = logging.getLogger(__name__)


def _ignore_progress(total: int, current: int):
    pass


class ResultStorage(abc.ABC):
    @abc.abstractmethod
    async def load(self, progress_listener: typing.Optional[ProgressListener] = None) -> list[Result]: ...

    @abc.abstractmethod
    async def append(self, results: collections.abc.Sequence[Result], progress_listener: typing.Optional[ProgressListener] = None): ...

    @abc.abstractmethod
    async def clear(self): ...


class RemoteResultSync(abc.ABC):
    """The server side of a user's results. How they get there is up to the implementation."""

    @abc.abstractmethod
    async def receive(self, progress_listener: ProgressListener) -> list[Result]: ...

    @abc.abstractmethod
    async def send(self, results: collections.abc.Sequence[Result], progress_listener: ProgressListener): ...

    @abc.abstractmethod
    async def clear(self): ...


class AnonymousUserStorage(ResultStorage):
    def __init__(self, local: ResultDb):
        self.local = local

    async def load(self, progress_listener=None):
        return await trio.to_thread.run_sync(self.local.load)

    async def append(self, results, progress_listener=None):
        await trio.to_thread.run_sync(self.local.append, results)

    async def clear(self):
        await trio.to_thread.run_sync(self.local.clear)


# Once someone logs in, the server is the source of truth. Anything they typed before logging in is
# moved over to the server the first time their results are loaded.
class NamedUserStorage(ResultStorage):
    def __init__(self, local: ResultDb, remote: RemoteResultSync):
        self.local = local
        self.remote = remote

    async def load(self, progress_listener=None):
        if progress_listener is None:
            progress_listener = _ignore_progress
        results = await self.remote.receive(progress_listener)
        if results:
            return results
        results = await trio.to_thread.run_sync(self.local.load)
        if results:
            logger.debug("Moving %d local results to remote storage", len(results))
            await self.remote.send(results, progress_listener)
            await trio.to_thread.run_sync(self.local.clear)
        return results

    async def append(self, results, progress_listener=None):
        if progress_listener is None:
            progress_listener = _ignore_progress
        await self.remote.send(results, progress_listener)

    async def clear(self):
        await self.remote.clear()


class PublicUserStorage(ResultStorage):
    def __init__(self, remote: RemoteResultSync):
        self.remote = remote

    async def load(self, progress_listener=None):
        if progress_listener is None:
            progress_listener = _ignore_progress
        return await self.remote.receive(progress_listener)

    async def append(self, results, progress_listener=None):
        raise ReadOnlyStorageError("Cannot add records to the results of a public user")

    async def clear(self):
        raise ReadOnlyStorageError("Cannot clear the results of a public user")


class ErrorTranslator(ResultStorage):
    def __init__(self, wrapped: ResultStorage):
        self.wrapped = wrapped

    async def load(self, progress_listener=None):
        try:
            return await self.wrapped.load(progress_listener)
        except Exception as exc:
            raise DatabaseError("Cannot read records from database") from exc

    async def append(self, results, progress_listener=None):
        try:
            await self.wrapped.append(results, progress_listener)
        except Exception as exc:
            raise DatabaseError("Cannot add records to database") from exc

    async def clear(self):
        try:
            await self.wrapped.clear()
        except Exception as exc:
            raise DatabaseError("Cannot clear database") from exc


def open_result_storage(
    request: OpenRequest,
    *,
    local: ResultDb,
    remote_for: collections.abc.Callable[[OpenRequest], RemoteResultSync],
) -> ResultStorage:
    match request:
        case PrivateRequest(user_id=None):
            storage = AnonymousUserStorage(local)
        case PrivateRequest():
            storage = NamedUserStorage(local, remote_for(request))
        case PublicRequest():
            storage = PublicUserStorage(remote_for(request))
        case _:
            raise NotImplementedError(f"Don't know how to open storage for {type(request)}.")
    return ErrorTranslator(storage)
