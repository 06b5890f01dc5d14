# snappyprobe/storage/plyvel_engine.py

import os

import plyvel

from snappyprobe.core import errors
from snappyprobe.core.status import Status
from snappyprobe.core.log import get_logger
from snappyprobe.storage.engine import AbstractCursor, AbstractHandle, AbstractEngine

log = get_logger("engine")


def _message_of(exc):
    if exc.args:
        msg = exc.args[0]
    else:
        msg = ""
    if isinstance(msg, bytes):
        msg = msg.decode("utf-8", "replace")
    return str(msg)


def status_from_error(exc):
    """
    Converts a plyvel exception back into the leveldb::Status it was raised
    for. plyvel raises with Status::ToString() as the message, so the code is
    recovered from the text; the exception class decides otherwise.
    """
    text = _message_of(exc)
    parsed = Status.parse(text)
    if parsed is not None and not parsed.is_ok():
        return parsed
    if isinstance(exc, plyvel.CorruptionError):
        return Status.corruption(text)
    if isinstance(exc, plyvel.IOError):
        return Status.io_error(text)
    return Status.invalid_argument(text)


class PlyvelCursor(AbstractCursor):
    """
    Drives a plyvel RawIterator. Positioning errors raised by plyvel are kept
    as the cursor status and leave the cursor invalid.
    """

    def __init__(self, raw_iterator):
        self._it = raw_iterator
        self._status = Status.ok()

    def _move(self, fn):
        try:
            fn()
        except plyvel.Error as e:
            self._status = status_from_error(e)

    def seek_to_first(self):
        self._status = Status.ok()
        self._move(self._it.seek_to_first)

    def advance(self):
        if not self.is_valid():
            return
        self._move(self._it.next)

    def is_valid(self):
        if not self._status.is_ok():
            return False
        return bool(self._it.valid())

    def status(self):
        return self._status

    def key(self):
        if not self.is_valid():
            return None
        return self._it.key()

    def close(self):
        if self._it is not None:
            self._it.close()
            self._it = None


class PlyvelHandle(AbstractHandle):
    def __init__(self, db, path):
        self.db = db
        self.path = path

    def new_cursor(self):
        return PlyvelCursor(self.db.raw_iterator())

    def close(self):
        if self.db is not None and not self.db.closed:
            self.db.close()
        self.db = None


class PlyvelEngine(AbstractEngine):
    name = "plyvel"

    def __init__(self):
        log.info("LevelDB engine: plyvel %s, leveldb %s",
                 plyvel.__version__, self.version())

    def version(self):
        return str(getattr(plyvel, "__leveldb_version__", ""))

    def open(self, path, create_if_missing=False):
        path = os.fspath(path)
        try:
            db = plyvel.DB(path, create_if_missing=create_if_missing)
        except plyvel.Error as e:
            raise errors.OpenError(path, status_from_error(e))
        return PlyvelHandle(db, path)
