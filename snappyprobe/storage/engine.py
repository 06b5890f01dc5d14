# snappyprobe/storage/engine.py

from snappyprobe.core import errors


class AbstractCursor(object):
    """
    The read interface the prober requires from a storage engine iterator.
    Mirrors leveldb::Iterator: once status() is not OK, is_valid() is False.
    """

    def seek_to_first(self):
        """Positions the cursor at the first key of the database."""
        raise NotImplementedError

    def advance(self):
        """Moves the cursor to the next key. Only legal while is_valid()."""
        raise NotImplementedError

    def is_valid(self):
        """Returns True if the cursor is positioned at an entry."""
        raise NotImplementedError

    def status(self):
        """Returns the Status of the last positioning operation."""
        # -> snappyprobe.core.status.Status
        raise NotImplementedError

    def key(self):
        """Returns the key of the current entry as bytes."""
        raise NotImplementedError

    def close(self):
        """Releases any resources held by the cursor."""
        raise NotImplementedError


class AbstractHandle(object):
    """An open database."""

    def new_cursor(self):
        # -> AbstractCursor
        raise NotImplementedError

    def close(self):
        raise NotImplementedError


class AbstractEngine(object):
    """
    Entry point of a storage engine binding.
    open() raises errors.OpenError carrying the engine Status on failure.
    """

    name = "abstract"

    def open(self, path, create_if_missing=False):
        # -> AbstractHandle
        raise NotImplementedError

    def version(self):
        """Returns the engine version string, or "" if unknown."""
        return ""


def load_engine():
    """Returns the LevelDB engine backed by plyvel."""
    try:
        from snappyprobe.storage import plyvel_engine
    except ImportError as e:
        raise errors.EngineUnavailableError("plyvel cannot be imported: %s" % e)
    return plyvel_engine.PlyvelEngine()
