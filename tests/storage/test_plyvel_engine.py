import os
import shutil
import tempfile
import unittest

import plyvel

from snappyprobe.core import errors
from snappyprobe.storage import engine as engine_mod
from snappyprobe.storage.plyvel_engine import PlyvelCursor, PlyvelEngine, status_from_error


class TestStatusFromError(unittest.TestCase):
    def test_corruption_from_bytes_message(self):
        st = status_from_error(plyvel.CorruptionError(b"Corruption: corrupted compressed block contents"))
        self.assertTrue(st.is_corruption())
        self.assertEqual(st.message, "corrupted compressed block contents")

    def test_io_error(self):
        st = status_from_error(plyvel.IOError(b"IO error: /tmp/x/LOCK: Resource temporarily unavailable"))
        self.assertTrue(st.is_io_error())

    def test_text_wins_over_class(self):
        st = status_from_error(plyvel.Error("Invalid argument: /x: does not exist"))
        self.assertEqual(st.to_string(), "Invalid argument: /x: does not exist")

    def test_class_fallback(self):
        self.assertTrue(status_from_error(plyvel.CorruptionError("bad")).is_corruption())
        self.assertTrue(status_from_error(plyvel.IOError("bad")).is_io_error())
        st = status_from_error(plyvel.Error())
        self.assertFalse(st.is_ok())
        self.assertFalse(st.is_corruption())


class FailingRawIterator(object):
    """RawIterator stand-in whose n-th move raises plyvel.CorruptionError."""

    def __init__(self, keys, fail_at):
        self.keys = keys
        self.fail_at = fail_at
        self.moves = 0
        self.pos = -1
        self.closed = False

    def _move(self, pos):
        self.moves += 1
        self.pos = pos
        if self.moves == self.fail_at:
            raise plyvel.CorruptionError(b"Corruption: corrupted compressed block contents")

    def seek_to_first(self):
        self._move(0)

    def next(self):
        self._move(self.pos + 1)

    def valid(self):
        return 0 <= self.pos < len(self.keys)

    def key(self):
        return self.keys[self.pos]

    def close(self):
        self.closed = True


class TestPlyvelCursorErrors(unittest.TestCase):
    def test_error_on_seek_invalidates(self):
        it = FailingRawIterator([b"a", b"b"], fail_at=1)
        cursor = PlyvelCursor(it)
        cursor.seek_to_first()
        self.assertFalse(cursor.is_valid())
        self.assertTrue(cursor.status().is_corruption())
        self.assertEqual(cursor.status().message, "corrupted compressed block contents")
        self.assertIsNone(cursor.key())

    def test_error_on_next_invalidates(self):
        it = FailingRawIterator([b"a", b"b", b"c"], fail_at=2)
        cursor = PlyvelCursor(it)
        cursor.seek_to_first()
        self.assertTrue(cursor.is_valid())
        self.assertEqual(cursor.key(), b"a")
        cursor.advance()
        self.assertFalse(cursor.is_valid())
        self.assertTrue(cursor.status().is_corruption())
        cursor.advance()
        self.assertEqual(it.moves, 2)

    def test_seek_resets_status(self):
        it = FailingRawIterator([b"a"], fail_at=1)
        cursor = PlyvelCursor(it)
        cursor.seek_to_first()
        self.assertFalse(cursor.status().is_ok())
        cursor.seek_to_first()
        self.assertTrue(cursor.status().is_ok())
        self.assertTrue(cursor.is_valid())

    def test_close_releases_iterator(self):
        it = FailingRawIterator([b"a"], fail_at=0)
        cursor = PlyvelCursor(it)
        cursor.close()
        cursor.close()
        self.assertTrue(it.closed)


class TestPlyvelEngine(unittest.TestCase):
    def setUp(self):
        self.root = tempfile.mkdtemp(prefix="snappyprobe_plyvel_")
        self.path = os.path.join(self.root, "db")
        self.engine = PlyvelEngine()

    def tearDown(self):
        shutil.rmtree(self.root, ignore_errors=True)

    def _populate(self, items):
        db = plyvel.DB(self.path, create_if_missing=True)
        try:
            for k, v in items:
                db.put(k, v)
        finally:
            db.close()

    def test_load_engine(self):
        eng = engine_mod.load_engine()
        self.assertIsInstance(eng, PlyvelEngine)
        self.assertEqual(eng.name, "plyvel")

    def test_open_missing_does_not_create(self):
        with self.assertRaises(errors.OpenError) as cm:
            self.engine.open(self.path, create_if_missing=False)
        self.assertFalse(cm.exception.status.is_ok())
        self.assertFalse(os.path.exists(os.path.join(self.path, "CURRENT")))

    def test_cursor_walks_in_key_order(self):
        self._populate([(b"b", b"2"), (b"a", b"1"), (b"c", b"3")])
        handle = self.engine.open(self.path)
        try:
            cursor = handle.new_cursor()
            keys = []
            cursor.seek_to_first()
            while cursor.is_valid():
                self.assertTrue(cursor.status().is_ok())
                keys.append(cursor.key())
                cursor.advance()
            self.assertTrue(cursor.status().is_ok())
            self.assertIsNone(cursor.key())
            cursor.close()
        finally:
            handle.close()
        self.assertEqual(keys, [b"a", b"b", b"c"])

    def test_empty_database(self):
        self._populate([])
        handle = self.engine.open(self.path)
        try:
            cursor = handle.new_cursor()
            cursor.seek_to_first()
            self.assertFalse(cursor.is_valid())
            self.assertTrue(cursor.status().is_ok())
            cursor.advance()
            cursor.close()
        finally:
            handle.close()

    def test_handle_close_is_idempotent(self):
        self._populate([(b"k", b"v")])
        handle = self.engine.open(self.path)
        handle.close()
        handle.close()

    def test_engine_version(self):
        self.assertIsInstance(self.engine.version(), str)


if __name__ == '__main__':
    unittest.main()
