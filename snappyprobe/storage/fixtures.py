"""
snappyprobe/storage/fixtures.py

Byte-exact image of a small LevelDB database whose table files hold
Snappy-compressed blocks. Reading those blocks with a LevelDB build that lacks
Snappy support fails with a "corruption" status.

The catalog is content-addressed: every blob carries the SHA-256 digest it was
captured with, and verify() refuses to hand out a catalog whose bytes drifted.
"""

import hashlib

from snappyprobe.core import errors


class FixtureBlob(object):
    """One file of the fixture database. Immutable."""

    __slots__ = ("_name", "_data", "_expected_digest")

    def __init__(self, name, data, expected_digest):
        self._name = name
        self._data = bytes(data)
        self._expected_digest = expected_digest

    @property
    def name(self):
        return self._name

    @property
    def data(self):
        return self._data

    @property
    def expected_digest(self):
        return self._expected_digest

    @property
    def length(self):
        return len(self.data)

    @property
    def digest(self):
        return hashlib.sha256(self.data).hexdigest()

    def verify(self):
        if self.digest != self.expected_digest:
            raise errors.FixtureIntegrityError(
                self.name, "sha256 %s != %s" % (self.digest, self.expected_digest)
            )

    def __repr__(self):
        return "FixtureBlob(%r, length=%d)" % (self.name, self.length)


class FixtureCatalog(object):
    """Ordered, read-only mapping of file name to FixtureBlob."""

    def __init__(self, blobs):
        self._blobs = {}
        self._order = []
        for blob in blobs:
            if blob.name in self._blobs:
                raise ValueError("Duplicate fixture name: %s" % blob.name)
            self._blobs[blob.name] = blob
            self._order.append(blob.name)

    def names(self):
        return list(self._order)

    def get(self, name):
        return self._blobs[name]

    def total_bytes(self):
        return sum(self._blobs[n].length for n in self._order)

    def verify(self):
        for name in self._order:
            self._blobs[name].verify()

    def __contains__(self, name):
        return name in self._blobs

    def __iter__(self):
        for name in self._order:
            yield self._blobs[name]

    def __len__(self):
        return len(self._order)


# ---------------------------------------------------------------------------
# Table files
# ---------------------------------------------------------------------------

_TABLE_000005 = bytes.fromhex("""
        84 03 80 00 42 00 85 71 75 65 72 79 5f 74 61 72
        67 65 74 00 01 8b 43 6f 6c 41 2f 44 6f 63 41 2f
        43 6f 6c 42 01 0a 68 42 7c 66 3a 7c 6f 62 3a 5f
        5f 6e 61 6d 65 5f 5f 61 73 63 00 01 8c 82 80 01
        07 00 05 01 08 01 13 50 11 3e 01 16 00 0a 05 15
        f0 3c 00 08 02 20 05 32 4a 12 48 70 72 6f 6a 65
        63 74 73 2f 54 65 73 74 54 65 72 6d 69 6e 61 74
        65 2f 64 61 74 61 62 61 73 65 73 2f 28 64 65 66
        61 75 6c 74 29 2f 64 6f 63 75 6d 65 6e 74 73 01
        7b 3e 85 00 0c 0d 07 50 08 15 5a 00 03 fe 5a 00
        2e 5a 00 38 07 12 06 5f 67 6c 6f 62 61 6c 00 01
        80 01 0b 11 65 1c 10 05 20 01 12 07 06 09 15 10
        00 03 01 10 04 00 01 09 10 24 01 12 01 76 65 72
        73 69 6f 6e 01 35 00 06 09 15 10 37 0c 07 01 05
        09 0b 10 36 0c 07 01 04 09 0b 10 35 0c 07 01 03
        09 0b 4c 34 0c 07 01 02 00 00 00 00 00 00 33 00
        00 00 00 01 00 00 00 01 2c 6e e0 f4 00 00 00 00
        01 00 00 00 00 c0 f2 a1 b0 00 09 03 86 01 ff ff
        ff ff ff ff ff 00 87 02 00 00 00 00 01 00 00 00
        00 58 c2 94 06 8c 02 08 99 02 17 00 00 00 00 00
        00 00 00 00 00 00 00 00 00 00 00 00 00 00 00 00
        00 00 00 00 00 00 00 00 00 00 00 00 00 57 fb 80
        8b 24 75 47 db
""")

_TABLE_000017 = bytes.fromhex("""
        00 14 50 85 74 61 72 67 65 74 00 01 8c 82 80 01
        0c 00 00 00 00 00 00 08 02 20 0a 32 4a 12 48 70
        72 6f 6a 65 63 74 73 2f 54 65 73 74 54 65 72 6d
        69 6e 61 74 65 2f 64 61 74 61 62 61 73 65 73 2f
        28 64 65 66 61 75 6c 74 29 2f 64 6f 63 75 6d 65
        6e 74 73 2f 43 6f 6c 41 2f 44 6f 63 41 2f 43 6f
        6c 42 2f 44 6f 63 42 07 12 06 5f 67 6c 6f 62 61
        6c 00 01 80 01 0d 00 00 00 00 00 00 08 02 10 0a
        20 01 00 00 00 00 01 00 00 00 00 fe cd e0 39 00
        00 00 00 01 00 00 00 00 c0 f2 a1 b0 00 09 03 86
        01 ff ff ff ff ff ff ff 00 8a 01 00 00 00 00 01
        00 00 00 00 e4 a7 7e 74 8f 01 08 9c 01 17 00 00
        00 00 00 00 00 00 00 00 00 00 00 00 00 00 00 00
        00 00 00 00 00 00 00 00 00 00 00 00 00 00 00 00
        57 fb 80 8b 24 75 47 db
""")

# Unreferenced by the manifest; must still be written as an empty file.
_TABLE_000085 = b""

# ---------------------------------------------------------------------------
# Metadata files
# ---------------------------------------------------------------------------

_CURRENT = b"MANIFEST-000084\n"

_LOG = (
    b"2022/04/04-11:56:56.493142 0x70000a254000 Recovering log #83\n"
    b"2022/04/04-11:56:56.534745 0x70000a254000 Delete type=3 #82\n"
    b"2022/04/04-11:56:56.535242 0x70000a254000 Delete type=0 #83\n"
)

_LOG_OLD = (
    b"2022/04/04-11:39:46.257251 0x700005314000 Recovering log #81\n"
    b"2022/04/04-11:39:46.304552 0x700005314000 Delete type=3 #80\n"
    b"2022/04/04-11:39:46.305064 0x700005314000 Delete type=0 #81\n"
)

_MANIFEST_000084 = bytes.fromhex("""
        45 63 9f dd ac 00 01 01 1a 6c 65 76 65 6c 64 62
        2e 42 79 74 65 77 69 73 65 43 6f 6d 70 61 72 61
        74 6f 72 07 00 05 e5 02 42 85 71 75 65 72 79 5f
        74 61 72 67 65 74 00 01 8b 43 6f 6c 41 2f 44 6f
        63 41 2f 43 6f 6c 42 2f 44 6f 63 42 7c 66 3a 7c
        6f 62 3a 5f 5f 6e 61 6d 65 5f 5f 61 73 63 00 01
        8c 82 80 01 07 00 00 00 00 00 00 13 85 76 65 72
        73 69 6f 6e 00 01 80 01 02 00 00 00 00 00 00 07
        00 11 e8 01 14 85 74 61 72 67 65 74 00 01 8c 82
        80 01 0c 00 00 00 00 00 00 19 85 74 61 72 67 65
        74 5f 67 6c 6f 62 61 6c 00 01 80 01 0d 00 00 00
        00 00 00 b1 03 ac ba 08 00 01 02 55 09 00 03 56
        04 0d
""")


SNAPPY_FIXTURES = FixtureCatalog([
    FixtureBlob("000005.ldb", _TABLE_000005,
                "62770d55f0a24c68f1f86637d86243b867549f4ca0c6c124847f0e7c2599a8c4"),
    FixtureBlob("000017.ldb", _TABLE_000017,
                "300dfdff489378c7d41931962633b9fa908a7fd4e99563a18ff2bdb2784a99e4"),
    FixtureBlob("000085.ldb", _TABLE_000085,
                "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"),
    FixtureBlob("CURRENT", _CURRENT,
                "77414ae1b67c94ef0166a6993e5a6dc91f3b0a561a390b5026de74ea12e95e78"),
    FixtureBlob("LOG.old", _LOG_OLD,
                "9a3ff4ce93728ba7bcd452ce7d0e10fe0b211152c59758c9a1668be48f6d2e43"),
    FixtureBlob("LOG", _LOG,
                "7238ab6be5a01c3d68041129dc5bfc683b94349d75b51a1d7880b1694abd4fa5"),
    FixtureBlob("MANIFEST-000084", _MANIFEST_000084,
                "a42e59a240f184031889ce33677a8123149b17cde27dee1465083af54fb2cb1d"),
])
