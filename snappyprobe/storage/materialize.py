# snappyprobe/storage/materialize.py

import os
import shutil

from snappyprobe.core import errors
from snappyprobe.core.log import get_logger

log = get_logger("materialize")

# O_BINARY only exists on Windows.
_WRITE_FLAGS = os.O_WRONLY | os.O_CREAT | os.O_EXCL | getattr(os, "O_BINARY", 0)


def remove_tree(path):
    """
    Recursively removes `path`. A leftover file or symlink at the path is
    unlinked. Raises CleanupError unless the path is gone afterwards.
    """
    try:
        if os.path.islink(path) or os.path.isfile(path):
            os.unlink(path)
        elif os.path.isdir(path):
            shutil.rmtree(path)
    except OSError as e:
        raise errors.CleanupError(path, str(e))

    if os.path.lexists(path):
        raise errors.CleanupError(path, "path still exists after removal")


def create_dirs(path):
    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        raise errors.DirectoryCreateError(path, str(e))
    if not os.path.isdir(path):
        raise errors.DirectoryCreateError(path, "not a directory")


def _write_all(fd, data):
    view = memoryview(data)
    while len(view) > 0:
        n = os.write(fd, view)
        if n <= 0:
            raise OSError("short write: %d bytes left" % len(view))
        view = view[n:]


def write_blob(target_dir, blob):
    """
    Writes one blob to target_dir/blob.name with exclusive-create semantics.
    The fsync and close results are checked, not assumed.
    """
    path = os.path.join(target_dir, blob.name)
    parent = os.path.dirname(path)
    if parent != target_dir:
        create_dirs(parent)

    try:
        fd = os.open(path, _WRITE_FLAGS, 0o644)
    except OSError as e:
        raise errors.FileWriteError(blob.name, path, "unable to open: %s" % e)

    try:
        _write_all(fd, blob.data)
        os.fsync(fd)
    except OSError as e:
        try:
            os.close(fd)
        except OSError:
            pass
        raise errors.FileWriteError(blob.name, path, str(e))

    try:
        os.close(fd)
    except OSError as e:
        raise errors.FileWriteError(blob.name, path, "close failed: %s" % e)

    log.debug("wrote %s (%d bytes)", path, blob.length)
    return path


def materialize(catalog, target_dir):
    """
    Rebuilds the fixture database at `target_dir`: removes whatever is there,
    recreates the directory and writes every blob of `catalog`.
    Returns `target_dir`.
    """
    target_dir = os.fspath(target_dir)

    if os.path.lexists(target_dir):
        log.info("removing previous fixture directory %s", target_dir)
    remove_tree(target_dir)
    create_dirs(target_dir)

    for blob in catalog:
        write_blob(target_dir, blob)

    log.info("materialized %d files (%d bytes) in %s",
             len(catalog), catalog.total_bytes(), target_dir)
    return target_dir


def _list_files(target_dir):
    found = []
    for root, _dirs, files in os.walk(target_dir):
        for fn in files:
            rel = os.path.relpath(os.path.join(root, fn), target_dir)
            found.append(rel.replace(os.sep, "/"))
    return found


def verify_materialized(catalog, target_dir):
    """
    Compares `target_dir` against `catalog`. Returns a list of problems; an
    empty list means the directory holds exactly the catalog's bytes.
    """
    target_dir = os.fspath(target_dir)
    problems = []
    on_disk = set(_list_files(target_dir))

    for blob in catalog:
        if blob.name not in on_disk:
            problems.append("missing: %s" % blob.name)
            continue
        path = os.path.join(target_dir, blob.name)
        with open(path, "rb") as f:
            data = f.read()
        if len(data) != blob.length:
            problems.append("size mismatch: %s (%d != %d)" % (blob.name, len(data), blob.length))
        elif data != blob.data:
            problems.append("content mismatch: %s" % blob.name)

    for name in sorted(on_disk):
        if name not in catalog:
            problems.append("unexpected: %s" % name)

    return problems
