"""
snappyprobe/probe/prober.py

Opens the fixture database and walks it front to back, reporting the cursor
status at every step plus one terminal status.
"""

import os

from snappyprobe.core import errors
from snappyprobe.core.status import Outcome, PHASE_OPEN, PHASE_ITERATE
from snappyprobe.core.log import get_logger

log = get_logger("prober")


def probe(target_dir, engine):
    """
    Generator of Outcome values for one pass over the database at
    `target_dir`.

    A failed open yields a single open-phase outcome. Otherwise one outcome is
    yielded per valid cursor position, stopping after the first non-OK one,
    and then one terminal outcome with the cursor's final status. When the
    loop stopped on an error the terminal outcome repeats that error.
    """
    path = os.fspath(target_dir)
    try:
        handle = engine.open(path, create_if_missing=False)
    except errors.OpenError as e:
        log.warning("open failed: %s", e)
        yield Outcome(e.status, PHASE_OPEN, 0, path)
        return

    log.info("opened %s with %s", path, engine.name)
    cursor = None
    try:
        cursor = handle.new_cursor()
        cursor.seek_to_first()
        step = 0
        while cursor.is_valid():
            status = cursor.status()
            if status.is_ok():
                log.debug("step %d: %r", step, cursor.key())
            else:
                log.warning("step %d: %s", step, status)
            yield Outcome(status, PHASE_ITERATE, step, path)
            if not status.is_ok():
                break
            cursor.advance()
            step += 1

        final = cursor.status()
        if not final.is_ok():
            log.warning("terminal status after %d entries: %s", step, final)
        yield Outcome(final, PHASE_ITERATE, step, path)
    finally:
        if cursor is not None:
            cursor.close()
        handle.close()


def collect(target_dir, engine):
    """Runs probe() to completion and returns the outcomes as a list."""
    return list(probe(target_dir, engine))
