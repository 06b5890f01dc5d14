"""
snappyprobe/probe/check.py

One full compatibility check: rebuild the fixture database, walk it with the
LevelDB engine and judge the statuses against the expected Snappy support.

Preparation errors (CleanupError, DirectoryCreateError, FileWriteError)
propagate; the engine is never opened against a half-written directory.
"""

from snappyprobe.core.config import get_settings
from snappyprobe.core.log import get_logger, setup_logging
from snappyprobe.storage import materialize
from snappyprobe.storage.engine import load_engine
from snappyprobe.storage.fixtures import SNAPPY_FIXTURES
from snappyprobe.probe import prober, classifier

log = get_logger("check")


def run_check(expect_snappy=None, target_dir=None, engine=None, catalog=None,
              settings=None):
    """
    Returns a classifier.Verdict. Arguments left as None are taken from
    the settings (expect_snappy, target_dir), the default LevelDB engine and
    the Snappy fixture catalog.
    """
    if settings is None:
        settings = get_settings()
    setup_logging(settings)
    if expect_snappy is None:
        expect_snappy = settings.expect_snappy
    if target_dir is None:
        target_dir = settings.resolved_target_dir()
    if catalog is None:
        catalog = SNAPPY_FIXTURES

    catalog.verify()
    path = materialize.materialize(catalog, target_dir)

    if engine is None:
        engine = load_engine()

    outcomes = prober.probe(path, engine)
    try:
        verdict = classifier.classify(outcomes, expect_snappy)
    finally:
        outcomes.close()

    mode = "present" if expect_snappy else "absent"
    if verdict.passed:
        log.info("snappy expected %s: pass (%d outcomes)", mode, verdict.observed)
    else:
        log.error("snappy expected %s: FAIL: %s", mode, verdict.reason)
    return verdict
