# snappyprobe/probe/classifier.py

from snappyprobe.core import errors
from snappyprobe.core.status import PHASE_ITERATE

SNAPPY_UNEXPECTEDLY_PRESENT = (
    "Reading a Snappy-compressed LevelDb database was successful; "
    "however, it should NOT have been successful "
    "since Snappy support is expected to NOT be available."
)


class Verdict(object):
    """Pass/fail result of one check, with the outcome that decided it."""

    def __init__(self, passed, reason="", outcome=None, observed=0):
        self.passed = passed
        self.reason = reason
        self.outcome = outcome
        self.observed = observed

    def raise_for_failure(self):
        if not self.passed:
            raise errors.CheckFailure(self.reason)

    def __bool__(self):
        return self.passed

    def __repr__(self):
        if self.passed:
            return "Verdict(pass, observed=%d)" % self.observed
        return "Verdict(fail, %r, observed=%d)" % (self.reason, self.observed)


def classify_codec_present(outcomes):
    """
    Snappy support expected: every outcome must be OK. Stops consuming at the
    first non-OK outcome.
    """
    observed = 0
    for outcome in outcomes:
        observed += 1
        if not outcome.is_ok():
            return Verdict(False, outcome.describe(), outcome, observed)
    return Verdict(True, observed=observed)


def classify_codec_absent(outcomes):
    """
    Snappy support expected to be missing: the only acceptable failure is an
    iteration-time corruption, and at least one must be seen.
    """
    observed = 0
    got_failed_status = False
    for outcome in outcomes:
        observed += 1
        if outcome.is_ok():
            continue
        got_failed_status = True
        if outcome.phase != PHASE_ITERATE or not outcome.status.is_corruption():
            return Verdict(False, outcome.describe(), outcome, observed)

    if not got_failed_status:
        return Verdict(False, SNAPPY_UNEXPECTEDLY_PRESENT, None, observed)
    return Verdict(True, observed=observed)


def classify(outcomes, expect_codec):
    if expect_codec:
        return classify_codec_present(outcomes)
    return classify_codec_absent(outcomes)
