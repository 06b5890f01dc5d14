"""
snappyprobe/core/errors.py

Exception hierarchy for the snappyprobe compatibility check.
"""


class ProbeError(Exception):
    """Base class for all snappyprobe exceptions."""
    pass


class PreparationError(ProbeError):
    """Base class for failures while rebuilding the fixture directory."""
    pass


class CleanupError(PreparationError):
    """Raised when the previous run's directory cannot be fully removed."""

    def __init__(self, path, reason=""):
        PreparationError.__init__(
            self, "Failed to clean up leveldb in directory %s: %s" % (path, reason)
        )
        self.path = path
        self.reason = reason


class DirectoryCreateError(PreparationError):
    """Raised when the fixture directory cannot be created."""

    def __init__(self, path, reason=""):
        PreparationError.__init__(
            self, "Creating directory failed: %s (%s)" % (path, reason)
        )
        self.path = path
        self.reason = reason


class FileWriteError(PreparationError):
    """Raised when a fixture file cannot be opened, written, flushed or closed."""

    def __init__(self, file_name, path, reason=""):
        PreparationError.__init__(
            self, "Writing to file failed: %s (%s)" % (path, reason)
        )
        self.file_name = file_name
        self.path = path
        self.reason = reason


class FixtureIntegrityError(ProbeError):
    """Raised when an embedded blob no longer matches its recorded digest."""

    def __init__(self, name, msg=""):
        ProbeError.__init__(self, "Fixture %s failed integrity check: %s" % (name, msg))
        self.name = name
        self.msg = msg


class EngineError(ProbeError):
    """Base class for storage engine boundary errors."""
    pass


class EngineUnavailableError(EngineError):
    """Raised when no LevelDB binding can be loaded."""
    pass


class OpenError(EngineError):
    """Raised by an engine when a database cannot be opened."""

    def __init__(self, path, status):
        EngineError.__init__(
            self, "Opening LevelDb database %s failed: %s" % (path, status.to_string())
        )
        self.path = path
        self.status = status


class CheckFailure(ProbeError, AssertionError):
    """Raised when a verdict is surfaced as a failed assertion."""

    def __init__(self, reason):
        ProbeError.__init__(self, reason)
        self.reason = reason
