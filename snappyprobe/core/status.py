# snappyprobe/core/status.py

# ============================================================================
# Status Codes (LevelDB ordering)
# ============================================================================

OK               = 0
NOT_FOUND        = 1
CORRUPTION       = 2
NOT_SUPPORTED    = 3
INVALID_ARGUMENT = 4
IO_ERROR         = 5

# Prefixes used by leveldb::Status::ToString()
_PREFIXES = {
    NOT_FOUND:        "NotFound: ",
    CORRUPTION:       "Corruption: ",
    NOT_SUPPORTED:    "Not implemented: ",
    INVALID_ARGUMENT: "Invalid argument: ",
    IO_ERROR:         "IO error: ",
}

_CODE_NAMES = {
    OK:               "OK",
    NOT_FOUND:        "NOT_FOUND",
    CORRUPTION:       "CORRUPTION",
    NOT_SUPPORTED:    "NOT_SUPPORTED",
    INVALID_ARGUMENT: "INVALID_ARGUMENT",
    IO_ERROR:         "IO_ERROR",
}

# Outcome kinds seen by the classifier
KIND_OK         = "ok"
KIND_CORRUPTION = "corruption"
KIND_OTHER      = "other"

PHASE_OPEN    = "open"
PHASE_ITERATE = "iterate"


class Status(object):
    """
    Immutable mirror of a leveldb::Status.
    """

    __slots__ = ("code", "message")

    def __init__(self, code=OK, message=""):
        if code not in _CODE_NAMES:
            raise ValueError("Unknown status code: %r" % (code,))
        self.code = code
        self.message = message if code != OK else ""

    @staticmethod
    def ok():
        return _OK_STATUS

    @staticmethod
    def corruption(message):
        return Status(CORRUPTION, message)

    @staticmethod
    def io_error(message):
        return Status(IO_ERROR, message)

    @staticmethod
    def invalid_argument(message):
        return Status(INVALID_ARGUMENT, message)

    @staticmethod
    def parse(text):
        """Rebuilds a Status from the text produced by Status::ToString()."""
        if isinstance(text, bytes):
            text = text.decode("utf-8", "replace")
        if text == "OK":
            return _OK_STATUS
        for code, prefix in _PREFIXES.items():
            if text.startswith(prefix):
                return Status(code, text[len(prefix):])
        return None

    def is_ok(self):
        return self.code == OK

    def is_corruption(self):
        return self.code == CORRUPTION

    def is_io_error(self):
        return self.code == IO_ERROR

    def is_not_found(self):
        return self.code == NOT_FOUND

    def code_name(self):
        return _CODE_NAMES[self.code]

    def to_string(self):
        if self.code == OK:
            return "OK"
        return _PREFIXES[self.code] + self.message

    def __eq__(self, other):
        if not isinstance(other, Status):
            return NotImplemented
        return self.code == other.code and self.message == other.message

    def __hash__(self):
        return hash((self.code, self.message))

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return "Status(%s, %r)" % (self.code_name(), self.message)


_OK_STATUS = Status(OK)


class Outcome(object):
    """
    One status observed while probing: either the single synthetic outcome of
    a failed open, or the cursor status at an iteration step (the terminal
    outcome included).
    """

    __slots__ = ("status", "phase", "step", "path")

    def __init__(self, status, phase=PHASE_ITERATE, step=0, path=None):
        self.status = status
        self.phase = phase
        self.step = step
        self.path = path

    def is_ok(self):
        return self.status.is_ok()

    @property
    def kind(self):
        if self.status.is_ok():
            return KIND_OK
        if self.status.is_corruption():
            return KIND_CORRUPTION
        return KIND_OTHER

    def describe(self):
        if self.phase == PHASE_OPEN:
            return "Opening LevelDb database %s failed: %s" % (
                self.path, self.status.to_string()
            )
        return "step %d: %s" % (self.step, self.status.to_string())

    def __eq__(self, other):
        if not isinstance(other, Outcome):
            return NotImplemented
        return (self.status == other.status and self.phase == other.phase
                and self.step == other.step)

    def __hash__(self):
        return hash((self.status, self.phase, self.step))

    def __repr__(self):
        return "Outcome(%r, phase=%s, step=%d)" % (self.status, self.phase, self.step)
