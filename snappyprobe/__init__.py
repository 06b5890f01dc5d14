# snappyprobe/__init__.py

from snappyprobe.probe.check import run_check
from snappyprobe.probe.classifier import Verdict
