# snappyprobe/probe/__init__.py

from snappyprobe.probe.prober import probe, collect
from snappyprobe.probe.classifier import (
    classify,
    classify_codec_present,
    classify_codec_absent,
)
