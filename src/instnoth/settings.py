from __future__ import annotations
import os

SCRIPT_SUFFIX = os.environ.get("INSTNOTH_SUFFIX", ".instnoth")
LOG_LEVEL = os.environ.get("INSTNOTH_LOG_LEVEL", "ERROR")
PROGRESS_WIDTH = int(os.environ.get("INSTNOTH_PROGRESS_WIDTH", "40"))
