from __future__ import annotations
import os

# Target file to load instead of the built-in table (unset -> built-in).
TARGETS_FILE = os.environ.get("TARGETRUN_FILE") or None
# Directory commands run from; a command's own cwd is relative to it.
ROOT_DIR = os.environ.get("TARGETRUN_ROOT", ".")
