"""Local configuration for specdeck."""

from __future__ import annotations

import os
from pathlib import Path


DEFAULT_SPECDECK_DIR = "./specdeck"
DEFAULT_FEATURES_SECTION = "Features"
DEFAULT_MAX_DOCUMENT_BYTES = 1024 * 1024
DEFAULT_LOG_LEVEL = "INFO"

# Root of the release/overlay document tree.
SPECDECK_DIR = Path(os.getenv("SPECDECK_DIR", DEFAULT_SPECDECK_DIR)).expanduser()
SPECDECK_RELEASES_DIR = Path(
    os.getenv("SPECDECK_RELEASES_DIR", str(SPECDECK_DIR / "releases"))
).expanduser()
SPECDECK_OVERLAYS_DIR = Path(
    os.getenv("SPECDECK_OVERLAYS_DIR", str(SPECDECK_DIR / "overlays"))
).expanduser()
SPECDECK_FEATURES_SECTION = os.getenv("SPECDECK_FEATURES_SECTION", DEFAULT_FEATURES_SECTION)
# Size ceiling applied before parsing; 0 disables the check.
SPECDECK_MAX_DOCUMENT_BYTES = int(
    os.getenv("SPECDECK_MAX_DOCUMENT_BYTES", str(DEFAULT_MAX_DOCUMENT_BYTES))
)
SPECDECK_LOG_LEVEL = os.getenv("SPECDECK_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
