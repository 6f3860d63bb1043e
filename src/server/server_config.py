"""Server configuration."""

from __future__ import annotations

import os

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000

HOST = os.getenv("HOST", DEFAULT_HOST)
PORT = int(os.getenv("PORT", str(DEFAULT_PORT)))
RELOAD = os.getenv("RELOAD", "false").lower() == "true"

# Upper bound on markdown posted to /api/outline, in characters.
MAX_OUTLINE_CHARS = int(os.getenv("SPECDECK_MAX_OUTLINE_CHARS", str(512 * 1024)))
