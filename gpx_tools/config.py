"""Central configuration for the GPX tools.

All values are constants imported by the rest of the package. Each can be
overridden through an environment variable (optionally via a local `.env`).
"""

from __future__ import annotations

import importlib
import os


def _env_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


# Load .env variables when python-dotenv is available.
_load_dotenv = None
try:
    _dotenv_mod = importlib.import_module("dotenv")
    _load_dotenv = getattr(_dotenv_mod, "load_dotenv", None)
except Exception:
    _load_dotenv = None

if callable(_load_dotenv):
    # Load .env from the current directory or any parent folder.
    _load_dotenv()


# ---------------------------------------------------------------------------
# Point reduction solver
# ---------------------------------------------------------------------------
# Initial epsilon guesses. Coordinates are raw lon/lat degrees, so the
# distance-based tolerance is in degrees and the area-based one in square
# degrees.
DEFAULT_RDP_EPSILON = _env_float("GPX_TOOLS_DEFAULT_RDP_EPSILON", 0.001)
DEFAULT_VW_EPSILON = _env_float("GPX_TOOLS_DEFAULT_VW_EPSILON", 0.0001)

# Hard cap on simplification trials per track (both search phases combined).
DEFAULT_MAX_ITERATIONS = _env_int("GPX_TOOLS_DEFAULT_MAX_ITERATIONS", 20)


# ---------------------------------------------------------------------------
# Performance tuning
# ---------------------------------------------------------------------------
# Threads used to reduce independent tracks in parallel. 1 keeps everything
# on the calling thread.
MAX_WORKERS = max(1, _env_int("GPX_TOOLS_MAX_WORKERS", 1))


# ---------------------------------------------------------------------------
# Diagnostics
# ---------------------------------------------------------------------------
# Measure the maximum deviation between original and reduced segments after
# each reduction (adds one Hausdorff computation per segment).
COMPUTE_DEVIATION = _env_bool("GPX_TOOLS_COMPUTE_DEVIATION", False)
