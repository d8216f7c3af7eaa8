# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-09
# Updated: 2026-01-18
# Description: settings.py
# -----------------------------------------------------------------------------
import os


def _env(name: str, default: str = "") -> str:
    """Read env var safely and strip whitespace."""
    return (os.getenv(name) or default).strip()


def _env_int(name: str, default: int) -> int:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return int(v)
    except ValueError as e:
        raise RuntimeError(f"Env var {name} must be an int, got {v!r}") from e


def _env_float(name: str, default: float) -> float:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return float(v)
    except ValueError as e:
        raise RuntimeError(f"Env var {name} must be a float, got {v!r}") from e


def _env_bool(name: str, default: bool) -> bool:
    v = _env(name, "")
    if v == "":
        return default
    v = v.lower()
    if v in ("1", "true", "t", "yes", "y", "on"):
        return True
    if v in ("0", "false", "f", "no", "n", "off"):
        return False
    raise RuntimeError(f"Env var {name} must be a boolean, got {v!r}")


# -----------------------------------------------------------------------------
# Embeddings
# -----------------------------------------------------------------------------
# text-embedding-3-small -> 1536, text-embedding-3-large -> 3072
EMBEDDING_DIM = _env_int("FT_EMBEDDING_DIM", 1536)


# -----------------------------------------------------------------------------
# Recommendation defaults (caller policy, not enforced by the vector store)
# -----------------------------------------------------------------------------
MIN_CATEGORY_SCORE = _env_float("FT_MIN_CATEGORY_SCORE", 0.75)
DEFAULT_CATEGORY = _env("FT_DEFAULT_CATEGORY", "Другое")

# Seconds an anchor snapshot stays fresh; 0 means "until refreshed explicitly"
ANCHOR_CACHE_TTL = _env_float("FT_ANCHOR_CACHE_TTL", 0.0)


# -----------------------------------------------------------------------------
# Learning
# -----------------------------------------------------------------------------
# Summed correction weight a category needs before its texts become anchors
PROMOTION_MIN_WEIGHT = _env_float("FT_PROMOTION_MIN_WEIGHT", 1.0)

# Seed the learning log with the bootstrap corrections at API start-up
SEED_ON_STARTUP = _env_bool("FT_SEED_ON_STARTUP", False)


# -----------------------------------------------------------------------------
# Sanity checks (tunable)
# -----------------------------------------------------------------------------
if EMBEDDING_DIM <= 0:
    raise RuntimeError("EMBEDDING_DIM must be a positive integer")

if not DEFAULT_CATEGORY:
    raise RuntimeError("DEFAULT_CATEGORY resolved to empty value")
