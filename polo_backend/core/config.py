import os

# =====================================
# Global configuration for Polo Manager
# =====================================

BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def _flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# TEST_MODE:
# When True, startup skips auto-seeding and SQL echo is forced off.
TEST_MODE = _flag("POLO_TEST_MODE", False)

# --- Database ---
DATABASE_URL = os.getenv("POLO_DATABASE_URL", f"sqlite:///{os.path.join(BASE_DIR, 'polo.db')}")
SQL_ECHO = _flag("POLO_SQL_ECHO", False) and not TEST_MODE

# --- Logging ---
LOG_LEVEL = os.getenv("POLO_LOG_LEVEL", "INFO").upper()

# Seed demo data on startup when the database holds no clubs
AUTO_SEED = _flag("POLO_AUTO_SEED", True) and not TEST_MODE

# --- Domain constants ---
# Polo handicaps range from -2 to 10; out-of-range values are clamped, not rejected
HANDICAP_MIN = -2.0
HANDICAP_MAX = 10.0

DEFAULT_TOTAL_CHUKKERS = 6

# When True, an award may only name a recipient matching its award type's category
ENFORCE_AWARD_CATEGORY = _flag("POLO_ENFORCE_AWARD_CATEGORY", True)
