# config.py
import os
from dataclasses import dataclass
from typing import List

from dotenv import load_dotenv

# ---------- Load .env ----------
load_dotenv()  # loads .env from CWD by default; shell env wins

# ---------- Helpers ----------
def _getenv_bool(name: str, default: bool = False) -> bool:
    val = os.getenv(name)
    if val is None:
        return default
    val = val.strip().lower()
    return val in ("1", "true", "t", "yes", "y", "on")

def _getenv_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)).strip())
    except ValueError:
        return default

def _getenv_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)).strip())
    except ValueError:
        return default

def _getenv_list(name: str) -> List[str]:
    raw = os.getenv(name, "")
    if not raw:
        return []
    return [x.strip() for x in raw.split(",") if x.strip()]

# ---------- RPC ----------
SOLANA_RPC_URL: str = os.getenv("SOLANA_RPC_URL", "https://api.mainnet-beta.solana.com").strip()
COMMITMENT_LEVEL: str = os.getenv("COMMITMENT_LEVEL", "confirmed").strip().lower()

# Reader-side retry behaviour (the filter itself never retries)
RPC_RETRIES: int = max(0, _getenv_int("RPC_RETRIES", 2))
RPC_RETRY_DELAY_SECS: float = _getenv_float("RPC_RETRY_DELAY_SECS", 0.25)

# Off-chain metadata JSON fetch
METADATA_FETCH_TIMEOUT_SECS: float = _getenv_float("METADATA_FETCH_TIMEOUT_SECS", 5.0)

# ---------- Filters ----------
CHECK_IF_MUTABLE: bool = _getenv_bool("CHECK_IF_MUTABLE", False)
CHECK_IF_SOCIALS: bool = _getenv_bool("CHECK_IF_SOCIALS", False)

# Any-signal mode; when off, only the HAS_* toggles below are consulted
HAS_ANY_SOCIAL: bool = _getenv_bool("HAS_ANY_SOCIAL", True)
HAS_IMAGE: bool = _getenv_bool("HAS_IMAGE", False)
HAS_DESCRIPTION: bool = _getenv_bool("HAS_DESCRIPTION", False)
HAS_TELEGRAM: bool = _getenv_bool("HAS_TELEGRAM", False)
HAS_TWITTER: bool = _getenv_bool("HAS_TWITTER", False)
HAS_WEBSITE: bool = _getenv_bool("HAS_WEBSITE", False)

# Repeated filter passes before a pool counts as a match (0 disables polling)
FILTER_CHECK_INTERVAL_SECS: float = _getenv_float("FILTER_CHECK_INTERVAL_SECS", 2.0)
FILTER_CHECK_DURATION_SECS: float = _getenv_float("FILTER_CHECK_DURATION_SECS", 60.0)
CONSECUTIVE_FILTER_MATCHES: int = max(1, _getenv_int("CONSECUTIVE_FILTER_MATCHES", 3))

# Optional: mints to check on startup when none are given on the command line
CHECK_MINTS: List[str] = _getenv_list("CHECK_MINTS")

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").strip().upper()

# ---------- Status service ----------
WEB_HOST: str = os.getenv("WEB_HOST", "0.0.0.0").strip()
WEB_PORT: int = _getenv_int("WEB_PORT", 8000)
# Per-mint filters kept by the status service (least recently used dropped first)
WEB_MAX_FILTERS: int = max(1, _getenv_int("WEB_MAX_FILTERS", 1024))


@dataclass(frozen=True)
class FilterSettings:
    """Predicate toggles for one filter instance; defaults come from the env above."""
    check_mutable: bool = CHECK_IF_MUTABLE
    check_socials: bool = CHECK_IF_SOCIALS
    any_social: bool = HAS_ANY_SOCIAL
    check_image: bool = HAS_IMAGE
    check_description: bool = HAS_DESCRIPTION
    check_telegram: bool = HAS_TELEGRAM
    check_twitter: bool = HAS_TWITTER
    check_website: bool = HAS_WEBSITE

    @property
    def configured_checks(self) -> List[str]:
        checks = []
        if self.check_mutable:
            checks.append("mutable")
        if self.check_socials:
            checks.append("socials")
        return checks
