"""Centralized lspnav configuration.

Override via environment variables or .env file.

Environment Variables:
    LSP_CONTEXT_LINES: Lines of context around each hit (default: 5).
        Unset, non-integer or negative values fall back to the default.
    LSP_SYMBOL_SEPARATORS: Comma separated qualified-name separators used
        for method matching (default: ".,::")
"""

import os
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from lspnav.symbol_matching import DEFAULT_SEPARATORS

logger = logging.getLogger(__name__)

# Load .env if python-dotenv is available
try:
    from dotenv import load_dotenv
    env_path = Path(__file__).parent.parent / ".env"
    if env_path.exists():
        load_dotenv(env_path)
except ImportError:
    pass

DEFAULT_CONTEXT_LINES = 5


def _get_env_non_negative_int(key: str, default: int) -> int:
    """Get a non-negative integer environment variable, falling back on bad values."""
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {key}={raw!r}, using {default}")
        return default
    if value < 0:
        logger.warning(f"Ignoring negative {key}={value}, using {default}")
        return default
    return value


def _get_env_list(key: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    """Get a comma separated environment variable as a tuple."""
    raw = os.getenv(key)
    if not raw:
        return default
    values = tuple(part.strip() for part in raw.split(",") if part.strip())
    return values or default


@dataclass
class NavigatorConfig:
    """Settings threaded into CodeNavigator at construction."""

    context_lines: int = field(
        default_factory=lambda: _get_env_non_negative_int("LSP_CONTEXT_LINES", DEFAULT_CONTEXT_LINES)
    )
    symbol_separators: Tuple[str, ...] = field(
        default_factory=lambda: _get_env_list("LSP_SYMBOL_SEPARATORS", DEFAULT_SEPARATORS)
    )

    def __post_init__(self):
        if self.context_lines < 0:
            raise ValueError(f"context_lines must be >= 0, got {self.context_lines}")


_config: Optional[NavigatorConfig] = None


def get_config() -> NavigatorConfig:
    """Get the process-wide configuration (read from the environment once)."""
    global _config
    if _config is None:
        _config = NavigatorConfig()
    return _config


def reset_config() -> None:
    """Forget the cached configuration so the next get_config() re-reads it."""
    global _config
    _config = None
