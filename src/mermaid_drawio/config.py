"""Configuration from environment."""

import logging
import os
import shlex
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_MERMAID_CLI = "mmdc"


def project_dir() -> Path:
    """Root directory MCP tool paths are resolved against."""
    return Path(os.environ.get("MCP_PROJECT_DIR", os.getcwd())).resolve()


def mermaid_command() -> list[str]:
    """The mermaid-cli invocation, e.g. ``npx -y @mermaid-js/mermaid-cli``."""
    return shlex.split(os.environ.get("MERMAID_CLI", DEFAULT_MERMAID_CLI)) or [DEFAULT_MERMAID_CLI]


def render_timeout() -> Optional[float]:
    """Seconds to wait for mermaid-cli; None waits indefinitely."""
    raw = os.environ.get("MERMAID_RENDER_TIMEOUT", "").strip()
    if not raw:
        return None
    try:
        timeout = float(raw)
    except ValueError:
        logger.warning("Ignoring invalid MERMAID_RENDER_TIMEOUT=%r", raw)
        return None
    if timeout <= 0:
        logger.warning("Ignoring non-positive MERMAID_RENDER_TIMEOUT=%r", raw)
        return None
    return timeout


def log_level() -> str:
    """Log level name; unknown names fall back to INFO."""
    level = os.environ.get("MERMAID_DRAWIO_LOG_LEVEL", "INFO").strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        logger.warning("Ignoring unknown MERMAID_DRAWIO_LOG_LEVEL=%r", level)
        return "INFO"
    return level
