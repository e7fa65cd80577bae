"""Helper utility functions for stepshell."""

import platform
import shutil
from pathlib import Path
from typing import Dict, Optional

from ..utils.logging import logger


def is_windows() -> bool:
    """Whether the host lacks a POSIX-style shell."""
    return platform.system().lower() == "windows"


def find_posix_shell() -> Optional[str]:
    """Locate a POSIX shell, preferring bash over sh."""
    for candidate in ("bash", "sh"):
        path = shutil.which(candidate)
        if path:
            return path
    return None


def get_current_context(cwd: Optional[Path] = None) -> Dict[str, str]:
    """Get current system context (platform, directory, hostname)."""
    return {
        'current_platform': f"{platform.system()} {platform.release()}",
        'current_directory': str(cwd or Path.cwd()),
        'current_hostname': platform.node(),
    }


def safe_file_write(file_path: Path, content: str, description: str = None) -> bool:
    """Safely write content to a file with error handling."""
    desc = description or f"file {file_path}"
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")
        logger.system(f"Generated {desc}")
        return True
    except OSError as e:
        logger.error(f"Failed to write {desc}: {e}")
        return False
