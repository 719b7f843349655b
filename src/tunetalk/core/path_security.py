"""
Path security validation utilities for TuneTalk.

Per-user files are named after caller-supplied ids, so every such path is
checked to stay inside its storage root.
"""

import re
from pathlib import Path

_SAFE_ID = re.compile(r"^[A-Za-z0-9_.@-]+$")


def is_path_within(file_path: Path, root: Path) -> bool:
    """Pure function - validates path is within the root directory.

    Uses Path.resolve() to handle symlinks and relative paths, then checks if the
    resolved path is a child of the root.

    Args:
        file_path: The file path to validate
        root: Allowed root directory

    Returns:
        True if path is within root, False otherwise
    """
    try:
        file_path.resolve().relative_to(root.resolve())
        return True
    except ValueError:
        # relative_to raises ValueError if path is not a subpath
        return False
    except (OSError, RuntimeError):
        # Path.resolve() can raise OSError for invalid paths or RuntimeError for recursion
        return False


def is_safe_identifier(value: str) -> bool:
    """Return True if value can be embedded in a file name."""
    return bool(_SAFE_ID.match(value)) and ".." not in value
