"""
Utility functions for the Prompt Pocket store.
"""

import os
import random
import string
import time
from pathlib import Path
from typing import Optional

from pocket.constants import DATA_DIR_ENV_VAR, DEFAULT_DATA_DIR, DEFAULT_PREVIEW_LENGTH

_ID_ALPHABET = string.digits + string.ascii_lowercase


def generate_id() -> str:
    """Generate an opaque identifier for a new group or prompt.

    Format is ``<epoch-millis>-<7 base36 chars>``.

    Returns:
        New identifier string.
    """
    millis = int(time.time() * 1000)
    suffix = "".join(random.choices(_ID_ALPHABET, k=7))
    return f"{millis}-{suffix}"


def make_preview(content: str, length: int = DEFAULT_PREVIEW_LENGTH) -> str:
    """Shorten content for one-line display.

    Args:
        content: Full prompt content.
        length: Maximum number of characters kept.

    Returns:
        The leading characters of content, with "..." appended if truncated.
    """
    if len(content) <= length:
        return content
    return content[:length] + "..."


def resolve_data_dir(data_dir: Optional[Path] = None) -> Path:
    """Resolve the directory holding the stored snapshot.

    Precedence: explicit argument, then the PROMPT_POCKET_HOME environment
    variable, then ~/.prompt-pocket.
    """
    if data_dir:
        return Path(data_dir).expanduser()
    env_dir = os.environ.get(DATA_DIR_ENV_VAR)
    if env_dir:
        return Path(env_dir).expanduser()
    return DEFAULT_DATA_DIR
