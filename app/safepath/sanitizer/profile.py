"""Sanitizer profile persistence.

A profile is a ``PathSanitizer`` configuration stored as TOML, by default
in ~/.config/safepath/sanitizer.toml:

    fixed_separator = "/"
    possible_separators = ["\\\\"]
    root_mode = "separator_only"
    replacement_mode = "quick_then_exact"
    quick_replacements = ["[\\\\x00-\\\\x1F]"]

    [exact_replacements]
    " " = "_"
"""

import logging
import os
import re
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile

import tomli_w
from pydantic import ValidationError

from safepath.core.paths import get_sanitizer_profile_path
from safepath.sanitizer.engine import PathSanitizer

logger = logging.getLogger(__name__)


class ProfileError(Exception):
    """Base exception for sanitizer profile errors."""


class ProfileNotFoundError(ProfileError):
    """Raised when the profile file is not found."""


class ProfileParseError(ProfileError):
    """Raised when the profile file cannot be parsed."""


def load_sanitizer_profile(path: Path | None = None) -> PathSanitizer:
    """Load a sanitizer from a TOML profile.

    The quick replacement pattern is compiled during loading.

    Args:
        path: Profile file. If None, uses the default profile path.

    Returns:
        A ready-to-use PathSanitizer.

    Raises:
        ProfileNotFoundError: If the file doesn't exist.
        ProfileParseError: If the TOML syntax is invalid.
        ProfileError: If the content doesn't match the schema or a quick
            replacement is not a valid regex fragment.
    """
    profile_path = path or get_sanitizer_profile_path()

    if not profile_path.exists():
        raise ProfileNotFoundError(f"Sanitizer profile not found: {profile_path}")

    try:
        with open(profile_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ProfileParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ProfileError(f"Failed to read sanitizer profile: {e}") from e

    try:
        return PathSanitizer.model_validate(data)
    except ValidationError as e:
        logger.warning("Invalid sanitizer profile %s: %s", profile_path, e)
        raise ProfileError(f"Invalid sanitizer profile content: {e}") from e
    except re.error as e:
        raise ProfileError(f"Invalid quick replacement in profile: {e}") from e


def save_sanitizer_profile(sanitizer: PathSanitizer, path: Path | None = None) -> Path:
    """Save a sanitizer configuration to a TOML profile.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        sanitizer: The sanitizer to save.
        path: Profile file. If None, uses the default profile path.

    Returns:
        Path where the profile was saved.

    Raises:
        ProfileError: If the file cannot be written.
    """
    profile_path = path or get_sanitizer_profile_path()
    profile_path.parent.mkdir(parents=True, exist_ok=True)

    data = sanitizer.model_dump(mode="json")

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=profile_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(profile_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ProfileError(f"Failed to write sanitizer profile: {e}") from e

    return profile_path
