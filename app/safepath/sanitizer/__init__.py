"""Path sanitization module.

This module provides the PathSanitizer engine, its policy enums, the
preconfigured universal and UNIX sanitizers, and TOML profile I/O.
"""

from safepath.sanitizer.engine import PathSanitizer
from safepath.sanitizer.models import ReplacementMode, RootInfo, RootMode, SanitizeResult
from safepath.sanitizer.presets import (
    sanitize_file_path,
    sanitizer_for,
    universal_sanitizer,
    unix_sanitizer,
)
from safepath.sanitizer.profile import (
    ProfileError,
    ProfileNotFoundError,
    ProfileParseError,
    load_sanitizer_profile,
    save_sanitizer_profile,
)
from safepath.sanitizer.replacements import QuickReplacementMatcher

__all__ = [
    "PathSanitizer",
    "ProfileError",
    "ProfileNotFoundError",
    "ProfileParseError",
    "QuickReplacementMatcher",
    "ReplacementMode",
    "RootInfo",
    "RootMode",
    "SanitizeResult",
    "load_sanitizer_profile",
    "sanitize_file_path",
    "sanitizer_for",
    "save_sanitizer_profile",
    "universal_sanitizer",
    "unix_sanitizer",
]
