"""Preconfigured sanitizers.

Two templates cover most needs:
- Universal: legal on every common filesystem. Keeps lettered and separator
  roots, strips the characters Windows forbids, its reserved device names,
  ASCII control characters and the Yen sign.
- UNIX: keeps only separator roots and strips control characters and
  slashes left inside segments.

Every accessor returns a fresh clone, so callers may customise the result
without affecting other callers.
"""

from safepath.sanitizer.engine import PathSanitizer
from safepath.sanitizer.models import ReplacementMode, RootMode, SanitizeResult
from safepath.validation import SEPARATOR_UNIVERSAL, SEPARATOR_WINDOWS, OSType

UNIVERSAL_BANNED_SYMBOLS: tuple[str, ...] = (
    r"\\",
    r"\/",
    r"\"",
    r"\|",
    r"\*",
    "<",
    ">",
    r"\?",
    ":",
)
UNIVERSAL_RESERVED_NAMES: tuple[str, ...] = (
    "PRN",
    "AUX",
    r"CLOCK\$",
    "NUL",
    "CON",
    r"COM\d",
    r"LPT\d",
)
UNIVERSAL_CONTROL_CHARACTERS: tuple[str, ...] = (r"[\x00-\x1F]", r"\xA5")
UNIX_BANNED: tuple[str, ...] = (r"[\x00-\x1F]", r"\/", r"\\")


def _build_universal() -> PathSanitizer:
    sanitizer = PathSanitizer(
        fixed_separator=SEPARATOR_UNIVERSAL,
        possible_separators=[SEPARATOR_WINDOWS],
        root_mode=RootMode.ALLOW_ALL_ROOTS,
        replacement_mode=ReplacementMode.QUICK_ONLY,
        remove_redundant_separators=True,
        force_root_separator=False,
        fully_qualify=False,
        auto_rebuild_quick_replacements=False,
    )
    sanitizer.add_quick_replacements(*UNIVERSAL_BANNED_SYMBOLS)
    sanitizer.add_quick_replacements(*UNIVERSAL_RESERVED_NAMES)
    sanitizer.add_quick_replacements(*UNIVERSAL_CONTROL_CHARACTERS)
    sanitizer.rebuild_quick_replacement_pattern()
    return sanitizer


def _build_unix() -> PathSanitizer:
    sanitizer = PathSanitizer(
        fixed_separator=SEPARATOR_UNIVERSAL,
        possible_separators=[SEPARATOR_WINDOWS],
        root_mode=RootMode.SEPARATOR_ONLY,
        replacement_mode=ReplacementMode.QUICK_ONLY,
        remove_redundant_separators=True,
        force_root_separator=False,
        fully_qualify=False,
        auto_rebuild_quick_replacements=False,
        qualify_os=OSType.LINUX,
    )
    sanitizer.add_quick_replacements(*UNIX_BANNED)
    sanitizer.rebuild_quick_replacement_pattern()
    return sanitizer


# Templates are never handed out directly.
_UNIVERSAL_TEMPLATE = _build_universal()
_UNIX_TEMPLATE = _build_unix()


def universal_sanitizer() -> PathSanitizer:
    """Return a copy of the universal sanitizer template."""
    return _UNIVERSAL_TEMPLATE.clone()


def unix_sanitizer() -> PathSanitizer:
    """Return a copy of the UNIX sanitizer template."""
    return _UNIX_TEMPLATE.clone()


def sanitizer_for(os_type: OSType) -> PathSanitizer:
    """Return a copy of the template matching ``os_type``.

    Linux and OSX use the UNIX template; Windows and unknown systems use the
    universal one.
    """
    if os_type.is_unix:
        return unix_sanitizer()
    return universal_sanitizer()


def sanitize_file_path(
    path: str | None,
    os_type: OSType | None = None,
    sanitizer: PathSanitizer | None = None,
) -> SanitizeResult:
    """Sanitize ``path`` with an explicit sanitizer or the preset for ``os_type``.

    Args:
        path: Raw path.
        os_type: Target OS. None selects the universal preset.
        sanitizer: Explicit sanitizer; takes precedence over ``os_type``.

    Returns:
        SanitizeResult from the chosen sanitizer.
    """
    if sanitizer is not None:
        return sanitizer.sanitize(path)

    # Templates are only read here, so no clone is needed.
    template = _UNIX_TEMPLATE if os_type is not None and os_type.is_unix else _UNIVERSAL_TEMPLATE
    return template.sanitize(path)
