"""Filesystem grammar validation.

OS-aware checks for filenames, directories and file paths. These answer
"is this string already legal" and are used by the sanitizer's optional
full-qualification step; they never modify their input.

Grammars:
- Universal (non-standard OS): the strictest combination, safe everywhere.
- Windows: lettered roots, reserved device names, no ``?*:"|<>`` or control
  characters, no trailing space or period, maximum length 260.
- Linux / OSX: only NUL (and the separator inside names) is forbidden,
  maximum length 255.
"""

import re
import sys
from enum import Enum

SEPARATOR_UNIVERSAL = "/"
SEPARATOR_WINDOWS = "\\"

MAX_PATH_WINDOWS = 260
MAX_PATH_UNIVERSAL = 255

LETTER_ROOT_LENGTH = 2
LETTERED_ROOT_PATTERN = re.compile(r"^[a-zA-Z]:")

_RESERVED_NAMES = r"(?:PRN|AUX|CLOCK\$|NUL|CON|COM\d|LPT\d)"

ROOT_CHECK_UNIX = re.compile(r"^/")
DIRECTORY_CHECK_UNIX = re.compile(r"^(?!$)[^\0\\]+\Z")
DIRECTORY_CHECK_WINDOWS = re.compile(
    rf"^(?!{_RESERVED_NAMES}?$)[^\x00-\x1F\xA5?*:\"|<>]+(?<![\s.])\Z"
)
DIRECTORY_CHECK_UNIVERSAL = re.compile(
    rf"^(?!{_RESERVED_NAMES}?$)[^\x00-\x1F\xA5?*:\"|<>\\]+(?<![\s.])\Z"
)
FILENAME_CHECK_UNIX = re.compile(r"^(?!\.?$)[^\0/]+(?<![\s.])\Z")
FILENAME_CHECK_UNIVERSAL = re.compile(
    rf"^(?!{_RESERVED_NAMES}(?:\..+)?$)[^\x00-\x1F\xA5\\?*:\"|/<>]+(?<![\s.])\Z"
)


class OSType(str, Enum):
    """General family of the operating system a path targets.

    Attributes:
        NON_STANDARD: Unknown system; the universal grammar applies.
        WINDOWS: Some form of Windows.
        LINUX: Some form of Linux.
        OSX: Some form of macOS.
    """

    NON_STANDARD = "non_standard"
    WINDOWS = "windows"
    LINUX = "linux"
    OSX = "osx"

    @property
    def is_unix(self) -> bool:
        """Check if the OS uses the UNIX grammar."""
        return self in (OSType.LINUX, OSType.OSX)


def current_os_type() -> OSType:
    """Detect the OS family of the running interpreter."""
    if sys.platform.startswith("win"):
        return OSType.WINDOWS
    if sys.platform.startswith("linux"):
        return OSType.LINUX
    if sys.platform == "darwin":
        return OSType.OSX
    return OSType.NON_STANDARD


def _within_length(value: str, max_length: int) -> bool:
    return 0 <= len(value) <= max_length


def _filename_matches(filename: str, check: re.Pattern[str], max_length: int) -> bool:
    if not _within_length(filename, max_length):
        return False
    return check.match(filename) is not None


def is_valid_filename(filename: str, os_type: OSType = OSType.NON_STANDARD) -> bool:
    """Check if ``filename`` is a legal name for a single file.

    Args:
        filename: Bare filename, no directory part.
        os_type: Target OS grammar.

    Returns:
        True if the name is legal on the target OS.
    """
    if filename is None:
        return False

    match os_type:
        case OSType.WINDOWS:
            return _filename_matches(filename, FILENAME_CHECK_UNIVERSAL, MAX_PATH_WINDOWS)
        case OSType.LINUX | OSType.OSX:
            return _filename_matches(filename, FILENAME_CHECK_UNIX, MAX_PATH_UNIVERSAL)
        case _:
            return _filename_matches(filename, FILENAME_CHECK_UNIVERSAL, MAX_PATH_UNIVERSAL)


def is_valid_directory(
    directory: str, os_type: OSType = OSType.NON_STANDARD, root_required: bool = False
) -> bool:
    """Check if ``directory`` is a legal directory path.

    Args:
        directory: Directory path, optionally rooted.
        os_type: Target OS grammar.
        root_required: Require the directory to be anchored at a root.

    Returns:
        True if the directory path is legal on the target OS.
    """
    if directory is None:
        return False

    match os_type:
        case OSType.WINDOWS:
            return _is_valid_directory_windows(directory, root_required)
        case OSType.LINUX | OSType.OSX:
            return _is_valid_directory_unix(directory, root_required)
        case _:
            return _is_valid_directory_universal(directory, root_required)


def is_valid_file_path(
    filepath: str, os_type: OSType = OSType.NON_STANDARD, root_required: bool = False
) -> bool:
    """Check if ``filepath`` is a legal path to a file.

    The path is split at its last separator; the directory part and the
    filename part must both be legal. A path without any separator is
    validated as a bare filename.

    Args:
        filepath: Path to validate.
        os_type: Target OS grammar.
        root_required: Require the directory part to be anchored at a root.

    Returns:
        True if the file path is legal on the target OS.
    """
    if filepath is None:
        return False

    max_length = MAX_PATH_WINDOWS if os_type == OSType.WINDOWS else MAX_PATH_UNIVERSAL
    if not _within_length(filepath, max_length):
        return False

    if os_type == OSType.WINDOWS:
        name_index = max(filepath.rfind(SEPARATOR_WINDOWS), filepath.rfind(SEPARATOR_UNIVERSAL)) + 1
    else:
        name_index = filepath.rfind(SEPARATOR_UNIVERSAL) + 1

    if name_index <= 0:
        return is_valid_filename(filepath, os_type)

    directory = filepath[:name_index]
    filename = filepath[name_index:]

    if os_type.is_unix:
        # Names inside a UNIX path still follow the universal name grammar.
        return _is_valid_directory_unix(directory, root_required) and _filename_matches(
            filename, FILENAME_CHECK_UNIVERSAL, MAX_PATH_UNIVERSAL
        )

    return is_valid_directory(directory, os_type, root_required) and is_valid_filename(
        filename, os_type
    )


def _is_valid_directory_universal(directory: str, root_required: bool) -> bool:
    if not _within_length(directory, MAX_PATH_UNIVERSAL):
        return False

    possible_root = directory[:LETTER_ROOT_LENGTH]
    if LETTERED_ROOT_PATTERN.match(possible_root):
        directory = directory[LETTER_ROOT_LENGTH:]
        return DIRECTORY_CHECK_UNIVERSAL.match(directory) is not None

    if DIRECTORY_CHECK_UNIVERSAL.match(directory) is None:
        return False

    return not root_required or directory.startswith((SEPARATOR_UNIVERSAL, SEPARATOR_WINDOWS))


def _is_valid_directory_windows(directory: str, root_required: bool) -> bool:
    if not _within_length(directory, MAX_PATH_WINDOWS):
        return False

    possible_root = directory[:LETTER_ROOT_LENGTH]
    if LETTERED_ROOT_PATTERN.match(possible_root):
        directory = directory[LETTER_ROOT_LENGTH:]
    elif root_required:
        return False

    return DIRECTORY_CHECK_WINDOWS.match(directory) is not None


def _is_valid_directory_unix(directory: str, root_required: bool) -> bool:
    if not _within_length(directory, MAX_PATH_UNIVERSAL):
        return False

    if DIRECTORY_CHECK_UNIX.match(directory) is None:
        return False

    return not root_required or ROOT_CHECK_UNIX.match(directory) is not None
