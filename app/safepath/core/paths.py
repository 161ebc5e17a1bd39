"""XDG-compliant path management for safepath.

This module provides standardized paths following the XDG Base Directory
Specification for configuration and state storage.

XDG defaults:
- Config: ~/.config/safepath/
- State: ~/.local/state/safepath/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "safepath"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/safepath/ (or XDG_CONFIG_HOME/safepath/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_state_dir() -> Path:
    """Get the state directory path.

    Returns:
        Path to ~/.local/state/safepath/ (or XDG_STATE_HOME/safepath/).
    """
    return _get_xdg_dir("XDG_STATE_HOME", ".local/state")


def get_sanitizer_profile_path() -> Path:
    """Get the default sanitizer profile path.

    Returns:
        Path to ~/.config/safepath/sanitizer.toml.
    """
    return get_config_dir() / "sanitizer.toml"


def get_backup_dir() -> Path:
    """Get the directory for retained backup copies.

    Safe operations normally create their backups in the system temporary
    directory. When backups are kept for manual recovery, pointing them here
    keeps them out of the way of temp cleaners.

    Returns:
        Path to ~/.local/state/safepath/backups/.
    """
    return get_state_dir() / "backups"


def _ensure_dir(path: Path, name: str) -> Path:
    """Create directory if it doesn't exist.

    Args:
        path: Directory path to create.
        name: Human-readable name for error messages.

    Returns:
        The created/existing directory path.

    Raises:
        RuntimeError: If directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create {name} directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create {name} directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path


def ensure_config_dir() -> Path:
    """Create the configuration directory if it doesn't exist.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    return _ensure_dir(get_config_dir(), "config")


def ensure_backup_dir() -> Path:
    """Create the backup directory if it doesn't exist.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    return _ensure_dir(get_backup_dir(), "backup")
