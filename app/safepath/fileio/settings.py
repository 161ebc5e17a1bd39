"""Settings for safe file operations.

``SafeIOConfig`` controls what happens to the temporary backup copy a safe
operation makes. Every safe operation accepts an explicit ``config=``; when
omitted, the process-wide default applies. The default deletes backups at
the end of every call.
"""

from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field


class SafeIOConfig(BaseModel):
    """Per-call settings for safe file operations.

    Attributes:
        delete_temp_copies: Delete the backup copy when the call ends. When
            False the backup is left on disk for manual recovery.
        backup_dir: Directory for backup copies. None uses the system
            temporary directory.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    delete_temp_copies: Annotated[
        bool,
        Field(description="Delete backup copies when a safe operation ends"),
    ] = True
    backup_dir: Annotated[
        Path | None,
        Field(description="Directory for backup copies (None = system temp)"),
    ] = None


_default_config = SafeIOConfig()


def get_default_config() -> SafeIOConfig:
    """Get the process-wide default settings."""
    return _default_config


def set_default_config(config: SafeIOConfig) -> SafeIOConfig:
    """Replace the process-wide default settings.

    Prefer passing ``config=`` to individual calls; changing the default
    affects every concurrent caller that relies on it.

    Returns:
        The previous default, so callers can restore it.
    """
    global _default_config
    previous = _default_config
    _default_config = config
    return previous


def set_delete_temp_copies(enabled: bool) -> SafeIOConfig:
    """Toggle backup deletion in the process-wide default settings.

    Returns:
        The previous default.
    """
    return set_default_config(_default_config.model_copy(update={"delete_temp_copies": enabled}))


def resolve_config(config: SafeIOConfig | None) -> SafeIOConfig:
    """Return ``config`` or the process-wide default."""
    return config if config is not None else _default_config
