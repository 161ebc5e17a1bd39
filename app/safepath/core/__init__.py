"""Core infrastructure for safepath: XDG paths and CLI theming."""
