"""Bundled data files for safepath."""
