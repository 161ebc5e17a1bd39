"""safepath - filesystem path sanitization and crash-resilient file mutation.

Rewrites arbitrary path strings into ones that are legal for a target
filesystem grammar, and wraps destructive file operations (append, move,
copy) with a temporary backup so a failure can be rolled back.
"""

__version__ = "0.1.0"
