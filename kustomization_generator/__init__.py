"""
.. include:: ../README.md
"""

__all__ = [
    "registry",
    "helm",
    "collector",
    "builder",
    "generator",
    "manifest",
    "config",
    "filesystem",
    "exceptions",
    # Note this is exposed for CLI documentation, not to be used as a library
    "tool",
]
