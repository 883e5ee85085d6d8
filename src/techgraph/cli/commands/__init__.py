"""
CLI Commands Package.

Each command is implemented in its own module.
"""

from .initialize import init

__all__ = ["init"]
