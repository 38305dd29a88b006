"""
config_dump.utils

Lightweight utility helpers shared across config_dump.

    - temp: temporary directory / file utilities

All public symbols from these modules are re-exported for convenience.
"""

from . import temp

from .temp import *        # noqa: F401,F403

__all__ = list(temp.__all__)
