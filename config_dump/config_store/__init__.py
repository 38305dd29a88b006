"""
config_dump - Config store package.

Provides:

    - ConfigStore: protocol describing the read interface
    - LocalFSConfigStore: directory-per-collection implementation
    - InMemoryConfigStore: dict-backed implementation
"""

from .base import ConfigStore
from .local_fs import LocalFSConfigStore
from .memory import InMemoryConfigStore

__all__ = [
    "ConfigStore",
    "LocalFSConfigStore",
    "InMemoryConfigStore",
]
