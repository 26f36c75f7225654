"""
External resource providers.
Each provider implements the BaseResource interface.
"""

import logging
from contextlib import ExitStack
from typing import Dict, Optional

from ..benchmark.base import ResourceUnavailableError
from ..config import RunConfiguration
from .base import BaseResource
from .filesystem import ScratchDirectory
from .mysql import MySQLDatabase, MySQLProvider
from .randomness import OpenSSLRandomProvider, SystemRandomProvider

logger = logging.getLogger(__name__)


class ResourceSet:
    """
    The external resources of one run.

    Every resource is acquired once on enter and released once on exit,
    also when the run raises. Acquisition failures are tolerated: the
    resource just stays unavailable.

    Example:
        with ResourceSet.from_config(config) as resources:
            if resources.database.available:
                ...
    """

    def __init__(
        self,
        database: Optional[BaseResource] = None,
        scratch: Optional[BaseResource] = None,
        system_random: Optional[BaseResource] = None,
        openssl_random: Optional[BaseResource] = None,
    ):
        self.database = database or MySQLProvider(RunConfiguration(mysql_host=None))
        self.scratch = scratch or ScratchDirectory()
        self.system_random = system_random or SystemRandomProvider()
        self.openssl_random = openssl_random or OpenSSLRandomProvider()
        self._stack: Optional[ExitStack] = None

    @classmethod
    def from_config(cls, config: RunConfiguration) -> "ResourceSet":
        return cls(database=MySQLProvider(config))

    @classmethod
    def unavailable(cls) -> "ResourceSet":
        """A set whose resources are never acquired."""
        return cls()

    def all(self) -> Dict[str, BaseResource]:
        return {
            "database": self.database,
            "scratch": self.scratch,
            "system_random": self.system_random,
            "openssl_random": self.openssl_random,
        }

    def acquire(self) -> "ResourceSet":
        """
        Acquire every resource, skipping the unavailable ones.

        Any other error releases what was already acquired and propagates.
        """
        with ExitStack() as stack:
            for resource in self.all().values():
                try:
                    resource.acquire()
                except ResourceUnavailableError:
                    continue
                stack.callback(resource.release)
            self._stack = stack.pop_all()
        return self

    def release(self) -> None:
        if self._stack is not None:
            stack, self._stack = self._stack, None
            stack.close()

    def __enter__(self) -> "ResourceSet":
        return self.acquire()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()


__all__ = [
    "BaseResource",
    "MySQLDatabase",
    "MySQLProvider",
    "OpenSSLRandomProvider",
    "ResourceSet",
    "ScratchDirectory",
    "SystemRandomProvider",
]
