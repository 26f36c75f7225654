"""
Base interface for external resources a benchmark case may depend on.
All resources are optional: a failed acquisition makes the dependent
cases skip instead of aborting the run.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from ..benchmark.base import ResourceUnavailableError

logger = logging.getLogger(__name__)


class BaseResource(ABC):
    """
    Abstract base class for external resources.

    Subclasses implement ``_acquire`` (return a handle or raise
    ResourceUnavailableError) and optionally ``_release``.

    Example:
        class MyResource(BaseResource):
            name = "myresource"

            def _acquire(self):
                return open_something()

            def _release(self, handle):
                handle.close()
    """

    # Resource identification
    name: str = "base"
    display_name: str = "Base Resource"

    def __init__(self):
        self._handle: Any = None
        self._acquired = False
        self.error: Optional[str] = None

    @abstractmethod
    def _acquire(self) -> Any:
        """
        Acquire the underlying resource.

        Returns:
            Handle passed to benchmark cases

        Raises:
            ResourceUnavailableError: If the resource cannot be acquired
        """
        pass

    def _release(self, handle: Any) -> None:
        """Release the handle returned by ``_acquire``."""
        pass

    def acquire(self) -> Any:
        """
        Acquire the resource once.

        The error message is kept in ``error`` so the report can show it.
        """
        if self._acquired:
            return self._handle

        try:
            self._handle = self._acquire()
        except ResourceUnavailableError as e:
            self.error = str(e)
            logger.warning(f"{self.display_name} unavailable: {e}")
            raise

        self._acquired = True
        self.error = None
        logger.debug(f"{self.display_name} acquired")
        return self._handle

    def release(self) -> None:
        """Release the resource. Safe to call more than once."""
        if not self._acquired:
            return

        handle = self._handle
        self._handle = None
        self._acquired = False
        self._release(handle)
        logger.debug(f"{self.display_name} released")

    @property
    def available(self) -> bool:
        return self._acquired

    @property
    def handle(self) -> Any:
        """
        The acquired handle.

        Raises:
            ResourceUnavailableError: If the resource was not acquired
        """
        if not self._acquired:
            raise ResourceUnavailableError(self.error or f"{self.display_name} is not available")
        return self._handle

    def describe(self) -> str:
        """Short status for the report header."""
        return "enabled" if self.available else "disabled"

    def __enter__(self) -> Any:
        return self.acquire()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(name={self.name}, available={self.available})>"
