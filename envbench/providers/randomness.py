"""
Cryptographically secure random sources.
"""

import os
from typing import Callable

from ..benchmark.base import ResourceUnavailableError
from .base import BaseResource


class SystemRandomProvider(BaseResource):
    """Operating system CSPRNG (``os.urandom``), used by ``secrets``."""

    name = "system_random"
    display_name = "System CSPRNG"

    def _acquire(self) -> Callable[[int], bytes]:
        try:
            os.urandom(1)
        except NotImplementedError:
            raise ResourceUnavailableError("No system randomness source available")
        return os.urandom


class OpenSSLRandomProvider(BaseResource):
    """OpenSSL's ``RAND_bytes``; missing when Python is built without ssl."""

    name = "openssl_random"
    display_name = "OpenSSL CSPRNG"

    def _acquire(self) -> Callable[[int], bytes]:
        try:
            import ssl
        except ImportError:
            raise ResourceUnavailableError("The ssl module is not available")

        rand_bytes = getattr(ssl, "RAND_bytes", None)
        if rand_bytes is None:
            raise ResourceUnavailableError("ssl.RAND_bytes is not available")
        return rand_bytes
