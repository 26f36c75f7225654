"""
Utility functions for benchmark module.
Separated to avoid circular imports.
"""

import gc
import platform
import socket
import sys
from typing import Dict, Optional

try:
    import resource
except ImportError:  # Windows
    resource = None


def get_memory_limit() -> str:
    """
    Soft address-space limit of this process.

    Returns:
        "unlimited", "<n>M", or "N/A" when the platform has no rlimits
    """
    if resource is None or not hasattr(resource, "RLIMIT_AS"):
        return "N/A"

    soft, _ = resource.getrlimit(resource.RLIMIT_AS)
    if soft == resource.RLIM_INFINITY:
        return "unlimited"
    return f"{soft // 1024 // 1024}M"


def get_jit_status() -> str:
    """Status of the experimental CPython JIT (3.13+)."""
    jit = getattr(sys, "_jit", None)
    if jit is not None and jit.is_enabled():
        return "enabled"
    return "disabled/unavailable"


def get_environment_info(server: Optional[str] = None) -> Dict[str, str]:
    """
    Get interpreter and host information for the report header.

    Args:
        server: Server description; defaults to the host name

    Returns:
        Ordered label -> value mapping:
        - Python: version and implementation
        - Platform: OS and machine architecture
        - Server: host name (or name@address when served over HTTP)
        - Max memory usage: address-space limit
        - Optimization level: -O / -OO level
        - JIT, GC, Debugger/tracer, Debug build: enabled/disabled flags
    """
    return {
        "Python": f"{platform.python_version()} {platform.python_implementation()}",
        "Platform": f"{platform.system()} {platform.machine()}",
        "Server": server or socket.gethostname(),
        "Max memory usage": get_memory_limit(),
        "Optimization level": str(sys.flags.optimize),
        "JIT": get_jit_status(),
        "GC": "enabled" if gc.isenabled() else "disabled",
        "Debugger/tracer": "enabled" if sys.gettrace() is not None else "disabled",
        "Debug build": "enabled" if hasattr(sys, "gettotalrefcount") else "disabled",
    }
