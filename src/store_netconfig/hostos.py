"""Host operating system detection."""

import platform
from enum import Enum


class HostPlatform(str, Enum):
    """Operating systems with distinct probe or configuration behavior."""

    LINUX = "linux"
    DARWIN = "darwin"
    WINDOWS = "windows"
    UNKNOWN = "unknown"


def detect_platform(system: str | None = None) -> HostPlatform:
    """Detect the host platform.

    Args:
        system: Value of platform.system() to classify (detected if None)

    Returns:
        Matching HostPlatform, or HostPlatform.UNKNOWN for anything else
    """
    name = (system if system is not None else platform.system()).lower()
    try:
        return HostPlatform(name)
    except ValueError:
        return HostPlatform.UNKNOWN
