"""Exception hierarchy for spectator-mcp.

All exceptions inherit from SpectatorMcpError (single catch point).
Messages are shown to the user as-is -- clear, actionable, no stack traces.
"""

from __future__ import annotations


class SpectatorMcpError(Exception):
    """Base exception for all spectator-mcp errors."""


class PathResolutionError(SpectatorMcpError):
    """No config path can be determined for a platform/scope on this OS."""


class UnknownPlatformError(PathResolutionError):
    """Platform id is not one of the supported applications."""


class ConfigReadError(SpectatorMcpError):
    """Error reading a client config file."""


class MalformedConfigError(ConfigReadError):
    """Config file exists but does not hold a JSON object."""


class ConfigWriteError(SpectatorMcpError):
    """Error backing up or writing a client config file."""


class ApiKeyFormatError(SpectatorMcpError):
    """API key is empty, too short, or otherwise unusable."""


class NoPlatformsDetectedError(SpectatorMcpError):
    """None of the supported applications is installed on this machine."""
