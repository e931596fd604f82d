"""Error taxonomy for scanbridge."""

from __future__ import annotations


class ScanBridgeError(RuntimeError):
    """Base class for every error scanbridge reports to the user."""


class ConfigurationError(ScanBridgeError):
    """The invocation is malformed (no root project, bad snapshot, bad -D)."""


class UnsupportedServerVersionError(ScanBridgeError):
    """The analysis server is older than the minimum supported version.

    The message is the fixed user-facing remediation text; callers must abort
    instead of running a degraded analysis.
    """


class BootstrapError(ScanBridgeError):
    """Single wrapped failure surfaced by the bootstrap.

    The original exception is chained as ``__cause__`` and its message is
    reused verbatim.
    """

    @classmethod
    def wrap(cls, exc: BaseException) -> "BootstrapError":
        message = str(exc) or type(exc).__name__
        return cls(message)
