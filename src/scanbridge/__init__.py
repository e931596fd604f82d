"""scanbridge package root."""

from scanbridge.exceptions import (
    BootstrapError,
    ConfigurationError,
    ScanBridgeError,
    UnsupportedServerVersionError,
)

__all__ = [
    "__version__",
    "BootstrapError",
    "ConfigurationError",
    "ScanBridgeError",
    "UnsupportedServerVersionError",
]

__version__ = "0.1.0"
