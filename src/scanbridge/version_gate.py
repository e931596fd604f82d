"""Minimum analysis-server version gate."""

from __future__ import annotations

import re

from packaging.version import InvalidVersion, Version

from scanbridge.exceptions import UnsupportedServerVersionError

MIN_SUPPORTED_VERSION = "5.6"
UNSUPPORTED_BELOW_MIN_MESSAGE = "With an analysis server prior to 5.6, use scanbridge <= 3.3"

_NUMERIC_PREFIX_RE = re.compile(r"^\s*v?(\d+(?:\.\d+)*)")
# Qualifiers that name the release itself rather than a build leading up to it.
_RELEASE_QUALIFIERS = frozenset({"", "final", "ga", "release"})


def _parse_version(text: str) -> Version | None:
    try:
        return Version(text)
    except InvalidVersion:
        pass
    # Build qualifiers such as "-SNAPSHOT" or "-M1" are not PEP 440. They sort
    # below the bare release, so compare as a development build of the prefix.
    match = _NUMERIC_PREFIX_RE.match(text)
    if match is None:
        return None
    qualifier = text[match.end():].strip().strip("-._").lower()
    if qualifier in _RELEASE_QUALIFIERS:
        return Version(match.group(1))
    return Version(f"{match.group(1)}.dev0")


def is_version_below(server_version: str | None, min_version: str) -> bool:
    """True when *server_version* is older than *min_version*.

    An absent or unparseable server version counts as below.
    """
    if server_version is None:
        return True
    parsed = _parse_version(server_version)
    if parsed is None:
        return True
    minimum = _parse_version(min_version)
    if minimum is None:
        raise ValueError(f"invalid minimum version: {min_version!r}")
    return parsed < minimum


def check_server_version(
    server_version: str | None,
    *,
    min_version: str = MIN_SUPPORTED_VERSION,
    message: str = UNSUPPORTED_BELOW_MIN_MESSAGE,
) -> None:
    if is_version_below(server_version, min_version):
        raise UnsupportedServerVersionError(message)
