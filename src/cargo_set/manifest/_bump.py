"""Semantic version bumps."""

import re
from enum import StrEnum

from cargo_set.exceptions import VersionBumpError

# MAJOR.MINOR.PATCH with optional pre-release and build metadata
_SEMVER_PATTERN = re.compile(
    r"^(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)"
    r"(?:-(?P<pre>[0-9A-Za-z.-]+))?(?:\+(?P<build>[0-9A-Za-z.-]+))?$"
)


class BumpLevel(StrEnum):
    """Which component of a version to increment."""

    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"


def bump_version(current: str, level: BumpLevel) -> str:
    """Increment one component of a semantic version.

    Lower components reset to zero. Pre-release and build metadata are
    dropped, so ``1.2.3-rc.1`` bumped by patch becomes ``1.2.4``.

    Args:
        current: The current version, e.g. ``0.2.0``.
        level: The component to increment.

    Returns:
        The bumped version.

    Raises:
        VersionBumpError: If ``current`` is not a semantic version.

    Examples:
        >>> bump_version("0.2.9", BumpLevel.PATCH)
        '0.2.10'
        >>> bump_version("0.2.9", BumpLevel.MINOR)
        '0.3.0'
        >>> bump_version("0.2.9", BumpLevel.MAJOR)
        '1.0.0'
    """
    parsed = _SEMVER_PATTERN.match(current.strip())
    if parsed is None:
        msg = f"Cannot bump '{current}': not a semantic version (MAJOR.MINOR.PATCH)"
        raise VersionBumpError(msg, version=current)

    major = int(parsed["major"])
    minor = int(parsed["minor"])
    patch = int(parsed["patch"])

    match level:
        case BumpLevel.MAJOR:
            return f"{major + 1}.0.0"
        case BumpLevel.MINOR:
            return f"{major}.{minor + 1}.0"
        case BumpLevel.PATCH:
            return f"{major}.{minor}.{patch + 1}"
