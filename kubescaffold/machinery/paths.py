"""Path resolution for builder path patterns.

A path pattern is a ``/``-separated relative path containing ``%[...]``
placeholders, e.g. ``api/%[group]/%[version]/%[kind]_types.go``.  Resolution
is a pure function of the pattern, the resource and the layout flags.
"""

from __future__ import annotations

import re

from .errors import PathResolutionError
from .resource import ResourceDescriptor

GROUP_PLACEHOLDER = "%[group]"
CONTROLLER_DIR_PLACEHOLDER = "%[controller-dir]"

LEGACY_CONTROLLER_DIR = "controllers"
CONTROLLER_DIR = "internal/controller"

_UNRESOLVED_RE = re.compile(r"%\[[^\]]*\]")


def controller_dir(legacy_layout: bool) -> str:
    """Directory holding reconcilers for the given layout."""
    return LEGACY_CONTROLLER_DIR if legacy_layout else CONTROLLER_DIR


def resolve_path(
    pattern: str,
    resource: ResourceDescriptor | None,
    *,
    multigroup: bool = False,
    legacy_layout: bool = False,
) -> str:
    """Turn *pattern* into one concrete relative path.

    When *multigroup* is false or the resource has no group, a segment that
    is exactly ``%[group]`` is dropped from the path rather than replaced by
    an empty directory name.

    Args:
        pattern: Path pattern with ``%[...]`` placeholders.
        resource: Resource supplying the placeholder values.  May be
            ``None`` for patterns without resource placeholders.
        multigroup: Whether the project keeps resources in per-group
            packages.
        legacy_layout: Whether the project uses the flat legacy layout.

    Returns:
        The resolved path, using ``/`` separators.

    Raises:
        PathResolutionError: If a placeholder is left unresolved, or the
            result is empty or absolute.
    """
    group_enabled = multigroup and resource is not None and bool(resource.group)

    segments: list[str] = []
    for segment in pattern.replace("\\", "/").split("/"):
        if segment == GROUP_PLACEHOLDER and not group_enabled:
            continue
        if segment in ("", "."):
            continue
        segments.append(segment)
    path = "/".join(segments)

    path = path.replace(CONTROLLER_DIR_PLACEHOLDER, controller_dir(legacy_layout))
    if not group_enabled:
        path = path.replace(GROUP_PLACEHOLDER, "")
    if resource is not None:
        path = resource.replacer(path)

    leftover = _UNRESOLVED_RE.search(path)
    if leftover:
        raise PathResolutionError(
            f"unresolved placeholder {leftover.group(0)} in pattern {pattern!r}",
            path=pattern,
        )
    if not path:
        raise PathResolutionError(f"pattern {pattern!r} resolves to an empty path", path=pattern)
    if pattern.startswith("/"):
        raise PathResolutionError(f"pattern {pattern!r} must be relative", path=pattern)
    return path
