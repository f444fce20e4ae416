"""Exception hierarchy for the scaffolding machinery.

Every failure raised while scaffolding is a :class:`ScaffoldError`.  Errors
carry the offending file path and, once the orchestrator has annotated them,
the name of the builder that was being applied.  All of them are terminal:
nothing in the machinery retries.
"""

from __future__ import annotations


class ScaffoldError(Exception):
    """Base class for every error raised by the scaffolding machinery."""

    def __init__(self, message: str, path: str = "", builder: str = "") -> None:
        self.message = message
        self.path = path
        self.builder = builder
        super().__init__(message)

    def __str__(self) -> str:
        parts: list[str] = []
        if self.builder:
            parts.append(self.builder)
        if self.path:
            parts.append(self.path)
        if parts:
            return f"{' '.join(parts)}: {self.message}"
        return self.message


class PathResolutionError(ScaffoldError):
    """Raised when a path pattern cannot be turned into a concrete path."""


class RenderError(ScaffoldError):
    """Raised when a template refers to an unknown context field or is malformed."""

    def __init__(
        self, message: str, path: str = "", builder: str = "", reference: str = ""
    ) -> None:
        self.reference = reference
        super().__init__(message, path=path, builder=builder)


class FileConflictError(ScaffoldError):
    """Raised when an ``ERROR`` policy target already exists."""


class MarkerError(ScaffoldError):
    """Base class for anchor problems detected while injecting fragments."""

    def __init__(
        self, message: str, path: str = "", builder: str = "", marker: str = ""
    ) -> None:
        self.marker = marker
        super().__init__(message, path=path, builder=builder)


class MarkerNotFoundError(MarkerError):
    """Raised when an expected marker sentinel is missing from the target file."""


class DuplicateMarkerError(MarkerError):
    """Raised when a marker sentinel occurs more than once in the target file."""


class ScaffoldIOError(ScaffoldError):
    """Raised when the filesystem capability fails to read or write a file."""


class MissingFacetError(ScaffoldError):
    """Raised when a builder needs a facet the scaffold was not given."""

    def __init__(
        self, message: str, path: str = "", builder: str = "", facets: tuple[str, ...] = ()
    ) -> None:
        self.facets = facets
        super().__init__(message, path=path, builder=builder)
