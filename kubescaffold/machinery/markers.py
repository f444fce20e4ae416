"""Marker sentinels and code-fragment injection.

A *marker* is a named anchor inside a generated file.  It is written once,
when the file is first rendered, as a sentinel comment line::

    // +kubebuilder:scaffold:imports

The comment token is chosen from the owning file's extension (``//`` for Go
sources, ``#`` for everything else) and the name identifies the anchor within
that file.  The sentinel text is an on-disk contract: later runs find the
anchor by comparing whitespace-stripped lines against it exactly.

*Fragments* are ordered blocks of text that target a marker.  Injection
inserts them immediately above the marker line, keeps the marker itself so
future runs can insert again, and leaves every other line of the file as it
was.  Injection never guesses: a missing or duplicated sentinel is an error.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Any

from .errors import DuplicateMarkerError, MarkerNotFoundError
from .renderer import TemplateRenderer

MARKER_PREFIX = "+kubebuilder:scaffold:"

_COMMENT_TOKENS: dict[str, str] = {
    ".go": "//",
}
_DEFAULT_COMMENT_TOKEN = "#"

# Any sentinel line, whatever its file type or name.
_SENTINEL_RE = re.compile(r"^(//|#)\s*" + re.escape(MARKER_PREFIX) + r"\S+$")


def comment_token(path: str) -> str:
    """Return the line-comment token used for markers in *path*."""
    suffix = PurePosixPath(path).suffix.lower()
    return _COMMENT_TOKENS.get(suffix, _DEFAULT_COMMENT_TOKEN)


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Marker:
    """A named anchor owned by one file."""

    path: str
    name: str

    @property
    def comment(self) -> str:
        return comment_token(self.path)

    @property
    def sentinel(self) -> str:
        """The exact line text (without indentation) that marks the anchor."""
        return f"{self.comment} {MARKER_PREFIX}{self.name}"

    def matches(self, line: str) -> bool:
        return line.strip() == self.sentinel

    def __str__(self) -> str:
        return self.sentinel


class MarkerRegistry:
    """Records the markers written into each file during a scaffold run.

    Rendering a template registers every marker its body emits; a name may
    be emitted only once per file.
    """

    def __init__(self) -> None:
        self._markers: dict[str, dict[str, Marker]] = {}

    def register(self, path: str, name: str) -> Marker:
        """Register *name* for *path* and return the new marker.

        Raises:
            DuplicateMarkerError: If *path* already owns a marker called
                *name*.
        """
        owned = self._markers.setdefault(path, {})
        if name in owned:
            raise DuplicateMarkerError(
                f"marker {name!r} emitted more than once", path=path, marker=name
            )
        marker = Marker(path, name)
        owned[name] = marker
        return marker

    def reset(self, path: str) -> None:
        """Forget the markers of *path* before it is rendered again."""
        self._markers.pop(path, None)

    def markers_for(self, path: str) -> list[Marker]:
        return list(self._markers.get(path, {}).values())

    def emitter(self, path: str):
        """Return a ``marker(name)`` function for use inside a template body."""

        def _emit(name: str) -> str:
            return self.register(path, name).sentinel

        return _emit

    def __contains__(self, marker: object) -> bool:
        if not isinstance(marker, Marker):
            return False
        return marker.name in self._markers.get(marker.path, {})


# ---------------------------------------------------------------------------
# Fragments
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CodeFragment:
    """A rendered block of lines destined for one marker."""

    marker: str
    lines: tuple[str, ...]

    @classmethod
    def from_text(cls, marker: str, text: str) -> "CodeFragment":
        """Split *text* into lines, dropping the final newline."""
        if text.endswith("\n"):
            text = text[:-1]
        return cls(marker, tuple(text.split("\n")))

    @property
    def stripped(self) -> tuple[str, ...]:
        """Every line, whitespace-stripped; blank lines become ``""``."""
        return tuple(line.strip() for line in self.lines)

    @property
    def trimmed(self) -> tuple[str, ...]:
        """Whitespace-stripped, non-blank lines used for duplicate detection."""
        return tuple(line for line in self.stripped if line)


@dataclass(frozen=True)
class FragmentTemplate:
    """Fragment source text, the marker it targets, and whether to emit it."""

    marker: str
    body: str
    enabled: bool = True

    def render(
        self, renderer: TemplateRenderer, context: Mapping[str, Any], *, path: str = ""
    ) -> CodeFragment:
        return CodeFragment.from_text(self.marker, renderer.render(self.body, dict(context), path=path))


def render_fragments(
    templates: Iterable[FragmentTemplate],
    renderer: TemplateRenderer,
    context: Mapping[str, Any],
    *,
    path: str = "",
) -> dict[str, list[CodeFragment]]:
    """Render the enabled fragment templates, grouped by marker name.

    Declaration order is preserved within each marker.  Disabled templates
    are not rendered at all.
    """
    grouped: dict[str, list[CodeFragment]] = {}
    for template in templates:
        if not template.enabled:
            continue
        grouped.setdefault(template.marker, []).append(
            template.render(renderer, context, path=path)
        )
    return grouped


# ---------------------------------------------------------------------------
# Injection
# ---------------------------------------------------------------------------


@dataclass
class InjectionReport:
    """Counts of what an injection did, per marker name."""

    inserted: dict[str, int] = field(default_factory=dict)
    duplicates: dict[str, int] = field(default_factory=dict)

    @property
    def changed(self) -> bool:
        return any(self.inserted.values())


def locate(lines: Sequence[str], marker: Marker, *, path: str = "") -> int:
    """Return the index of the single line holding *marker*'s sentinel.

    Raises:
        MarkerNotFoundError: If no line matches.
        DuplicateMarkerError: If more than one line matches.
    """
    hits = [index for index, line in enumerate(lines) if marker.matches(line)]
    if not hits:
        raise MarkerNotFoundError(
            f"marker {marker.sentinel!r} not found", path=path or marker.path, marker=marker.name
        )
    if len(hits) > 1:
        raise DuplicateMarkerError(
            f"marker {marker.sentinel!r} found {len(hits)} times (lines "
            f"{', '.join(str(hit + 1) for hit in hits)})",
            path=path or marker.path,
            marker=marker.name,
        )
    return hits[0]


def inject(
    content: str,
    markers: Sequence[Marker],
    fragments: Mapping[str, Sequence[CodeFragment]],
    *,
    path: str = "",
    deduplicate: bool = True,
    report: InjectionReport | None = None,
) -> str:
    """Insert *fragments* above their markers in *content*.

    Every marker in *markers* must be present exactly once, whether or not
    it has fragments this run.  Each fragment line is prefixed with the
    marker line's indentation.  Fragments that render to blank text are
    dropped.  With *deduplicate* enabled, a fragment is skipped when its
    stripped lines already appear contiguously in the window above the
    marker, or when an identical fragment was already accepted for the same
    marker in this call.  The window is made of any copies of this call's
    fragments stacked directly above the marker plus the block above them
    (bounded by a blank line, another sentinel or the start of the file).

    Args:
        content: Current text of the target file.
        markers: Markers the target file must contain.
        fragments: Rendered fragments keyed by marker name.
        path: Target path, used to label errors.
        deduplicate: Whether to skip fragments that are already present.
        report: Optional report filled with per-marker counts.

    Returns:
        The full new text of the file.

    Raises:
        MarkerNotFoundError: If a declared marker is missing, or a fragment
            targets a marker that was not declared.
        DuplicateMarkerError: If a declared marker occurs more than once.
    """
    newline = "\r\n" if "\r\n" in content else "\n"
    lines = content.split(newline)

    positions: dict[str, int] = {}
    for marker in markers:
        positions[marker.name] = locate(lines, marker, path=path)

    undeclared = [name for name in fragments if name not in positions]
    if undeclared:
        raise MarkerNotFoundError(
            f"fragments target undeclared marker {undeclared[0]!r}",
            path=path,
            marker=undeclared[0],
        )

    insertions: dict[int, list[str]] = {}
    for name, marker_fragments in fragments.items():
        index = positions[name]
        marker_line = lines[index]
        indent = marker_line[: len(marker_line) - len(marker_line.lstrip())]
        existing = _window_above(lines, index, marker_fragments) if deduplicate else []

        accepted: list[tuple[str, ...]] = []
        pending: list[str] = []
        skipped = 0
        for fragment in marker_fragments:
            trimmed = fragment.trimmed
            if not trimmed:
                continue
            if deduplicate and (
                trimmed in accepted or _contains_block(existing, trimmed)
            ):
                skipped += 1
                continue
            accepted.append(trimmed)
            pending.extend(indent + line if line.strip() else "" for line in fragment.lines)

        if report is not None:
            report.inserted[name] = len(accepted)
            report.duplicates[name] = skipped
        if pending:
            insertions[index] = pending

    if not insertions:
        return content

    out: list[str] = []
    for index, line in enumerate(lines):
        out.extend(insertions.get(index, ()))
        out.append(line)
    return newline.join(out)


def _window_above(
    lines: Sequence[str], index: int, fragments: Sequence[CodeFragment]
) -> list[str]:
    """Non-blank stripped lines a fragment is compared against.

    Copies of *fragments* sitting directly above *index* are peeled off
    first, blank lines included, so blank lines inside earlier insertions do
    not cut the window short.  The block above what was peeled is then added
    on top.
    """
    shapes = list(dict.fromkeys(fragment.stripped for fragment in fragments if fragment.trimmed))
    cursor = index
    peeled: list[str] = []
    matched = True
    while matched:
        matched = False
        for shape in shapes:
            width = len(shape)
            if width > cursor:
                continue
            if tuple(line.strip() for line in lines[cursor - width : cursor]) == shape:
                peeled[:0] = [line for line in shape if line]
                cursor -= width
                matched = True
                break
    return _block_above(lines, cursor) + peeled


def _block_above(lines: Sequence[str], index: int) -> list[str]:
    """Stripped lines directly above *index*, top to bottom."""
    block: list[str] = []
    cursor = index - 1
    while cursor >= 0:
        stripped = lines[cursor].strip()
        if not stripped or _SENTINEL_RE.match(stripped):
            break
        block.append(stripped)
        cursor -= 1
    block.reverse()
    return block


def _contains_block(haystack: Sequence[str], needle: Sequence[str]) -> bool:
    width = len(needle)
    if width == 0 or width > len(haystack):
        return False
    return any(
        tuple(haystack[start : start + width]) == tuple(needle)
        for start in range(len(haystack) - width + 1)
    )
