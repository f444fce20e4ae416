"""Jinja2 template rendering for scaffolded files and code fragments.

Provides the TemplateRenderer class which renders inline template bodies
against a render context (boilerplate header, resource fields, project
settings and helper functions).  Rendering is strict: a reference to a
context field that does not exist raises :class:`RenderError` instead of
silently producing empty text.
"""

from __future__ import annotations

import re
from typing import Any

from jinja2 import Environment, StrictUndefined, TemplateError, TemplateSyntaxError, UndefinedError

from .errors import RenderError
from .resource import safe_import

_FNV32_OFFSET = 0x811C9DC5
_FNV32_PRIME = 0x01000193

_UNDEFINED_PATTERNS = (
    re.compile(r"'([^']+)' is undefined"),
    re.compile(r"has no attribute '([^']+)'"),
)


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 template bodies for scaffolding.

    A single renderer is shared by every builder of a scaffold run.  Block
    tags are trimmed so that ``{% if %}`` lines used to gate optional
    sections leave no blank lines behind, and trailing newlines are kept so
    a rendered body ends exactly like its template.
    """

    def __init__(self) -> None:
        self.env = Environment(
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        # Register custom filters
        self.env.filters["pascal_case"] = _pascal_case_filter
        self.env.filters["snake_case"] = _snake_case_filter
        self.env.filters["camel_case"] = _camel_case_filter
        self.env.filters["safe_import"] = safe_import
        self.env.filters["hash_fnv"] = hash_fnv
        self.env.globals["hash_fnv"] = hash_fnv

    def render(self, body: str, context: dict[str, Any], *, path: str = "") -> str:
        """Render *body* with the provided context.

        Args:
            body: Template source text.
            context: Variables available inside the template.
            path: Output path, used only to label errors.

        Returns:
            The rendered text.

        Raises:
            RenderError: If the template references an undefined field or
                cannot be parsed.
        """
        try:
            template = self.env.from_string(body)
            return template.render(**context)
        except UndefinedError as exc:
            reference = _undefined_reference(str(exc))
            raise RenderError(
                f"template references undefined field {reference!r}",
                path=path,
                reference=reference,
            ) from exc
        except TemplateSyntaxError as exc:
            raise RenderError(
                f"template syntax error on line {exc.lineno}: {exc.message}", path=path
            ) from exc
        except TemplateError as exc:
            raise RenderError(f"template failed to render: {exc}", path=path) from exc


# ---------------------------------------------------------------------------
# Helper functions exposed to templates
# ---------------------------------------------------------------------------


def hash_fnv(value: str) -> str:
    """Return the 32-bit FNV-1a hash of *value* as 8 lower-case hex digits.

    Used to derive stable identifiers (e.g. a leader election ID) from the
    module path.
    """
    digest = _FNV32_OFFSET
    for byte in value.encode("utf-8"):
        digest ^= byte
        digest = (digest * _FNV32_PRIME) & 0xFFFFFFFF
    return format(digest, "08x")


def _pascal_case_filter(value: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``SomeThing``."""
    parts = re.split(r"[-_\s]+", value)
    return "".join(word[:1].upper() + word[1:] for word in parts if word)


def _snake_case_filter(value: str) -> str:
    """Convert ``SomeThing`` or ``some-thing`` to ``some_thing``."""
    s1 = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", value)
    s2 = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s1)
    return re.sub(r"[-\s]+", "_", s2).lower()


def _camel_case_filter(value: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``someThing``."""
    pascal = _pascal_case_filter(value)
    if pascal:
        return pascal[0].lower() + pascal[1:]
    return ""


def _undefined_reference(message: str) -> str:
    for pattern in _UNDEFINED_PATTERNS:
        match = pattern.search(message)
        if match:
            return match.group(1)
    return message
