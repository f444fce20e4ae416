"""Explicit scheme registry.

Generated API packages register their kinds with a runtime scheme.  Instead
of relying on an import-time side effect, the caller constructs a
:class:`SchemeRegistry`, hands it to the scaffold, and the type builders
record their kinds in it.  Templates read the registry from their render
context to emit the registration block.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class SchemeRegistry:
    """Kinds registered per ``group/version``, in registration order."""

    kinds: dict[str, list[str]] = field(default_factory=dict)

    def register(self, group_version: str, *kinds: str) -> None:
        """Record *kinds* under *group_version*; repeats are ignored."""
        registered = self.kinds.setdefault(group_version, [])
        for kind in kinds:
            if kind not in registered:
                registered.append(kind)

    def kinds_for(self, group_version: str) -> list[str]:
        return list(self.kinds.get(group_version, []))

    def group_versions(self) -> list[str]:
        return list(self.kinds)
