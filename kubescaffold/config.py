"""kubescaffold configuration.

Typed settings for a scaffold invocation.  Settings use a Pydantic v2 model
so they can be validated at construction time and serialised to/from JSON
or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field

from kubescaffold.machinery import ProjectContext
from kubescaffold.utils import print_warning

_TRUTHY = {"1", "true", "yes", "on"}


class ScaffoldConfig(BaseModel):
    """Settings shared by the plugin scaffolders.

    Relative ``boilerplate_file`` and ``project_file`` paths are resolved
    against ``output_dir``, the root of the project being scaffolded.
    """

    output_dir: Path = Field(default=Path("."))
    boilerplate_file: Path = Field(default=Path("hack/boilerplate.go.txt"))
    project_file: Path = Field(default=Path("PROJECT"))
    force: bool = Field(default=False, description="Overwrite files that would be skipped or rejected")
    quiet: bool = Field(default=False, description="Suppress progress output")

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def boilerplate_path(self) -> Path:
        """Absolute-or-output-relative path of the boilerplate header."""
        return self.output_dir / self.boilerplate_file

    @property
    def project_path(self) -> Path:
        """Path of the ``PROJECT`` file."""
        return self.output_dir / self.project_file

    # ------------------------------------------------------------------
    # Loaders
    # ------------------------------------------------------------------

    def load_boilerplate(self) -> str:
        """Read the boilerplate header, without its trailing newline.

        Returns an empty header (and prints a warning) when the file does not
        exist, so that projects without a license header still scaffold.
        """
        path = self.boilerplate_path
        if not path.exists():
            if not self.quiet:
                print_warning(f"Boilerplate file not found: {path}; using an empty header.")
            return ""
        return path.read_text(encoding="utf-8").rstrip("\n")

    def load_project(self) -> ProjectContext:
        """Load the project context from the ``PROJECT`` file.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        path = self.project_path
        if not path.exists():
            raise FileNotFoundError(f"PROJECT file not found: {path}")
        return ProjectContext.from_project_file(path)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file and return its path."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return path

    @classmethod
    def load(cls, path: Path) -> "ScaffoldConfig":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "ScaffoldConfig":
        """Build a ``ScaffoldConfig`` from environment variables.

        Recognised variables (all optional):
            KS_OUTPUT_DIR, KS_BOILERPLATE, KS_PROJECT_FILE, KS_FORCE, KS_QUIET.
        """
        kwargs: dict[str, object] = {}
        if os.environ.get("KS_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["KS_OUTPUT_DIR"])
        if os.environ.get("KS_BOILERPLATE"):
            kwargs["boilerplate_file"] = Path(os.environ["KS_BOILERPLATE"])
        if os.environ.get("KS_PROJECT_FILE"):
            kwargs["project_file"] = Path(os.environ["KS_PROJECT_FILE"])
        kwargs["force"] = os.environ.get("KS_FORCE", "").strip().lower() in _TRUTHY
        kwargs["quiet"] = os.environ.get("KS_QUIET", "").strip().lower() in _TRUTHY
        return cls(**kwargs)
