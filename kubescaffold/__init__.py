"""kubescaffold -- scaffolds and incrementally updates operator projects.

Files are created from templates, guarded by per-file existence policies,
and later extended by inserting code fragments above marker comments that
the templates wrote, so hand-written code around those markers survives
every re-run.

Quick usage::

    from kubescaffold import ApiScaffolder, ScaffoldConfig
    from kubescaffold.machinery import ResourceDescriptor

    config = ScaffoldConfig(output_dir="./my-operator")
    resource = ResourceDescriptor(group="crew", version="v1", kind="Captain", domain="example.com")
    ApiScaffolder(config, config.load_project(), resource).scaffold()
"""

from kubescaffold.config import ScaffoldConfig
from kubescaffold.scaffolds import ApiScaffolder, InitScaffolder, WebhookScaffolder

__all__ = [
    "ApiScaffolder",
    "InitScaffolder",
    "ScaffoldConfig",
    "WebhookScaffolder",
]
