"""Component sources: local directories and GitHub repositories."""

from ue_enabler.sources.github import GitHubComponentSource
from ue_enabler.sources.lib import (
    ComponentInfo,
    ComponentNotFoundError,
    ComponentSource,
    LocalComponentSource,
    SourceError,
    find_component,
)

__all__ = [
    # Errors
    "SourceError",
    "ComponentNotFoundError",
    # Types
    "ComponentInfo",
    "ComponentSource",
    # Backends
    "LocalComponentSource",
    "GitHubComponentSource",
    "find_component",
]
