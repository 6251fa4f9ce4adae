"""Component sources: where block code is read from.

Defines the ComponentSource interface shared by every backend, the
component listing record, the errors sources raise, and the local
filesystem backend.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class SourceError(Exception):
    """Error reading components from a source."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ComponentNotFoundError(SourceError):
    """A component, file or directory does not exist in the source."""


@dataclass(frozen=True)
class ComponentInfo:
    """A component (block) found in a source.

    Attributes:
        name: Block name, also the name of its directory and files.
        path: Directory path within the source.
        has_code: The block has a <name>.js file.
        has_style: The block has a <name>.css file.
        source: Source kind ("local" or "github").
        url: Browsable URL, for remote sources.
    """

    name: str
    path: str
    has_code: bool
    has_style: bool
    source: str
    url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire format."""
        data: dict[str, Any] = {
            "name": self.name,
            "path": self.path,
            "has_js": self.has_code,
            "has_css": self.has_style,
            "source": self.source,
        }
        if self.url:
            data["url"] = self.url
        return data


class ComponentSource(Protocol):
    """Protocol for anything that can list blocks and return their code.

    Implementations raise ComponentNotFoundError for missing components
    and SourceError for any other failure.
    """

    @property
    def description(self) -> str:
        """Human-readable location of the source."""
        ...

    def list_components(self) -> list[ComponentInfo]:
        """List every block directory in the source.

        Returns:
            Components sorted by name.
        """
        ...

    def get_component_code(self, component: str | ComponentInfo) -> str:
        """Read the JavaScript source of a block.

        Args:
            component: Block name or a listing entry.

        Returns:
            The decorator source text.
        """
        ...


def find_component(source: ComponentSource, name: str) -> ComponentInfo:
    """Look up one component by name.

    Raises:
        ComponentNotFoundError: If no block has that name.
    """
    for component in source.list_components():
        if component.name == name:
            return component
    raise ComponentNotFoundError(f'Block "{name}" not found')


class LocalComponentSource:
    """Blocks read from a local directory laid out as <dir>/<name>/<name>.js.

    Example:
        >>> source = LocalComponentSource("./blocks")
        >>> [c.name for c in source.list_components()]
        ['cards', 'hero']
    """

    def __init__(self, blocks_path: Path | str):
        self.blocks_path = Path(blocks_path)

    @property
    def description(self) -> str:
        return f"Local: {self.blocks_path}"

    def list_components(self) -> list[ComponentInfo]:
        """List block directories.

        Raises:
            ComponentNotFoundError: If the blocks directory does not exist.
            SourceError: If the directory cannot be read.
        """
        if not self.blocks_path.is_dir():
            raise ComponentNotFoundError(f"Blocks directory not found at {self.blocks_path}")

        try:
            entries = sorted(p for p in self.blocks_path.iterdir() if p.is_dir())
        except OSError as e:
            raise SourceError(f"Failed to read blocks directory: {e}") from e

        components = [
            ComponentInfo(
                name=entry.name,
                path=str(entry),
                has_code=(entry / f"{entry.name}.js").is_file(),
                has_style=(entry / f"{entry.name}.css").is_file(),
                source="local",
            )
            for entry in entries
        ]
        logger.debug("Found %d blocks in %s", len(components), self.blocks_path)
        return components

    def get_component_code(self, component: str | ComponentInfo) -> str:
        """Read <dir>/<name>/<name>.js.

        Raises:
            ComponentNotFoundError: If the block or its code file is missing.
            SourceError: If the file cannot be read.
        """
        name = component.name if isinstance(component, ComponentInfo) else component
        code_path = self.blocks_path / name / f"{name}.js"

        if not code_path.is_file():
            if not code_path.parent.is_dir():
                raise ComponentNotFoundError(f'Block "{name}" not found')
            raise ComponentNotFoundError(f'Block "{name}" does not have a JavaScript file')

        try:
            return code_path.read_text(encoding="utf-8")
        except OSError as e:
            raise SourceError(f"Failed to get block code for {name}: {e}") from e


__all__ = [
    "SourceError",
    "ComponentNotFoundError",
    "ComponentInfo",
    "ComponentSource",
    "LocalComponentSource",
    "find_component",
]
