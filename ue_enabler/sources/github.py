"""GitHub component source.

Reads blocks from a repository through the GitHub contents API. The HTTP
client is owned by the source instance; pass one in to share connections
or to test against a mock transport.
"""

import base64
import binascii
import logging
from typing import Any

import httpx

from ue_enabler.config import EnvVar, get_environment

from .lib import ComponentInfo, ComponentNotFoundError, SourceError

logger = logging.getLogger(__name__)


class GitHubComponentSource:
    """Blocks read from <blocks_path>/<name>/<name>.js in a GitHub repository.

    Example:
        >>> source = GitHubComponentSource("adobe", "aem-boilerplate")
        >>> code = source.get_component_code("cards")

    Attributes:
        org: Repository owner.
        repo: Repository name.
        branch: Branch, tag or commit to read from.
        blocks_path: Blocks directory within the repository.
    """

    def __init__(
        self,
        org: str,
        repo: str,
        branch: str | None = None,
        blocks_path: str = "blocks",
        token: str | None = None,
        client: httpx.Client | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ):
        """Initialize the source.

        Args:
            org: Repository owner.
            repo: Repository name.
            branch: Ref to read. Defaults to GITHUB_BRANCH or "main".
            blocks_path: Blocks directory within the repository.
            token: API token. Defaults to GITHUB_TOKEN; unauthenticated if unset.
            client: HTTP client to use instead of creating one.
            base_url: API base URL. Defaults to GITHUB_API_URL.
            timeout: Request timeout in seconds. Defaults to GITHUB_TIMEOUT.
        """
        self.org = org
        self.repo = repo
        self.branch = get_environment(EnvVar.GITHUB_BRANCH, override=branch)
        self.blocks_path = blocks_path.strip("/")
        self.base_url = get_environment(EnvVar.GITHUB_API_URL, override=base_url).rstrip("/")

        token = get_environment(EnvVar.GITHUB_TOKEN, override=token)
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._headers = headers

        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=get_environment(EnvVar.GITHUB_TIMEOUT, override=timeout)
        )

    def __del__(self) -> None:
        """Clean up HTTP client."""
        if getattr(self, "_owns_client", False) and hasattr(self, "_client"):
            self._client.close()

    @property
    def description(self) -> str:
        return f"GitHub: {self.org}/{self.repo}"

    def _get_contents(self, path: str) -> Any:
        """GET the contents API for a repository path.

        Raises:
            ComponentNotFoundError: On 404.
            SourceError: On any other failure.
        """
        url = f"{self.base_url}/repos/{self.org}/{self.repo}/contents/{path}"
        logger.debug("Fetching %s@%s", url, self.branch)

        try:
            response = self._client.get(
                url, params={"ref": self.branch}, headers=self._headers
            )
        except httpx.TimeoutException as e:
            raise SourceError(f"GitHub request timed out: {e}") from e
        except httpx.RequestError as e:
            raise SourceError(f"GitHub request failed: {e}") from e

        if response.status_code == 404:
            raise ComponentNotFoundError(f"Not found: {path}", status_code=404)
        if response.status_code != 200:
            raise SourceError(
                f"Failed to fetch {path} from GitHub: {response.status_code} "
                f"{response.text[:200]}",
                status_code=response.status_code,
            )
        return response.json()

    def _list_directory(self, path: str) -> list[dict[str, Any]]:
        data = self._get_contents(path)
        if not isinstance(data, list):
            raise SourceError(f"{path} is not a directory")
        return data

    def list_components(self) -> list[ComponentInfo]:
        """List block directories, checking each for code and style files.

        Raises:
            ComponentNotFoundError: If the blocks directory does not exist.
            SourceError: If any request fails.
        """
        components = []
        for item in self._list_directory(self.blocks_path):
            if item.get("type") != "dir":
                continue
            name = item["name"]
            path = f"{self.blocks_path}/{name}"
            files = {entry.get("name") for entry in self._list_directory(path)}
            components.append(
                ComponentInfo(
                    name=name,
                    path=path,
                    has_code=f"{name}.js" in files,
                    has_style=f"{name}.css" in files,
                    source="github",
                    url=item.get("html_url"),
                )
            )

        components.sort(key=lambda c: c.name)
        logger.debug("Found %d blocks in %s", len(components), self.description)
        return components

    def get_component_code(self, component: str | ComponentInfo) -> str:
        """Fetch and decode <blocks_path>/<name>/<name>.js.

        Raises:
            ComponentNotFoundError: If the file does not exist.
            SourceError: If the request fails or the path is not a file.
        """
        if isinstance(component, ComponentInfo):
            name, directory = component.name, component.path
        else:
            name, directory = component, f"{self.blocks_path}/{component}"
        path = f"{directory}/{name}.js"

        try:
            data = self._get_contents(path)
        except ComponentNotFoundError as e:
            raise ComponentNotFoundError(
                f"File not found: {path}", status_code=e.status_code
            ) from e

        if not isinstance(data, dict) or data.get("type") != "file":
            raise SourceError(f"{path} is not a file")

        try:
            return base64.b64decode(data.get("content", "")).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as e:
            raise SourceError(f"Failed to decode {path}: {e}") from e


__all__ = ["GitHubComponentSource"]
