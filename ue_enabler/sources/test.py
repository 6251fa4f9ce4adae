"""Unit tests for component sources."""

import base64

import httpx
import pytest

from ue_enabler.sources import (
    ComponentInfo,
    ComponentNotFoundError,
    GitHubComponentSource,
    LocalComponentSource,
    SourceError,
    find_component,
)

API = "https://api.test"
CARDS_JS = "export default function decorate(block) {}\n"


def _encoded(text: str) -> str:
    # The contents API wraps base64 at 60 characters.
    raw = base64.b64encode(text.encode("utf-8")).decode("ascii")
    return "\n".join(raw[i : i + 60] for i in range(0, len(raw), 60))


def _github_handler(request: httpx.Request) -> httpx.Response:
    path = request.url.path.removeprefix("/repos/acme/site/contents/")
    listings = {
        "blocks": [
            {"name": "cards", "type": "dir", "html_url": "https://github.test/cards"},
            {"name": "README.md", "type": "file"},
            {"name": "accordion", "type": "dir", "html_url": "https://github.test/accordion"},
        ],
        "blocks/cards": [{"name": "cards.js"}, {"name": "cards.css"}],
        "blocks/accordion": [{"name": "accordion.css"}],
        "blocks/folder/folder.js": [{"name": "index.js"}],
    }
    if path in listings:
        return httpx.Response(200, json=listings[path])
    if path == "blocks/cards/cards.js":
        return httpx.Response(
            200, json={"type": "file", "encoding": "base64", "content": _encoded(CARDS_JS)}
        )
    if path == "blocks/broken/broken.js":
        return httpx.Response(500, text="boom")
    return httpx.Response(404, json={"message": "Not Found"})


@pytest.fixture
def requests_seen() -> list[httpx.Request]:
    return []


@pytest.fixture
def github_source(requests_seen) -> GitHubComponentSource:
    """GitHub source backed by a mock transport."""

    def handler(request: httpx.Request) -> httpx.Response:
        requests_seen.append(request)
        return _github_handler(request)

    client = httpx.Client(transport=httpx.MockTransport(handler))
    return GitHubComponentSource(
        "acme", "site", branch="dev", token="secret", client=client, base_url=API
    )


class TestLocalComponentSource:
    """Tests for LocalComponentSource."""

    @pytest.mark.unit
    def test_list_components(self, blocks_dir):
        """Block directories are listed by name with file flags."""
        components = LocalComponentSource(blocks_dir).list_components()
        assert [c.name for c in components] == ["cards", "empty", "hero"]

        hero = components[2]
        assert hero.has_code is True
        assert hero.has_style is True
        assert hero.source == "local"
        assert components[0].has_style is False
        assert components[1].has_code is False

    @pytest.mark.unit
    def test_missing_directory(self, tmp_path):
        """A missing blocks directory is not found."""
        with pytest.raises(ComponentNotFoundError, match="Blocks directory not found"):
            LocalComponentSource(tmp_path / "nope").list_components()

    @pytest.mark.unit
    def test_get_component_code(self, blocks_dir, hero_block):
        """Code is read by name or by listing entry."""
        source = LocalComponentSource(blocks_dir)
        assert source.get_component_code("hero") == hero_block
        info = find_component(source, "hero")
        assert source.get_component_code(info) == hero_block

    @pytest.mark.unit
    def test_unknown_block(self, blocks_dir):
        """Unknown block names are not found."""
        with pytest.raises(ComponentNotFoundError, match='Block "nope" not found'):
            LocalComponentSource(blocks_dir).get_component_code("nope")

    @pytest.mark.unit
    def test_block_without_code(self, blocks_dir):
        """A block directory without a .js file is not found."""
        with pytest.raises(ComponentNotFoundError, match="does not have a JavaScript file"):
            LocalComponentSource(blocks_dir).get_component_code("empty")

    @pytest.mark.unit
    def test_find_component_missing(self, blocks_dir):
        """find_component raises for unknown names."""
        with pytest.raises(ComponentNotFoundError):
            find_component(LocalComponentSource(blocks_dir), "nope")

    @pytest.mark.unit
    def test_info_to_dict(self):
        """ComponentInfo serializes with the listing keys."""
        info = ComponentInfo("hero", "blocks/hero", True, False, "local")
        assert info.to_dict() == {
            "name": "hero",
            "path": "blocks/hero",
            "has_js": True,
            "has_css": False,
            "source": "local",
        }


class TestGitHubComponentSource:
    """Tests for GitHubComponentSource against a mock transport."""

    @pytest.mark.unit
    def test_list_components(self, github_source):
        """Directories are listed, sorted and checked for files."""
        components = github_source.list_components()
        assert [c.name for c in components] == ["accordion", "cards"]
        assert components[0].has_code is False
        assert components[1].has_code is True
        assert components[1].has_style is True
        assert components[1].url == "https://github.test/cards"
        assert components[1].path == "blocks/cards"
        assert components[1].source == "github"

    @pytest.mark.unit
    def test_request_details(self, github_source, requests_seen):
        """Requests carry the ref and the token."""
        github_source.get_component_code("cards")
        request = requests_seen[0]
        assert request.url.params["ref"] == "dev"
        assert request.headers["Authorization"] == "Bearer secret"
        assert request.url.host == "api.test"

    @pytest.mark.unit
    def test_get_component_code_decodes(self, github_source):
        """File content is base64 decoded."""
        assert github_source.get_component_code("cards") == CARDS_JS

    @pytest.mark.unit
    def test_not_found(self, github_source):
        """404 maps to ComponentNotFoundError."""
        with pytest.raises(ComponentNotFoundError) as exc_info:
            github_source.get_component_code("missing")
        assert exc_info.value.status_code == 404
        assert "blocks/missing/missing.js" in str(exc_info.value)

    @pytest.mark.unit
    def test_server_error(self, github_source):
        """Other HTTP failures map to SourceError."""
        with pytest.raises(SourceError) as exc_info:
            github_source.get_component_code("broken")
        assert not isinstance(exc_info.value, ComponentNotFoundError)
        assert exc_info.value.status_code == 500

    @pytest.mark.unit
    def test_directory_is_not_a_file(self, github_source):
        """A code path that resolves to a directory is an error."""
        with pytest.raises(SourceError, match="is not a file"):
            github_source.get_component_code("folder")

    @pytest.mark.unit
    def test_transport_error(self):
        """Connection failures map to SourceError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        client = httpx.Client(transport=httpx.MockTransport(handler))
        source = GitHubComponentSource("acme", "site", token="t", client=client, base_url=API)
        with pytest.raises(SourceError, match="GitHub request failed"):
            source.list_components()

    @pytest.mark.unit
    def test_unauthenticated(self, monkeypatch):
        """Without a token no Authorization header is sent."""
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        client = httpx.Client(transport=httpx.MockTransport(handler))
        source = GitHubComponentSource("acme", "site", client=client, base_url=API)
        assert source.list_components() == []
        assert "Authorization" not in seen[0].headers

    @pytest.mark.unit
    def test_branch_from_environment(self, monkeypatch):
        """Branch defaults to GITHUB_BRANCH."""
        monkeypatch.setenv("GITHUB_BRANCH", "release")
        source = GitHubComponentSource("acme", "site", token="t", client=httpx.Client())
        assert source.branch == "release"
