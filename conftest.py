"""Root pytest configuration and fixtures.

This module provides:
- Environment setup (loads .env)
- Sample block decorators covering the recognized code shapes
- Project layout fixtures for setup validation
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


# =============================================================================
# Sample Block Sources
# =============================================================================

HERO_BLOCK = """\
export default function decorate(block) {
  const picture = block.children[0];
  const title = block.children[1];
  const text = block.children[2];
  picture.classList.add('hero-image');
  title.classList.add('hero-title');
  text.classList.add('hero-text');
}
"""

CARDS_BLOCK = """\
import { createOptimizedPicture } from '../../scripts/aem.js';

export default function decorate(block) {
  const ul = document.createElement('ul');
  [...block.children].forEach((row) => {
    const li = document.createElement('li');
    while (row.firstElementChild) li.append(row.firstElementChild);
    ul.append(li);
  });
  block.textContent = '';
  block.append(ul);
}
"""

CONFIG_BLOCK = """\
import { readBlockConfig } from '../../scripts/aem.js';

export default async function decorate(block) {
  const config = readBlockConfig(block);
  const source = config['source'];
  const limit = config.limit;
  const sort = config["sort-order"];
  block.textContent = '';
  const response = await fetch(source);
  block.dataset.limit = limit;
  block.dataset.sort = sort;
}
"""

QUOTE_BLOCK = """\
export default function decorate(block) {
  const quote = document.createElement('blockquote');
  quote.append(block.children[0]);
  block.replaceChildren(quote);
}
"""

MALFORMED_BLOCK = """\
export default function decorate(block) {
  const rows = [...block.children;
}
"""


@pytest.fixture
def hero_block() -> str:
    """Three cells read by index, with class manipulation."""
    return HERO_BLOCK


@pytest.fixture
def cards_block() -> str:
    """Container that spreads and iterates its rows into a list."""
    return CARDS_BLOCK


@pytest.fixture
def config_block() -> str:
    """Key/value config table read through readBlockConfig."""
    return CONFIG_BLOCK


@pytest.fixture
def quote_block() -> str:
    """Single cell wrapped into a blockquote."""
    return QUOTE_BLOCK


@pytest.fixture
def malformed_block() -> str:
    """Block source with an unclosed bracket."""
    return MALFORMED_BLOCK


# =============================================================================
# Project Layout Fixtures
# =============================================================================


@pytest.fixture
def blocks_dir(tmp_path: Path) -> Path:
    """A blocks directory with hero (js+css), cards (js) and an empty folder.

    Returns:
        Path to the blocks directory.
    """
    blocks = tmp_path / "blocks"
    (blocks / "hero").mkdir(parents=True)
    (blocks / "hero" / "hero.js").write_text(HERO_BLOCK, encoding="utf-8")
    (blocks / "hero" / "hero.css").write_text(".hero {}\n", encoding="utf-8")
    (blocks / "cards").mkdir()
    (blocks / "cards" / "cards.js").write_text(CARDS_BLOCK, encoding="utf-8")
    (blocks / "empty").mkdir()
    return blocks


@pytest.fixture
def ue_project(tmp_path: Path) -> Path:
    """A project that passes every setup check.

    Returns:
        Path to the project root.
    """
    package = {
        "name": "site",
        "scripts": {
            "build:json": "npm-run-all -p build:json:*",
            "build:json:models": "merge-json-cli -i ue/models/component-models.json -o component-models.json",
            "build:json:definitions": "merge-json-cli -i ue/models/component-definition.json -o component-definition.json",
            "build:json:filters": "merge-json-cli -i ue/models/component-filters.json -o component-filters.json",
        },
        "devDependencies": {
            "merge-json-cli": "^1.0.4",
            "npm-run-all": "^4.1.5",
            "husky": "^9.1.1",
        },
    }
    (tmp_path / "package.json").write_text(json.dumps(package), encoding="utf-8")

    models = tmp_path / "ue" / "models"
    (models / "blocks").mkdir(parents=True)
    for name in ("page", "text", "image", "section"):
        (models / f"{name}.json").write_text("{}", encoding="utf-8")
    for name in ("component-definition", "component-models", "component-filters"):
        (models / f"{name}.json").write_text("{}", encoding="utf-8")
        (tmp_path / f"{name}.json").write_text("{}", encoding="utf-8")

    scripts = tmp_path / "ue" / "scripts"
    scripts.mkdir(parents=True)
    (scripts / "ue.js").write_text("", encoding="utf-8")
    (scripts / "ue-utils.js").write_text("", encoding="utf-8")

    husky = tmp_path / ".husky"
    husky.mkdir()
    (husky / "pre-commit").write_text("npm run build:json\n", encoding="utf-8")
    return tmp_path
