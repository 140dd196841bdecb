"""Pytest fixtures for dejoiner tests."""

import json
import logging
import tempfile
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest

from dejoiner.config import reset_config
from dejoiner.config.schema import DejoinerConfig

ISOLATED_ENV_VARS = [
    "DEJOINER_DB_PATH",
    "DEJOINER_LOG_LEVEL",
    "DEJOINER_SEARCH_LIMIT",
    "SLACK_BOT_TOKEN",
    "SLACK_SIGNING_SECRET",
    "SLACK_APP_TOKEN",
    "SLACK_NOTIFY_CHANNEL",
    "FIGMA_ACCESS_TOKEN",
    "FIGMA_TEAM_ID",
    "GROQ_API_KEY",
]


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def isolated_env(
    monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory
) -> None:
    """Point config at a throwaway file and clear integration variables."""
    config_dir = tmp_path_factory.mktemp("config")
    monkeypatch.setenv("DEJOINER_CONFIG", str(config_dir / "config.toml"))
    for name in ISOLATED_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_config_fixture() -> Generator[None, None, None]:
    """Reset config singleton between tests."""
    reset_config()
    yield
    reset_config()


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Undo setup_logging so handlers never outlive a test's streams."""
    yield
    logger = logging.getLogger("dejoiner")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def default_config() -> DejoinerConfig:
    """Get default configuration."""
    return DejoinerConfig()


@pytest.fixture
def design_file() -> dict[str, Any]:
    """A small design-file export with two pages."""
    return {
        "name": "Checkout",
        "document": {
            "id": "0:0",
            "name": "Document",
            "type": "DOCUMENT",
            "children": [
                {
                    "id": "0:1",
                    "name": "Page 1",
                    "type": "CANVAS",
                    "children": [
                        {
                            "id": "1:1",
                            "name": "Hero",
                            "type": "FRAME",
                            "children": [
                                {
                                    "id": "1:2",
                                    "name": "Sign up now",
                                    "type": "TEXT",
                                    "characters": "Sign up now",
                                },
                                {
                                    "id": "1:3",
                                    "name": "Text",
                                    "type": "TEXT",
                                    "characters": "Text",
                                },
                            ],
                        },
                        {
                            "id": "1:4",
                            "name": "Pricing Table",
                            "type": "FRAME",
                            "children": [],
                        },
                    ],
                },
                {
                    "id": "0:2",
                    "name": "Components",
                    "type": "CANVAS",
                    "children": [
                        {
                            "id": "2:1",
                            "name": "Primary Button",
                            "type": "COMPONENT",
                        },
                        {"id": "2:2", "name": "Component 2", "type": "COMPONENT"},
                    ],
                },
            ],
        },
    }


@pytest.fixture
def design_file_path(temp_dir: Path, design_file: dict[str, Any]) -> Path:
    """The sample design file written to disk."""
    path = temp_dir / "checkout.json"
    path.write_text(json.dumps(design_file))
    return path


@pytest.fixture
def resource_rows() -> list[dict[str, Any]]:
    """Resource rows as stored, newest first."""
    return [
        {
            "id": "r1",
            "title": "Checkout Flow",
            "type": "figma",
            "url": "https://www.figma.com/file/abc123/Checkout-Flow",
            "last_edited_at": "2024-05-03T10:00:00Z",
            "metadata": {
                "frames": ["Cart", "Payment Details"],
                "ai_summary": "Covers the purchase path from cart to confirmation",
            },
            "content_index": [
                {
                    "text": "Apply promo code",
                    "location": "Page 1 > Cart",
                    "type": "text",
                    "nodeId": "5:1",
                }
            ],
        },
        {
            "id": "r2",
            "title": "Design System Overview",
            "type": "figma",
            "url": "https://www.figma.com/file/def456/Design-System",
            "last_edited_at": "2024-05-02T10:00:00Z",
            "metadata": {"ai_summary": "Tokens, colours and the button library"},
        },
        {
            "id": "r3",
            "title": "API Gateway",
            "type": "github",
            "url": "https://github.com/acme/api-gateway",
            "last_edited_at": "2024-05-01T10:00:00Z",
        },
    ]


@pytest.fixture
def resources_file(temp_dir: Path, resource_rows: list[dict[str, Any]]) -> Path:
    """The sample resource rows written to disk."""
    path = temp_dir / "resources.json"
    path.write_text(json.dumps(resource_rows))
    return path
