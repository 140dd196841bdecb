"""Tests for content index extraction."""

from typing import Any

import pytest

from dejoiner.search import (
    ContentIndexer,
    DocumentNode,
    IndexCategory,
    IndexEntry,
    build_manifest,
    detect_source_type,
    extract_content_index,
    is_placeholder,
    parse_file_key,
)


def _file(*pages: dict[str, Any]) -> dict[str, Any]:
    return {"document": {"id": "0:0", "name": "", "type": "DOCUMENT", "children": list(pages)}}


def _page(node_id: str, name: str, *children: dict[str, Any]) -> dict[str, Any]:
    return {"id": node_id, "name": name, "type": "CANVAS", "children": list(children)}


class TestIsPlaceholder:
    """Tests for the placeholder predicate."""

    @pytest.mark.parametrize(
        "text",
        ["Text", "Frame", "Lorem Ipsum", "lorem ipsum", "Component 2", "Instance", "x", "", "  text  "],
    )
    def test_placeholders(self, text: str) -> None:
        """Test that default and generated labels are placeholders."""
        assert is_placeholder(text)

    @pytest.mark.parametrize(
        "text", ["Checkout Flow", "Components", "Hero", "Component Library", "OK"]
    )
    def test_real_labels(self, text: str) -> None:
        """Test that meaningful labels are not placeholders."""
        assert not is_placeholder(text)


class TestDocumentNode:
    """Tests for DocumentNode validation."""

    def test_from_mapping(self) -> None:
        """Test building a node from a raw mapping."""
        node = DocumentNode.from_mapping(
            {"id": "1:1", "name": "Hero", "type": "FRAME", "children": [{"id": "1:2"}, "junk"]}
        )
        assert node is not None
        assert node.id == "1:1"
        assert node.name == "Hero"
        assert node.children == [{"id": "1:2"}]

    def test_missing_id(self) -> None:
        """Test that nodes without an id are rejected."""
        assert DocumentNode.from_mapping({"name": "Hero", "type": "FRAME"}) is None
        assert DocumentNode.from_mapping({"id": "", "name": "Hero"}) is None

    def test_non_mapping(self) -> None:
        """Test that non-mapping values are rejected."""
        assert DocumentNode.from_mapping(None) is None
        assert DocumentNode.from_mapping(["1:1"]) is None

    def test_wrong_types(self) -> None:
        """Test that wrong-typed optional fields become defaults."""
        node = DocumentNode.from_mapping(
            {"id": 7, "name": None, "type": 3, "characters": 12, "children": "none"}
        )
        assert node is not None
        assert node.id == "7"
        assert node.name == ""
        assert node.type == ""
        assert node.characters is None
        assert node.children == []


class TestContentIndexer:
    """Tests for ContentIndexer."""

    def test_init_defaults(self) -> None:
        """Test default initialization."""
        indexer = ContentIndexer()
        assert indexer.max_text_length == 200
        assert indexer.separator == " > "

    def test_extract_sample_file(self, design_file: dict[str, Any]) -> None:
        """Test extraction order, categories and locations."""
        entries = ContentIndexer().extract(design_file)

        assert [(e.text, e.location, e.category) for e in entries] == [
            ("Page 1", "Page 1", IndexCategory.PAGE),
            ("Hero", "Page 1 > Hero", IndexCategory.FRAME),
            ("Sign up now", "Page 1 > Hero", IndexCategory.TEXT),
            ("Pricing Table", "Page 1 > Pricing Table", IndexCategory.FRAME),
            ("Components", "Components", IndexCategory.PAGE),
            ("Primary Button", "Components > Primary Button", IndexCategory.COMPONENT),
        ]
        assert entries[2].node_id == "1:2"

    def test_text_location_is_ancestor_path(self) -> None:
        """Test page > frame > text yields the page and frame breadcrumb."""
        data = _file(
            _page(
                "0:1",
                "Page 1",
                {
                    "id": "1:1",
                    "name": "Hero",
                    "type": "FRAME",
                    "children": [
                        {"id": "1:2", "name": "Sign up now", "type": "TEXT", "characters": "Sign up now"}
                    ],
                },
            )
        )
        text_entries = [e for e in extract_content_index(data) if e.category == IndexCategory.TEXT]

        assert len(text_entries) == 1
        assert text_entries[0].text == "Sign up now"
        assert text_entries[0].location == "Page 1 > Hero"

    def test_placeholder_nodes_skipped(self) -> None:
        """Test that placeholder names never yield entries."""
        data = _file(
            _page(
                "0:1",
                "Page 1",
                {"id": "1", "name": "Text", "type": "FRAME"},
                {"id": "2", "name": "Frame", "type": "FRAME"},
                {"id": "3", "name": "Lorem Ipsum", "type": "TEXT", "characters": "Lorem Ipsum"},
                {"id": "4", "name": "Component 2", "type": "INSTANCE"},
                {"id": "5", "name": "A", "type": "GROUP"},
                {"id": "6", "name": "Checkout Flow", "type": "FRAME"},
            )
        )
        texts = [e.text for e in extract_content_index(data)]
        assert texts == ["Page 1", "Checkout Flow"]

    def test_children_of_skipped_nodes_still_indexed(self) -> None:
        """Test that a placeholder parent does not hide its children."""
        data = _file(
            _page(
                "0:1",
                "Page 1",
                {
                    "id": "1",
                    "name": "Frame",
                    "type": "FRAME",
                    "children": [{"id": "2", "name": "Order summary", "type": "TEXT"}],
                },
            )
        )
        entries = extract_content_index(data)
        assert entries[-1].text == "Order summary"
        assert entries[-1].location == "Page 1 > Frame"

    def test_short_text_skipped(self) -> None:
        """Test that text needs more than two characters."""
        data = _file(
            _page(
                "0:1",
                "Page 1",
                {"id": "1", "name": "t1", "type": "TEXT", "characters": "OK"},
                {"id": "2", "name": "t2", "type": "TEXT", "characters": "Buy"},
            )
        )
        texts = [e.text for e in extract_content_index(data)]
        assert "OK" not in texts
        assert "Buy" in texts

    def test_text_falls_back_to_name(self) -> None:
        """Test that a text node without characters uses its name."""
        data = _file(_page("0:1", "Page 1", {"id": "1", "name": "Order total", "type": "TEXT"}))
        assert extract_content_index(data)[-1].text == "Order total"

    def test_text_truncated(self) -> None:
        """Test that long text is cut to max_text_length."""
        long_text = "word " * 100
        data = _file(
            _page("0:1", "Page 1", {"id": "1", "name": "copy", "type": "TEXT", "characters": long_text})
        )
        entry = extract_content_index(data)[-1]
        assert entry.text == long_text[:200]

        short = ContentIndexer(max_text_length=10).extract(data)[-1]
        assert short.text == long_text[:10]

    def test_group_and_section_categories(self) -> None:
        """Test that groups and sections keep their own category."""
        data = _file(
            _page(
                "0:1",
                "Page 1",
                {"id": "1", "name": "Nav Links", "type": "GROUP"},
                {"id": "2", "name": "Onboarding", "type": "SECTION"},
                {"id": "3", "name": "Icons", "type": "COMPONENT_SET"},
                {"id": "4", "name": "Divider", "type": "RECTANGLE"},
            )
        )
        categories = {e.text: e.category for e in extract_content_index(data)}
        assert categories["Nav Links"] == IndexCategory.GROUP
        assert categories["Onboarding"] == IndexCategory.SECTION
        assert categories["Icons"] == IndexCategory.COMPONENT
        assert "Divider" not in categories

    def test_nodes_without_id_skipped_with_subtree(self) -> None:
        """Test that a node without an id hides its whole subtree."""
        data = _file(
            _page(
                "0:1",
                "Page 1",
                {
                    "name": "Orphan",
                    "type": "FRAME",
                    "children": [{"id": "9", "name": "Hidden text", "type": "TEXT"}],
                },
            )
        )
        assert [e.text for e in extract_content_index(data)] == ["Page 1"]

    def test_duplicate_nodes_visited_once(self) -> None:
        """Test that a node reachable twice is indexed once, first visit wins."""
        shared = {
            "id": "9:1",
            "name": "Shared Card",
            "type": "FRAME",
            "children": [{"id": "9:2", "name": "Card copy", "type": "TEXT"}],
        }
        data = _file(_page("0:1", "First", shared), _page("0:2", "Second", shared))

        entries = extract_content_index(data)
        texts = [e.text for e in entries]

        assert texts.count("Shared Card") == 1
        assert texts.count("Card copy") == 1
        card = next(e for e in entries if e.text == "Shared Card")
        assert card.location == "First > Shared Card"

    def test_same_id_different_name_not_deduplicated(self) -> None:
        """Test that the visit key is the (id, name) pair."""
        data = _file(
            _page(
                "0:1",
                "Page 1",
                {"id": "1", "name": "Header", "type": "FRAME"},
                {"id": "1", "name": "Footer", "type": "FRAME"},
            )
        )
        texts = [e.text for e in extract_content_index(data)]
        assert "Header" in texts
        assert "Footer" in texts

    def test_empty_names_dropped_from_location(self) -> None:
        """Test that unnamed ancestors are left out of breadcrumbs."""
        data = _file(
            _page(
                "0:1",
                "Page 1",
                {
                    "id": "1",
                    "name": "",
                    "type": "GROUP",
                    "children": [{"id": "2", "name": "Footer", "type": "FRAME"}],
                },
            )
        )
        assert extract_content_index(data)[-1].location == "Page 1 > Footer"

    def test_custom_separator(self, design_file: dict[str, Any]) -> None:
        """Test a custom breadcrumb separator."""
        entries = ContentIndexer(separator=" / ").extract(design_file)
        assert entries[1].location == "Page 1 / Hero"

    @pytest.mark.parametrize(
        "file_data",
        [None, {}, {"document": None}, {"document": "tree"}, {"document": {"children": "x"}}, []],
    )
    def test_malformed_input(self, file_data: Any) -> None:
        """Test that malformed payloads yield no entries."""
        assert extract_content_index(file_data) == []

    def test_deep_tree(self) -> None:
        """Test that very deep documents do not hit the recursion limit."""
        node: dict[str, Any] = {"id": "leaf", "name": "Deep label", "type": "TEXT"}
        for depth in range(3000):
            node = {"id": f"g{depth}", "name": "", "type": "GROUP", "children": [node]}

        entries = extract_content_index(_file(_page("0:1", "Page 1", node)))
        assert entries[-1].text == "Deep label"
        assert entries[-1].location == "Page 1"

    def test_entries_serialize(self, design_file: dict[str, Any]) -> None:
        """Test the persisted entry shape."""
        entry = extract_content_index(design_file)[1]
        assert entry.to_dict() == {
            "text": "Hero",
            "location": "Page 1 > Hero",
            "type": "frame",
            "nodeId": "1:1",
        }
        assert IndexEntry.from_value(entry.to_dict()) == entry


class TestBuildManifest:
    """Tests for build_manifest."""

    def test_frames_per_page(self, design_file: dict[str, Any]) -> None:
        """Test that only frame children are listed per page."""
        assert build_manifest(design_file) == [
            {"name": "Page 1", "frames": ["Hero", "Pricing Table"]},
            {"name": "Components", "frames": []},
        ]

    def test_frame_cap(self) -> None:
        """Test that at most max_frames frames are listed."""
        frames = [{"id": str(i), "name": f"Screen {i}", "type": "FRAME"} for i in range(8)]
        data = _file(_page("0:1", "Flows", *frames))

        assert build_manifest(data)[0]["frames"] == [f"Screen {i}" for i in range(5)]
        assert len(build_manifest(data, max_frames=2)[0]["frames"]) == 2

    def test_malformed(self) -> None:
        """Test that a missing document yields an empty manifest."""
        assert build_manifest({}) == []


class TestParseFileKey:
    """Tests for parse_file_key."""

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("https://www.figma.com/file/abc123/Checkout-Flow", "abc123"),
            ("https://figma.com/file/XYZ?node-id=1-2", "XYZ"),
            ("https://github.com/acme/api-gateway", None),
            ("", None),
        ],
    )
    def test_parse(self, url: str, expected: str | None) -> None:
        """Test extracting the key from file URLs."""
        assert parse_file_key(url) == expected


class TestDetectSourceType:
    """Tests for detect_source_type."""

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("https://www.figma.com/file/abc123/Checkout-Flow", "figma"),
            ("https://www.figma.com/design/abc123/Checkout?node-id=1-2", "figma"),
            ("https://WWW.FIGMA.COM/proto/abc123", "figma"),
            ("https://www.figma.com/board/kq9/Retro", "figjam"),
            ("https://www.figjam.com/file/kq9", "figjam"),
            ("https://github.com/acme/api-gateway", "github"),
            ("https://gist.github.com/acme/1234", "github"),
            ("https://docs.google.com/document/d/1AbC/edit", "drive"),
            ("https://drive.google.com/file/d/1AbC/view", "drive"),
            ("https://example.com/spec.pdf", "drive"),
        ],
    )
    def test_detect(self, url: str, expected: str) -> None:
        """Test classifying each family of shared link."""
        assert detect_source_type(url) == expected
