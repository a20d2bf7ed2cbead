"""Tests for utility helpers."""

import pytest

from app.components.sync import ItemPatch, UnsupportedFieldError
from app.utils import extract_youtube_id, generate_id


class TestExtractYoutubeId:
    @pytest.mark.parametrize(
        "url,expected",
        [
            ("https://www.youtube.com/watch?v=dQw4w9WgXcQ", "dQw4w9WgXcQ"),
            ("https://m.youtube.com/watch?v=abc123&t=30", "abc123"),
            ("https://youtu.be/dQw4w9WgXcQ", "dQw4w9WgXcQ"),
            ("https://www.youtube.com/feed", None),
            ("https://vimeo.com/12345", None),
            ("not a url", None),
            ("", None),
            (None, None),
        ],
    )
    def test_extract(self, url, expected):
        assert extract_youtube_id(url) == expected


class TestGenerateId:
    def test_prefix(self):
        assert generate_id("item").startswith("item_")

    def test_unique(self):
        assert len({generate_id("file") for _ in range(50)}) == 50

    def test_never_temporary(self):
        assert not generate_id("item").startswith("temp-")


class TestItemPatch:
    def test_single_field(self):
        assert ItemPatch.from_field("title", "Hello").changes() == {"title": "Hello"}

    def test_youtube_url_derives_id(self):
        patch = ItemPatch.from_field("youtube_url", "https://youtu.be/xyz")
        assert patch.changes() == {"youtube_url": "https://youtu.be/xyz", "youtube_id": "xyz"}

    def test_underivable_youtube_id_is_null(self):
        patch = ItemPatch.from_field("youtube_url", "https://example.com/video")
        assert patch.changes() == {"youtube_url": "https://example.com/video", "youtube_id": None}

    def test_explicit_null_is_a_change(self):
        assert ItemPatch.from_field("description", None).changes() == {"description": None}

    @pytest.mark.parametrize("field", ["youtube_id", "workspace_id", "id", None, "nonsense"])
    def test_rejects_unpatchable_fields(self, field):
        with pytest.raises(UnsupportedFieldError):
            ItemPatch.from_field(field, "x")

    def test_from_mapping_keeps_explicit_youtube_id(self):
        patch = ItemPatch.from_mapping({"youtube_url": "https://youtu.be/xyz", "youtube_id": "custom"})
        assert patch.changes()["youtube_id"] == "custom"

    def test_empty_patch(self):
        assert ItemPatch().is_empty()

    @pytest.mark.parametrize("value", ["false", "true", 0, 1, None])
    def test_boolean_fields_require_real_booleans(self, value):
        with pytest.raises(ValueError, match="must be a boolean"):
            ItemPatch.from_field("completed", value)
        with pytest.raises(ValueError, match="must be a boolean"):
            ItemPatch.from_field("active", value)

    def test_boolean_false_is_accepted(self):
        assert ItemPatch.from_field("completed", False).changes() == {"completed": False}
