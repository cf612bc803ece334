"""Tests for the embed widget: option parsing, snippet generation, widget view."""

import pytest

from scribe_collection.exceptions import ValidationError
from scribe_collection.services.embed_service import (
    DEFAULT_EMBED_LIMIT,
    EmbedLayout,
    EmbedOptions,
    build_embed_url,
    build_embed_widget,
    embed_dimensions,
    embed_notes,
    excerpt_length_for,
    generate_embed_code,
    parse_embed_params,
    preview_iframe_src,
)
from tests.conftest import make_document

BASE = "https://scribe.test"


class TestParseEmbedParams:

    def test_defaults(self):
        assert parse_embed_params({}) == EmbedOptions(EmbedLayout.LIST, DEFAULT_EMBED_LIMIT)

    def test_grid_layout(self):
        assert parse_embed_params({"layout": "grid"}).layout == EmbedLayout.GRID

    def test_layout_case_insensitive(self):
        assert parse_embed_params({"layout": "GRID"}).layout == EmbedLayout.GRID

    def test_unknown_layout_falls_back_to_list(self):
        assert parse_embed_params({"layout": "carousel"}).layout == EmbedLayout.LIST

    @pytest.mark.parametrize("raw, expected", [
        ("3", 3),
        ("10", 10),
        ("8px", 8),
        ("abc", DEFAULT_EMBED_LIMIT),
        ("", DEFAULT_EMBED_LIMIT),
        ("0", DEFAULT_EMBED_LIMIT),
        ("-4", DEFAULT_EMBED_LIMIT),
    ])
    def test_limit(self, raw, expected):
        assert parse_embed_params({"limit": raw}).limit == expected


class TestDimensions:

    def test_list(self):
        dims = embed_dimensions(EmbedLayout.LIST)
        assert (dims.width, dims.height) == (400, 400)

    def test_grid(self):
        dims = embed_dimensions(EmbedLayout.GRID)
        assert (dims.width, dims.height) == (600, 500)

    def test_excerpt_lengths(self):
        assert excerpt_length_for(EmbedLayout.LIST) == 100
        assert excerpt_length_for(EmbedLayout.GRID) == 80


class TestEmbedUrl:

    def test_default_options_have_no_query(self):
        assert build_embed_url(BASE, "ada") == f"{BASE}/embed/collection/ada"

    def test_grid_layout_in_query(self):
        url = build_embed_url(BASE, "ada", EmbedOptions(layout=EmbedLayout.GRID))
        assert url == f"{BASE}/embed/collection/ada?layout=grid"

    def test_non_default_limit_in_query(self):
        url = build_embed_url(BASE, "ada", EmbedOptions(limit=3))
        assert url == f"{BASE}/embed/collection/ada?limit=3"

    def test_both_params(self):
        url = build_embed_url(BASE, "ada", EmbedOptions(EmbedLayout.GRID, 10))
        assert url == f"{BASE}/embed/collection/ada?layout=grid&limit=10"

    def test_username_encoded(self):
        assert build_embed_url(BASE, "a b") == f"{BASE}/embed/collection/a%20b"

    def test_blank_username_rejected(self):
        with pytest.raises(ValidationError):
            build_embed_url(BASE, "")

    def test_preview_src_always_has_both_params(self):
        src = preview_iframe_src(BASE, "ada", EmbedOptions())
        assert src == f"{BASE}/embed/collection/ada?layout=list&limit=6"


class TestEmbedCode:

    def test_list_snippet(self):
        code = generate_embed_code(BASE, "ada")
        assert code == (
            "<iframe\n"
            f'  src="{BASE}/embed/collection/ada"\n'
            '  width="400"\n'
            '  height="400"\n'
            '  frameborder="0"\n'
            '  style="border: 1px solid #e5e7eb; border-radius: 8px;">\n'
            "</iframe>"
        )

    def test_grid_snippet_dimensions(self):
        code = generate_embed_code(BASE, "ada", EmbedOptions(EmbedLayout.GRID, 4))
        assert f'src="{BASE}/embed/collection/ada?layout=grid&limit=4"' in code
        assert 'width="600"' in code
        assert 'height="500"' in code

    def test_limit_must_be_a_choice(self):
        with pytest.raises(ValidationError) as exc_info:
            generate_embed_code(BASE, "ada", EmbedOptions(limit=7))
        assert exc_info.value.details == {"field": "limit"}

    def test_notes(self):
        notes = embed_notes(EmbedOptions(EmbedLayout.GRID, 8))
        assert notes[0] == "Widget dimensions: 600px × 500px"
        assert notes[1] == "Shows up to 8 most recent documents"


class TestEmbedWidget:

    def _docs(self, n):
        return [
            make_document(doc_id=f"d{i}", slug=f"doc-{i}", content="word " * 60)
            for i in range(n)
        ]

    def test_limits_cards_and_shows_view_all(self, now):
        widget = build_embed_widget("ada", self._docs(8), EmbedOptions(limit=3), BASE, now)
        assert [c.id for c in widget.cards] == ["d0", "d1", "d2"]
        assert widget.show_view_all is True
        assert widget.view_all_text == "View all 8 documents →"
        assert widget.view_all_url == f"{BASE}/collection/ada"
        assert widget.count_text == "8 documents published"

    def test_no_view_all_when_everything_fits(self, now):
        widget = build_embed_widget("ada", self._docs(2), EmbedOptions(limit=6), BASE, now)
        assert len(widget.cards) == 2
        assert widget.show_view_all is False
        assert widget.view_all_text is None

    def test_list_excerpt_length(self, now):
        widget = build_embed_widget("ada", self._docs(1), EmbedOptions(), BASE, now)
        assert len(widget.cards[0].excerpt) <= 103

    def test_grid_excerpt_length(self, now):
        widget = build_embed_widget(
            "ada", self._docs(1), EmbedOptions(layout=EmbedLayout.GRID), BASE, now,
        )
        assert widget.layout == "grid"
        assert len(widget.cards[0].excerpt) <= 83

    def test_card_links_are_absolute(self, now):
        widget = build_embed_widget("ada", self._docs(1), EmbedOptions(), BASE, now)
        assert widget.cards[0].url == f"{BASE}/ada/doc-0"

    def test_empty(self, now):
        widget = build_embed_widget("ada", [], EmbedOptions(), BASE, now)
        assert widget.cards == []
        assert widget.count_text == "0 documents published"
        assert widget.empty_message == "No documents published yet."

    @pytest.mark.parametrize("limit", [0, -1])
    def test_non_positive_limit_rejected(self, now, limit):
        with pytest.raises(ValidationError) as exc_info:
            build_embed_widget("ada", self._docs(3), EmbedOptions(limit=limit), BASE, now)
        assert exc_info.value.details == {"field": "limit"}
