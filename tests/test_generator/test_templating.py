"""Tests for URL placeholder extraction and rendering."""

from __future__ import annotations

import pytest

from endpointkit.exceptions import MissingPathParameterError
from endpointkit.generator.templating import placeholders, render_path


# ---------------------------------------------------------------------------
# placeholders
# ---------------------------------------------------------------------------


class TestPlaceholders:
    def test_single_placeholder(self) -> None:
        assert placeholders("/fruit/:id") == ["id"]

    def test_multiple_placeholders_in_order(self) -> None:
        assert placeholders("/users/:user/posts/:post_id") == ["user", "post_id"]

    def test_hyphenated_name(self) -> None:
        assert placeholders("/orgs/:org-slug/members") == ["org-slug"]

    def test_no_placeholders(self) -> None:
        assert placeholders("/fruit") == []

    def test_colon_inside_segment_is_not_a_placeholder(self) -> None:
        assert placeholders("/time/10:30") == []

    def test_absolute_url(self) -> None:
        assert placeholders("https://api.example.com/fruit/:id") == ["id"]


# ---------------------------------------------------------------------------
# render_path
# ---------------------------------------------------------------------------


class TestRenderPath:
    def test_substitutes_value(self) -> None:
        assert render_path("/fruit/:id", {"id": "42"}) == "/fruit/42"

    def test_substitutes_all_placeholders(self) -> None:
        url = render_path("/users/:user/posts/:post", {"user": "ann", "post": 7})
        assert url == "/users/ann/posts/7"

    def test_placeholder_in_the_middle(self) -> None:
        assert render_path("/fruit/:id/reviews", {"id": "3"}) == "/fruit/3/reviews"

    def test_template_is_not_mutated_between_calls(self) -> None:
        template = "/fruit/:id"
        assert render_path(template, {"id": "1"}) == "/fruit/1"
        assert render_path(template, {"id": "2"}) == "/fruit/2"
        assert template == "/fruit/:id"

    def test_values_are_percent_encoded(self) -> None:
        assert render_path("/files/:name", {"name": "a b/c?"}) == "/files/a%20b%2Fc%3F"

    def test_extra_keys_are_ignored(self) -> None:
        assert render_path("/fruit/:id", {"id": "1", "other": "x"}) == "/fruit/1"

    def test_template_without_placeholders_is_unchanged(self) -> None:
        assert render_path("/fruit", {"id": "1"}) == "/fruit"

    @pytest.mark.parametrize(
        "values", [{}, {"id": None}, {"id": ""}, {"id": 0}, {"id": False}, {"id": []}]
    )
    def test_missing_value_raises(self, values: dict) -> None:
        with pytest.raises(MissingPathParameterError) as exc_info:
            render_path("/fruit/:id", values)
        assert exc_info.value.placeholder == "id"
        assert exc_info.value.template == "/fruit/:id"
        assert exc_info.value.exit_code == 3
