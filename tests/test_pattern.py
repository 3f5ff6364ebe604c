"""Tests for waypoint.routing.pattern — template compilation."""

import re

import pytest

from waypoint.errors import InvalidPattern
from waypoint.routing.pattern import CompiledPattern, compile_pattern


class TestCompileLiteral:
    def test_no_placeholders(self) -> None:
        pattern = compile_pattern("/about")
        assert pattern.param_names == ()
        assert pattern.match("/about") == {}

    def test_anchored_at_start(self) -> None:
        assert compile_pattern("/about").match("/x/about") is None

    def test_anchored_at_end(self) -> None:
        assert compile_pattern("/about").match("/about/team") is None

    def test_trailing_newline_rejected(self) -> None:
        assert compile_pattern("/about").match("/about\n") is None

    def test_dot_is_literal(self) -> None:
        pattern = compile_pattern("/feed.xml")
        assert pattern.match("/feed.xml") == {}
        assert pattern.match("/feedxxml") is None

    def test_parentheses_are_literal(self) -> None:
        pattern = compile_pattern("/legacy/(old)")
        assert pattern.match("/legacy/(old)") == {}
        assert pattern.match("/legacy/old") is None

    def test_root(self) -> None:
        assert compile_pattern("/").match("/") == {}


class TestPlaceholders:
    def test_single(self) -> None:
        assert compile_pattern("/users/{id}").match("/users/42") == {"id": "42"}

    def test_multiple(self) -> None:
        pattern = compile_pattern("/users/{user}/posts/{post}")
        assert pattern.param_names == ("user", "post")
        assert pattern.match("/users/alice/posts/7") == {"user": "alice", "post": "7"}

    def test_names_with_dots_and_dashes(self) -> None:
        pattern = compile_pattern("/items/{item.id}/{sort-key}")
        assert pattern.match("/items/9/price") == {"item.id": "9", "sort-key": "price"}

    def test_value_charset(self) -> None:
        pattern = compile_pattern("/files/{name}")
        assert pattern.match("/files/report_2024-v1.2") == {"name": "report_2024-v1.2"}
        assert pattern.match("/files/a/b") is None
        assert pattern.match("/files/a%20b") is None

    def test_empty_value_rejected(self) -> None:
        assert compile_pattern("/users/{id}").match("/users/") is None

    def test_placeholder_inside_segment(self) -> None:
        pattern = compile_pattern("/archive/{year}-{month}.html")
        assert pattern.match("/archive/2024-05.html") == {"year": "2024", "month": "05"}

    def test_malformed_placeholder_stays_literal(self) -> None:
        pattern = compile_pattern("/raw/{}")
        assert pattern.param_names == ()
        assert pattern.match("/raw/{}") == {}

    def test_colon_placeholder_stays_literal(self) -> None:
        pattern = compile_pattern("/users/{id:int}")
        assert pattern.param_names == ()
        assert pattern.match("/users/42") is None

    @pytest.mark.parametrize(
        ("template", "values"),
        [
            ("/orders/{id}", {"id": "77"}),
            ("/{lang}/docs/{page}", {"lang": "en", "page": "getting-started"}),
            ("/a/{x}/b/{y}/c/{z}", {"x": "1", "y": "Two.2", "z": "three_3"}),
        ],
    )
    def test_substituted_values_are_recovered(self, template: str, values: dict[str, str]) -> None:
        path = template
        for key, value in values.items():
            path = path.replace("{" + key + "}", value)
        assert compile_pattern(template).match(path) == values


class TestCaseSensitivity:
    def test_insensitive_by_default(self) -> None:
        assert compile_pattern("/users/{id}").match("/USERS/42") == {"id": "42"}

    def test_sensitive(self) -> None:
        assert compile_pattern("/users/{id}", case_sensitive=True).match("/USERS/42") is None

    def test_sensitive_still_matches_exact_case(self) -> None:
        pattern = compile_pattern("/users/{id}", case_sensitive=True)
        assert pattern.match("/users/42") == {"id": "42"}

    def test_captured_value_keeps_input_case(self) -> None:
        assert compile_pattern("/tags/{tag}").match("/TAGS/Python") == {"tag": "Python"}

    def test_flag_on_regex(self) -> None:
        assert compile_pattern("/x").regex.flags & re.IGNORECASE
        assert not compile_pattern("/x", case_sensitive=True).regex.flags & re.IGNORECASE

    @pytest.mark.parametrize(
        ("template", "path"),
        [
            ("/users/{id}", "/users/K"),  # Kelvin sign
            ("/users", "/uſers"),  # long s
            ("/t/{x}", "/t/ı"),  # dotless i
        ],
    )
    def test_no_unicode_case_folding(self, template: str, path: str) -> None:
        assert compile_pattern(template).match(path) is None

    def test_ascii_case_folding_still_applies(self) -> None:
        assert compile_pattern("/users/{id}").match("/USERS/K") == {"id": "K"}


class TestInvalidTemplates:
    @pytest.mark.parametrize(
        "template",
        ["/users/*", "/search?q", "/a b", "/price/$", "/x|y", "/café", "/a+"],
    )
    def test_disallowed_characters(self, template: str) -> None:
        with pytest.raises(InvalidPattern) as exc_info:
            compile_pattern(template)
        assert exc_info.value.template == template
        assert "not allowed" in exc_info.value.reason

    def test_duplicate_placeholder(self) -> None:
        with pytest.raises(InvalidPattern, match="more than once"):
            compile_pattern("/{id}/{id}")

    def test_default_delimiters_not_allowed_with_custom(self) -> None:
        with pytest.raises(InvalidPattern):
            compile_pattern("/users/{id}", delimiters=("<", ">"))


class TestCustomDelimiters:
    def test_angle_brackets(self) -> None:
        pattern = compile_pattern("/users/<id>", delimiters=("<", ">"))
        assert pattern.match("/users/42") == {"id": "42"}

    def test_same_char_both_sides(self) -> None:
        pattern = compile_pattern("/users/:id:", delimiters=(":", ":"))
        assert pattern.match("/users/42") == {"id": "42"}


class TestCompiledPattern:
    def test_frozen(self) -> None:
        pattern = compile_pattern("/x")
        with pytest.raises(AttributeError):
            pattern.template = "/y"  # type: ignore[misc]

    def test_pure(self) -> None:
        assert compile_pattern("/users/{id}") == compile_pattern("/users/{id}")

    def test_is_compiled_pattern(self) -> None:
        assert isinstance(compile_pattern("/x"), CompiledPattern)
