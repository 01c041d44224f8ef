"""Tests for the path parser."""

import pytest

from modelpath import (
    AttributeAccess,
    CollectionItemAccess,
    PathSyntaxError,
    check_path,
    parse,
)


class TestAccepts:
    def test_single_attribute(self):
        assert parse("name") == (AttributeAccess("name", "name"),)

    def test_attribute_chain(self):
        assert parse("manufacturer.name") == (
            AttributeAccess("manufacturer", "manufacturer"),
            AttributeAccess("name", ".name"),
        )

    def test_index_then_attribute(self):
        assert parse("reviews[1].title") == (
            AttributeAccess("reviews", "reviews"),
            CollectionItemAccess(1, "[1]"),
            AttributeAccess("title", ".title"),
        )

    def test_leading_index(self):
        assert parse("[1].title") == (
            CollectionItemAccess(1, "[1]"),
            AttributeAccess("title", ".title"),
        )

    def test_consecutive_indexes(self):
        assert parse("grid[2][10]") == (
            AttributeAccess("grid", "grid"),
            CollectionItemAccess(2, "[2]"),
            CollectionItemAccess(10, "[10]"),
        )

    def test_names_with_underscores_and_digits(self):
        nodes = parse("_private.field_2.Country_Code")
        assert [n.name for n in nodes] == ["_private", "field_2", "Country_Code"]

    def test_surrounding_whitespace_stripped(self):
        assert parse("  name") == parse("name")
        assert parse("name  ") == parse("name")
        assert parse("\t manufacturer.name \n") == parse("manufacturer.name")

    def test_empty_path_is_root(self):
        assert parse("") == ()
        assert parse("   ") == ()

    def test_nodes_are_immutable(self):
        node = parse("name")[0]
        with pytest.raises(AttributeError):
            node.name = "other"


class TestRejects:
    @pytest.mark.parametrize(
        "path",
        [
            "9asdf",
            "reviews name",
            "reviews[asdf]",
            "reviews[0ddf]",
            "reviews[asd0]",
            "reviews[  0]",
            "reviews[0  ]",
            "reviews[ 1 ].title",
            "manufacturer.",
            ".manufacturer",
            "reviews[]",
            "reviews[1",
            "reviews[-1]",
            "manufacturer..name",
            "manufacturer.9name",
            "reviews[1]title",
            "name!",
        ],
    )
    def test_malformed(self, path):
        with pytest.raises(PathSyntaxError):
            parse(path)

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse("9asdf")

    def test_not_a_string(self):
        with pytest.raises(TypeError):
            parse(None)


class TestErrorReporting:
    def test_position_of_leading_digit(self):
        with pytest.raises(PathSyntaxError) as info:
            parse("9asdf")
        assert info.value.position == 0
        assert info.value.path == "9asdf"

    def test_position_of_embedded_whitespace(self):
        with pytest.raises(PathSyntaxError) as info:
            parse("reviews name")
        assert info.value.position == 7
        assert "whitespace" in info.value.description

    def test_position_of_trailing_dot(self):
        with pytest.raises(PathSyntaxError) as info:
            parse("manufacturer.")
        assert info.value.position == len("manufacturer.")

    def test_position_inside_index(self):
        with pytest.raises(PathSyntaxError) as info:
            parse("reviews[0ddf]")
        assert info.value.position == len("reviews[0")
        assert "']'" in info.value.description

    def test_message(self):
        with pytest.raises(PathSyntaxError) as info:
            parse(".manufacturer")
        assert str(info.value).startswith(
            "Unexpected syntax at position 0 in model path '.manufacturer':"
        )


class TestCheckPath:
    def test_valid(self):
        assert check_path("reviews[1].title") is None

    def test_invalid_returns_error(self):
        error = check_path("reviews[x]")
        assert isinstance(error, PathSyntaxError)
        assert error.position == len("reviews[")
