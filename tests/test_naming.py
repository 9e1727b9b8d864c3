"""Tests for identifier conversion."""

import pytest

from gql_bindgen.core.naming import camel_case, is_snake_case, safe_name, safe_param_name, snake_case


class TestSnakeCase:
    """Tests for snake_case."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("userName", "user_name"),
            ("HTTPServer", "http_server"),
            ("IN_PROGRESS", "in_progress"),
            ("id", "id"),
            ("avatarURL", "avatar_url"),
            ("__typename", "typename"),
        ],
    )
    def test_conversions(self, name, expected):
        assert snake_case(name) == expected


class TestCamelCase:
    """Tests for camel_case."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("RED", "Red"),
            ("IN_PROGRESS", "InProgress"),
            ("episode", "Episode"),
            ("userRole", "UserRole"),
        ],
    )
    def test_conversions(self, name, expected):
        assert camel_case(name) == expected


class TestIsSnakeCase:
    """Tests for is_snake_case."""

    def test_snake_case_names(self):
        assert is_snake_case("user_name")

    def test_camel_case_names(self):
        assert not is_snake_case("userName")

    def test_single_word_is_not_flagged(self):
        assert not is_snake_case("name")


class TestSafeNames:
    """Tests for safe_name and safe_param_name."""

    def test_keywords_get_suffix(self):
        assert safe_name("class") == "class_"
        assert safe_name("from") == "from_"

    def test_plain_names_unchanged(self):
        assert safe_name("user") == "user"

    def test_resolver_params_get_suffix(self):
        assert safe_param_name("executor") == "executor_"
        assert safe_param_name("trail") == "trail_"
        assert safe_param_name("self") == "self_"

    def test_resolver_params_only_matter_for_arguments(self):
        assert safe_name("trail") == "trail"
