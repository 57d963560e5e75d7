"""Tests for URL building and query string encoding."""

import pytest

from fetch_client.core.url_builder import append_params, build_url


class TestBuildUrl:
    """Test base_url + path joining."""

    @pytest.mark.parametrize("base, path", [
        ("https://api.example.com", "/users"),
        ("https://api.example.com/", "/users"),
        ("https://api.example.com", "users"),
        ("https://api.example.com/", "users"),
    ])
    def test_single_slash_between_base_and_path(self, base, path):
        """Exactly one slash joins base and path."""
        assert build_url(base, path) == "https://api.example.com/users"

    def test_absolute_url_bypasses_base(self):
        """Absolute URLs are used as-is."""
        assert build_url("https://api.example.com", "https://other.com/x") == "https://other.com/x"
        assert build_url("https://api.example.com", "http://other.com/x") == "http://other.com/x"

    def test_absolute_url_scheme_is_case_insensitive(self):
        """HTTPS:// is recognised as absolute."""
        assert build_url("https://api.example.com", "HTTPS://other.com/x") == "HTTPS://other.com/x"

    def test_empty_base_returns_path(self):
        """Without base_url the path is returned untouched."""
        assert build_url("", "/users") == "/users"
        assert build_url(None, "users") == "users"

    def test_base_with_path_prefix(self):
        """Path prefix of base_url is kept."""
        assert build_url("https://api.example.com/v1/", "/users") == "https://api.example.com/v1/users"

    def test_non_string_path_raises(self):
        """Non-string URL is a type error."""
        with pytest.raises(TypeError, match="URL must be a string"):
            build_url("https://api.example.com", 123)


class TestAppendParams:
    """Test query string encoding."""

    def test_params_in_insertion_order(self):
        """Key order is preserved."""
        assert append_params("/users", {"page": 1, "size": 20}) == "/users?page=1&size=20"

    def test_none_values_are_skipped(self):
        """None-valued keys are omitted."""
        assert append_params("/users", {"page": 1, "q": None}) == "/users?page=1"

    def test_all_none_leaves_url_unchanged(self):
        """No '?' is added when every value is None."""
        assert append_params("/users", {"q": None}) == "/users"

    def test_empty_params(self):
        """Empty mapping and None leave the URL unchanged."""
        assert append_params("/users", {}) == "/users"
        assert append_params("/users", None) == "/users"

    def test_existing_query_uses_ampersand(self):
        """Params are appended with '&' when URL already has a query."""
        assert append_params("/users?page=1", {"size": 20}) == "/users?page=1&size=20"

    def test_values_are_stringified(self):
        """Booleans become lower-case, numbers become strings."""
        assert append_params("/x", {"active": True, "deleted": False, "ratio": 0.5}) == (
            "/x?active=true&deleted=false&ratio=0.5"
        )

    def test_values_are_url_encoded(self):
        """Reserved characters are percent-encoded."""
        assert append_params("/search", {"q": "a&b=c"}) == "/search?q=a%26b%3Dc"

    def test_non_mapping_params_raise(self):
        """Params must be a mapping."""
        with pytest.raises(TypeError):
            append_params("/users", [("page", 1)])
