"""Tests for caromar.utils.validation."""

from __future__ import annotations

import pytest

from caromar.utils.validation import (
    is_valid_owner_name,
    is_valid_repo_path,
    is_valid_repository_name,
    is_valid_token,
    is_valid_url,
    normalize_pagination,
    normalize_sort_key,
    sanitize,
)


class TestOwnerName:
    @pytest.mark.parametrize("name", ["octocat", "a", "my-org", "user123", "A1-b2-C3", "a" * 39])
    def test_valid(self, name):
        assert is_valid_owner_name(name)

    @pytest.mark.parametrize(
        "name",
        ["", "-bad", "bad-", "a" * 40, "has space", "under_score", "dot.name", "<x>"],
    )
    def test_invalid(self, name):
        assert not is_valid_owner_name(name)

    @pytest.mark.parametrize("value", [None, 123, ["octocat"]])
    def test_non_string(self, value):
        assert not is_valid_owner_name(value)


class TestRepositoryName:
    @pytest.mark.parametrize("name", ["repo", "my.repo", "my_repo-2", ".github", "a" * 100])
    def test_valid(self, name):
        assert is_valid_repository_name(name)

    @pytest.mark.parametrize("name", ["", ".", "..", "a" * 101, "bad/name", "bad name", "naïve", None])
    def test_invalid(self, name):
        assert not is_valid_repository_name(name)


class TestToken:
    def test_length_bounds(self):
        assert not is_valid_token("x" * 39)
        assert is_valid_token("x" * 40)
        assert is_valid_token("x" * 255)
        assert not is_valid_token("x" * 256)

    def test_non_string(self):
        assert not is_valid_token(None)
        assert not is_valid_token(12345)


class TestSanitize:
    def test_strips_angle_brackets_keeps_text(self):
        assert sanitize("<script>alert(1)</script>") == "scriptalert(1)/script"

    def test_non_string_is_empty(self):
        assert sanitize(123) == ""
        assert sanitize(None) == ""

    def test_trims_and_truncates(self):
        assert sanitize("  hello  ") == "hello"
        assert len(sanitize("a" * 5000)) == 1000

    @pytest.mark.parametrize("text", ["  <b>x</b>  ", "plain", "<<>>", " a < b > c "])
    def test_idempotent(self, text):
        once = sanitize(text)
        assert sanitize(once) == once


class TestRepoPath:
    @pytest.mark.parametrize("path", [None, "", "README.md", "src/main.py", "docs/a-b_c.d/e"])
    def test_valid(self, path):
        assert is_valid_repo_path(path)

    @pytest.mark.parametrize(
        "path",
        ["/etc/passwd", "../secret", "src/../../x", "a/..", "dir\\file", "a b", "a?b=c", "a" * 1001],
    )
    def test_invalid(self, path):
        assert not is_valid_repo_path(path)

    def test_dots_inside_names_are_fine(self):
        assert is_valid_repo_path("a..b/c")

    def test_non_string(self):
        assert not is_valid_repo_path(42)


class TestPagination:
    def test_negative_page(self):
        assert normalize_pagination(-5, 10) == (1, 10)

    def test_garbage(self):
        assert normalize_pagination("abc", "xyz") == (1, 30)

    def test_per_page_clamped(self):
        assert normalize_pagination(1, 500) == (1, 100)
        assert normalize_pagination(1, -3) == (1, 1)

    def test_zero_per_page_uses_default(self):
        assert normalize_pagination(0, 0) == (1, 30)

    def test_numeric_strings(self):
        assert normalize_pagination("3", "50") == (3, 50)
        assert normalize_pagination("2abc", "7.9") == (2, 7)

    def test_none(self):
        assert normalize_pagination(None, None) == (1, 30)

    @pytest.mark.parametrize("page", [-100, 0, 1, 7, "x", None, 2.5, float("nan")])
    @pytest.mark.parametrize("per_page", [-1, 0, 1, 99, 100, 101, "y", None])
    def test_always_in_bounds(self, page, per_page):
        p, pp = normalize_pagination(page, per_page)
        assert p >= 1
        assert 1 <= pp <= 100


class TestSortKey:
    ALLOWED = ["updated", "created", "pushed", "full_name"]

    def test_allowed_passes_through(self):
        assert normalize_sort_key("created", self.ALLOWED) == "created"

    def test_unknown_falls_back_to_first(self):
        assert normalize_sort_key("stars", self.ALLOWED) == "updated"
        assert normalize_sort_key(None, self.ALLOWED) == "updated"


class TestUrl:
    def test_valid(self):
        assert is_valid_url("https://github.com/octocat/hello.git")

    @pytest.mark.parametrize(
        "url",
        [
            "",
            None,
            "ftp://x/y",
            "github.com/x",
            "https://github.com/x.git; rm -rf ~",
            "javascript:alert(1)",
            "https://x/$(id)",
            "https://x/a;b",
            "https://x/`id`",
            "https://x/a\"b",
        ],
    )
    def test_invalid(self, url):
        assert not is_valid_url(url)
