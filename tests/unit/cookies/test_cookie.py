# tests/unit/cookies/test_cookie.py

import pytest

from src.http_orchestrator.cookies.cookie import Cookie, SameSite
from src.http_orchestrator.core.exceptions import InvalidCookieError


class TestCookieParse:
    """Разбор Set-Cookie."""

    def test_name_and_value(self):
        cookie = Cookie.parse("session=abc123")
        assert cookie.name == "session"
        assert cookie.value == "abc123"
        assert cookie.domain is None
        assert cookie.path is None
        assert cookie.secure is False
        assert cookie.http_only is False

    def test_all_attributes(self):
        cookie = Cookie.parse(
            "id=xyz; Domain=.example.com; Path=/api; Max-Age=3600; "
            "Secure; HttpOnly; SameSite=Strict"
        )
        assert cookie.name == "id"
        assert cookie.value == "xyz"
        assert cookie.domain == ".example.com"
        assert cookie.path == "/api"
        assert cookie.max_age == 3600
        assert cookie.secure is True
        assert cookie.http_only is True
        assert cookie.same_site is SameSite.STRICT

    def test_attribute_names_case_insensitive(self):
        cookie = Cookie.parse("a=1; DOMAIN=example.com; path=/x; max-age=5; SECURE; httponly; samesite=lax")
        assert cookie.domain == "example.com"
        assert cookie.path == "/x"
        assert cookie.max_age == 5
        assert cookie.secure is True
        assert cookie.http_only is True
        assert cookie.same_site is SameSite.LAX

    def test_whitespace_trimmed(self):
        cookie = Cookie.parse("  name  =  value  ;  Path = /p ")
        assert cookie.name == "name"
        assert cookie.value == "value"
        assert cookie.path == "/p"

    def test_missing_equals_gives_empty_value(self):
        cookie = Cookie.parse("flag; Path=/")
        assert cookie.name == "flag"
        assert cookie.value == ""

    def test_value_may_contain_equals(self):
        assert Cookie.parse("token=a=b=c").value == "a=b=c"

    def test_empty_value(self):
        cookie = Cookie.parse("name=")
        assert cookie.name == "name"
        assert cookie.value == ""

    @pytest.mark.parametrize("max_age", ["abc", "1.5", "1_000", ""])
    def test_malformed_max_age_ignored(self, max_age):
        cookie = Cookie.parse(f"a=1; Max-Age={max_age}")
        assert cookie.max_age is None

    def test_negative_max_age(self):
        assert Cookie.parse("a=1; Max-Age=-1").max_age == -1

    def test_unknown_samesite_ignored(self):
        assert Cookie.parse("a=1; SameSite=Sometimes").same_site is None

    def test_unknown_attributes_ignored(self):
        cookie = Cookie.parse("a=1; Priority=High; Partitioned")
        assert cookie.name == "a"
        assert cookie.value == "1"

    def test_expires_recognized_but_not_interpreted(self):
        cookie = Cookie.parse("a=1; Expires=Wed, 09 Jun 2021 10:18:14 GMT")
        assert cookie.expires is None
        assert cookie.is_expired() is False

    def test_bytes_input(self):
        cookie = Cookie.parse(b"sid=caf\xe9; Path=/")
        assert cookie.value == "café"

    @pytest.mark.parametrize("value", ["", "   ", "; Path=/", "=value", " = x; Secure"])
    def test_invalid_values_raise(self, value):
        with pytest.raises(InvalidCookieError):
            Cookie.parse(value)

    def test_name_immutable(self):
        cookie = Cookie.parse("a=1")
        with pytest.raises(AttributeError):
            cookie.name = "b"

    def test_value_mutable(self):
        cookie = Cookie.parse("a=1")
        cookie.value = "2"
        assert cookie.to_header_fragment() == "a=2"


class TestCookieExpiry:
    def test_session_cookie_never_expires(self):
        assert Cookie.parse("a=1").is_expired() is False

    @pytest.mark.parametrize("max_age,expired", [(0, True), (-5, True), (1, False), (3600, False)])
    def test_max_age(self, max_age, expired):
        assert Cookie.parse(f"a=1; Max-Age={max_age}").is_expired() is expired

    def test_absolute_expiry(self):
        cookie = Cookie(name="a", value="1", expires=1000.0)
        assert cookie.is_expired(now=999.0) is False
        assert cookie.is_expired(now=1001.0) is True

    def test_max_age_wins_over_expires(self):
        cookie = Cookie(name="a", value="1", max_age=60, expires=1000.0)
        assert cookie.is_expired(now=5000.0) is False


class TestCookieDomainMatching:
    def test_no_domain_matches_any_host(self):
        cookie = Cookie.parse("a=1")
        assert cookie.matches_domain("example.com")
        assert cookie.matches_domain("other.org")

    def test_exact_domain(self):
        cookie = Cookie.parse("a=1; Domain=example.com")
        assert cookie.matches_domain("example.com")
        assert not cookie.matches_domain("api.example.com")

    def test_leading_dot_matches_domain_and_subdomains(self):
        cookie = Cookie.parse("a=1; Domain=.example.com")
        assert cookie.matches_domain("example.com")
        assert cookie.matches_domain("api.example.com")
        assert cookie.matches_domain("a.b.example.com")

    def test_leading_dot_does_not_match_suffix_lookalike(self):
        cookie = Cookie.parse("a=1; Domain=.example.com")
        assert not cookie.matches_domain("notexample.com")
        assert not cookie.matches_domain("example.org")

    def test_domain_attribute_lowercased(self):
        cookie = Cookie.parse("a=1; Domain=.Example.COM")
        assert cookie.domain == ".example.com"
        assert cookie.matches_domain("API.example.com")
        assert cookie.matches_domain("example.com")


class TestCookiePathMatching:
    def test_no_path_matches_any_path(self):
        assert Cookie.parse("a=1").matches_path("/anything")

    def test_exact_path(self):
        assert Cookie.parse("a=1; Path=/api").matches_path("/api")

    def test_prefix_at_slash_boundary(self):
        cookie = Cookie.parse("a=1; Path=/api")
        assert cookie.matches_path("/api/users")
        assert not cookie.matches_path("/apix")
        assert not cookie.matches_path("/other")

    def test_prefix_ending_in_slash(self):
        cookie = Cookie.parse("a=1; Path=/api/")
        assert cookie.matches_path("/api/users")
        assert not cookie.matches_path("/api")

    def test_root_path(self):
        cookie = Cookie.parse("a=1; Path=/")
        assert cookie.matches_path("/")
        assert cookie.matches_path("/deep/path")


class TestCookieRendering:
    def test_header_fragment(self):
        assert Cookie.parse("sid=abc; Path=/; Secure").to_header_fragment() == "sid=abc"

    def test_str(self):
        assert str(Cookie.parse("x=")) == "x="

    def test_key_defaults(self):
        assert Cookie.parse("a=1").key == ("a", "", "")
        assert Cookie.parse("a=1; Domain=d; Path=/p").key == ("a", "d", "/p")
