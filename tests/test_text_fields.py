"""Tests for JSON-LD text resolution and URL helpers."""

from drep_scoring.utils.text_fields import has_inline_rationale, inline_rationale_text, resolve_text_field
from drep_scoring.utils.url_helpers import get_host, is_social_uri, is_validated_social_link, normalize_uri


class TestResolveTextField:
    """Plain string or {"@value": str} only."""

    def test_plain_string(self):
        assert resolve_text_field("Alice") == "Alice"

    def test_jsonld_wrapper(self):
        assert resolve_text_field({"@value": "Alice"}) == "Alice"

    def test_other_shapes(self):
        assert resolve_text_field(None) is None
        assert resolve_text_field(42) is None
        assert resolve_text_field({"label": "Alice"}) is None
        assert resolve_text_field({"@value": 42}) is None
        assert resolve_text_field(["Alice"]) is None


class TestInlineRationale:
    """Payload walking for CIP-100/108 shapes."""

    def test_comment_preferred(self):
        payload = {"rationale": "top", "body": {"comment": "comment", "rationale": "body"}}
        assert inline_rationale_text(payload) == "comment"

    def test_falls_through_blank_values(self):
        payload = {"body": {"comment": "  ", "rationale": "", "motivation": "why"}}
        assert inline_rationale_text(payload) == "why"

    def test_jsonld_nested(self):
        assert inline_rationale_text({"body": {"comment": {"@value": "wrapped"}}}) == "wrapped"

    def test_non_mapping_payload(self):
        assert inline_rationale_text(None) is None
        assert inline_rationale_text({"body": "not a dict"}) is None

    def test_presence_ignores_motivation(self):
        assert has_inline_rationale({"body": {"motivation": "why"}}) is False
        assert has_inline_rationale({"body": {"rationale": "because"}}) is True


class TestUrlHelpers:
    """Normalization and social-domain checks."""

    def test_normalize_lowercases_scheme_and_host(self):
        assert normalize_uri("HTTPS://X.com/Alice/") == "https://x.com/Alice"

    def test_normalize_drops_www(self):
        assert normalize_uri("https://WWW.Twitter.com/alice") == "https://twitter.com/alice"

    def test_normalize_keeps_query(self):
        assert normalize_uri("https://youtube.com/watch?v=abc") == "https://youtube.com/watch?v=abc"

    def test_normalize_non_url(self):
        assert normalize_uri("  not a url ") == "not a url"

    def test_get_host(self):
        assert get_host("https://www.GitHub.com/alice") == "github.com"
        assert get_host("mailto:alice@example.com") is None

    def test_social_domains(self):
        assert is_social_uri("https://t.me/alice")
        assert not is_social_uri("https://github.io/alice")
        assert not is_social_uri("https://evilgithub.com/alice")

    def test_validated_respects_broken(self):
        assert is_validated_social_link("https://x.com/alice")
        assert not is_validated_social_link("https://x.com/alice", {"https://x.com/alice/"})
