"""Tests for profile completeness scoring and social link validation."""

from drep_scoring.schemas.profile import ProfileMetadata
from drep_scoring.scorers.profile import profile_completeness, validated_social_links

# ─── Helpers ──────────────────────────────────────────────────────────────────


def _refs(*uris: str) -> dict:
    return {"references": [{"uri": u, "label": "Link"} for u in uris]}


# ─── Fields ───────────────────────────────────────────────────────────────────


class TestProfileFields:
    """Points per filled field."""

    def test_none(self):
        assert profile_completeness(None) == 0

    def test_empty(self):
        assert profile_completeness({}) == 0

    def test_given_name(self):
        assert profile_completeness({"givenName": "Alice"}) == 15

    def test_name_fallback(self):
        assert profile_completeness({"name": "Alice"}) == 15

    def test_jsonld_value(self):
        assert profile_completeness({"givenName": {"@value": "Alice"}}) == 15

    def test_blank_text_scores_nothing(self):
        assert profile_completeness({"givenName": "   ", "bio": {"@value": ""}}) == 0

    def test_non_text_values_score_nothing(self):
        assert profile_completeness({"objectives": 42, "bio": ["a", "b"]}) == 0

    def test_full_profile(self, full_metadata):
        assert profile_completeness(full_metadata) == 100

    def test_accepts_model(self, full_metadata):
        assert profile_completeness(ProfileMetadata.model_validate(full_metadata)) == 100

    def test_extra_keys_tolerated(self):
        assert profile_completeness({"givenName": "Alice", "paymentAddress": "addr1...", "@context": {}}) == 15

    def test_key_order_does_not_matter(self, full_metadata):
        reversed_metadata = dict(reversed(list(full_metadata.items())))
        assert profile_completeness(reversed_metadata) == profile_completeness(full_metadata)


# ─── Social links ─────────────────────────────────────────────────────────────


class TestSocialLinks:
    """Validated, deduplicated social references."""

    def test_two_links(self):
        assert profile_completeness(_refs("https://twitter.com/alice", "https://github.com/alice")) == 30

    def test_one_link_plus_unknown_domain(self):
        assert profile_completeness(_refs("https://twitter.com/alice", "https://unknown.example.com")) == 25

    def test_broken_uri_skipped(self):
        metadata = _refs("https://twitter.com/alice", "https://github.com/alice")
        assert profile_completeness(metadata, {"https://twitter.com/alice"}) == 25

    def test_broken_uri_matched_after_normalization(self):
        metadata = _refs("https://twitter.com/alice", "https://github.com/alice")
        assert profile_completeness(metadata, ["HTTPS://Twitter.com/alice/"]) == 25

    def test_duplicates_counted_once(self):
        metadata = _refs("https://twitter.com/alice", "https://twitter.com/alice/", "https://X.com/bob")
        assert len(validated_social_links(metadata)) == 2

    def test_same_link_twice_is_one_link(self):
        assert profile_completeness(_refs("https://x.com/alice", "https://X.com/alice/")) == 25

    def test_www_prefix_accepted(self):
        assert profile_completeness(_refs("https://www.github.com/alice", "https://www.linkedin.com/in/alice")) == 30

    def test_www_and_bare_host_are_one_link(self):
        metadata = _refs("https://twitter.com/alice", "https://www.twitter.com/alice")
        assert validated_social_links(metadata) == ["https://twitter.com/alice"]
        assert profile_completeness(metadata) == 25

    def test_broken_www_variant_excludes_link(self):
        metadata = _refs("https://twitter.com/alice", "https://github.com/alice")
        assert profile_completeness(metadata, {"https://www.twitter.com/alice"}) == 25

    def test_non_http_scheme_rejected(self):
        assert profile_completeness(_refs("ftp://github.com/alice")) == 0

    def test_invalid_uri_is_unverified_not_fatal(self):
        assert profile_completeness(_refs("not a url", "http://[broken", "https://github.com/alice")) == 25

    def test_malformed_references_ignored(self):
        assert profile_completeness({"references": ["https://x.com/alice", None]}) == 0
        assert profile_completeness({"references": "https://x.com/alice"}) == 0

    def test_reference_without_uri(self):
        assert profile_completeness({"references": [{"label": "Twitter"}]}) == 0

    def test_jsonld_uri(self):
        metadata = {"references": [{"uri": {"@value": "https://github.com/alice"}}]}
        assert profile_completeness(metadata) == 25
