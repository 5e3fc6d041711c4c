"""Unit tests for the store inspection script."""

from scripts.inspect_store import describe


class TestDescribe:
    """Tests for describe."""

    def test_session_summary_hides_tokens(self):
        raw = (
            '{"sub":"did:plc:alice","tokenSet":{"access_token":"secret",'
            '"expires_at":"2024-01-01T00:00:00Z"}}'
        )

        lines = describe("did:plc:alice", raw)

        assert lines == [
            "  -> Session for: did:plc:alice",
            "  -> Access Token expires: 2024-01-01T00:00:00+00:00",
        ]
        assert not any("secret" in line for line in lines)

    def test_non_session_value_is_previewed(self):
        lines = describe("s1", '{"handle":"alice.test"}')

        assert lines == ['  -> Value: {"handle":"alice.test"}...']

    def test_non_json_value_is_previewed(self):
        assert describe("x", "plain") == ["  -> Value: plain..."]

    def test_session_without_top_level_sub(self):
        """Sessions keeping sub only inside tokenSet are still summarized."""
        raw = (
            '{"tokenSet":{"sub":"did:plc:alice","access_token":"t",'
            '"expires_at":"2024-01-01T00:00:00Z"}}'
        )

        lines = describe("did:plc:alice", raw)

        assert lines == [
            "  -> Session for: unknown",
            "  -> Access Token expires: 2024-01-01T00:00:00+00:00",
        ]

    def test_session_with_epoch_expiry_and_no_expiry(self):
        epoch = describe("k", '{"sub":"did:plc:a","tokenSet":{"expires_at":1704067200}}')
        never = describe("k", '{"sub":"did:plc:a","tokenSet":{"access_token":"t"}}')

        assert epoch[1] == "  -> Access Token expires: 2024-01-01T00:00:00+00:00"
        assert never[1] == "  -> Access Token expires: never"

    def test_unparseable_expiry_is_shown_as_stored(self):
        lines = describe("k", '{"sub":"did:plc:a","tokenSet":{"expires_at":"soon"}}')

        assert lines[1] == "  -> Access Token expires: soon"
