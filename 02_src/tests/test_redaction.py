"""Tests for field redaction."""

from types import SimpleNamespace

from stream_archive.redaction import ARCHIVE_FIELDS, DEBUG_FIELDS, redact


class TestRedact:
    """Tests for redact()."""

    def test_none_returns_none(self):
        """Test redact(None) is None."""
        assert redact(None) is None

    def test_keeps_only_allowed_fields(self):
        """Test that unknown keys are dropped."""
        decoded = {"content": "hi", "user": {"nickname": "a"}, "rawBlob": "x" * 100}
        assert redact(decoded) == {"user": {"nickname": "a"}, "content": "hi"}

    def test_never_introduces_keys(self):
        """Test that output keys are a subset of input and allow-list."""
        decoded = {"count": 1, "other": 2}
        result = redact(decoded)
        assert set(result) <= set(decoded)
        assert set(result) <= set(ARCHIVE_FIELDS)

    def test_case_sensitive(self):
        """Test that keys must match exactly."""
        assert redact({"Content": "hi", "MEMBERCOUNT": 3}) == {}

    def test_none_values_are_kept(self):
        """Test that a present key with None value is kept."""
        assert redact({"gift": None}) == {"gift": None}

    def test_deterministic_key_order(self):
        """Test that output order follows the allow-list."""
        a = redact({"title": 1, "common": 2, "count": 3})
        b = redact({"count": 3, "common": 2, "title": 1})
        assert list(a) == list(b) == ["common", "count", "title"]

    def test_attribute_objects(self):
        """Test that decoded objects with attributes are supported."""
        decoded = SimpleNamespace(content="hello", total=5, secret="x")
        assert redact(decoded) == {"content": "hello", "total": 5}

    def test_debug_fields_extend_archive_fields(self):
        """Test the debugger allow-list."""
        decoded = {"effectId": 9, "content": "hi"}
        assert redact(decoded) == {"content": "hi"}
        assert redact(decoded, DEBUG_FIELDS) == {"content": "hi", "effectId": 9}

    def test_does_not_mutate_input(self):
        """Test purity."""
        decoded = {"content": "hi", "other": 1}
        redact(decoded)
        assert decoded == {"content": "hi", "other": 1}

    def test_sequences_and_strings_carry_no_fields(self):
        """Test that list/str methods such as count and title are not picked up."""
        assert redact(["a", "b"]) == {}
        assert redact(("a",)) == {}
        assert redact("some title text") == {}
        assert redact(b"raw") == {}

    def test_attribute_methods_are_ignored(self):
        """Test that callable attributes are never copied."""

        class Decoded:
            content = "hi"

            def count(self):
                return 1

        assert redact(Decoded()) == {"content": "hi"}
