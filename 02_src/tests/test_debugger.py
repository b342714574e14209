"""Tests for MessageDebugger."""

import json

from stream_archive.debugger import MessageDebugger


class TestDebuggerRecord:
    """Tests for record()."""

    def test_disabled_records_nothing(self, clock):
        """Test that a disabled debugger is silent."""
        debugger = MessageDebugger(clock=clock)
        debugger.record("A", {"content": "x"})
        assert debugger.get_stats() == []

    def test_counts_and_samples(self, clock):
        """Test counting and sample limit."""
        debugger = MessageDebugger(enabled=True, max_samples=2, clock=clock)
        for i in range(4):
            debugger.record("A", {"content": i, "junk": 1}, processed=True)
            clock.advance(10)

        stat = debugger.get_stats()[0]
        assert stat.count == 4
        assert stat.last_seen == clock.now - 10
        assert len(stat.samples) == 2
        assert debugger.get_samples("A") == [{"content": 0}, {"content": 1}]

    def test_samples_keep_effect_fields(self, clock):
        """Test the extended allow-list."""
        debugger = MessageDebugger(enabled=True, clock=clock)
        debugger.record("Effect", {"effectId": 7, "bannerId": 1, "junk": 0})
        assert debugger.get_samples("Effect") == [{"bannerId": 1, "effectId": 7}]

    def test_unprocessed_types(self, clock, tracker):
        """Test that unprocessed methods are listed and reported."""
        debugger = MessageDebugger(enabled=True, clock=clock, tracker=tracker)
        debugger.record("Known", {}, processed=True)
        debugger.record("Unknown", {}, processed=False)

        assert debugger.get_unprocessed_types() == ["Unknown"]
        assert tracker.get_events(event_types=["unprocessed_message"])

    def test_stats_sorted_by_count(self, clock):
        """Test ordering of get_stats()."""
        debugger = MessageDebugger(enabled=True, clock=clock)
        debugger.record("Rare", {}, processed=True)
        for _ in range(3):
            debugger.record("Common", {}, processed=True)

        assert [s.method for s in debugger.get_stats()] == ["Common", "Rare"]

    def test_samples_of_unknown_method(self, clock):
        """Test get_samples() for a method never seen."""
        assert MessageDebugger(enabled=True, clock=clock).get_samples("X") == []


class TestDebuggerExport:
    """Tests for clear() and export_json()."""

    def test_export_json(self, clock):
        """Test the JSON dump."""
        debugger = MessageDebugger(enabled=True, clock=clock)
        debugger.record("A", {"content": "hi"}, processed=True)

        data = json.loads(debugger.export_json())
        assert data["timestamp"] == clock.now
        assert data["stats"][0]["method"] == "A"
        assert data["stats"][0]["samples"][0]["data"] == {"content": "hi"}

    def test_clear(self, clock):
        """Test clear()."""
        debugger = MessageDebugger(enabled=True, clock=clock)
        debugger.record("A", {})
        debugger.clear()
        assert debugger.get_stats() == []


class TestDebuggerReport:
    """Tests for format_report()."""

    def test_report_lists_distribution_and_unprocessed(self, clock):
        """Test the text report of a mixed feed."""
        debugger = MessageDebugger(enabled=True, clock=clock)
        for _ in range(2):
            debugger.record("Chat", {"content": "hi"}, processed=True)
        debugger.record("Banner", {"bannerId": 7}, processed=False)

        lines = debugger.format_report()

        assert lines[1] == "Message types: 2"
        assert "1. [ok] Chat: 2" in lines
        assert "2. [--] Banner: 1" in lines
        assert lines[-1] == "1. Banner (1) sample: {'bannerId': 7}"

    def test_report_without_unprocessed(self, clock):
        """Test that a fully handled feed says so."""
        debugger = MessageDebugger(enabled=True, clock=clock)
        debugger.record("Chat", {}, processed=True)

        lines = debugger.format_report()

        assert lines[-2:] == ["Unprocessed types:", "none"]
