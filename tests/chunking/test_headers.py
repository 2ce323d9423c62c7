"""Tests for the heading-hierarchy tracker."""

from docchunk.services.chunking.headers import MAX_HEADER_DEPTH, HeaderContextTracker, HeaderFrame


class TestHeaderContextTracker:
    def test_starts_empty(self):
        tracker = HeaderContextTracker()
        assert tracker.ancestry() == []
        assert len(tracker) == 0

    def test_nesting_builds_ancestry(self):
        tracker = HeaderContextTracker()
        assert tracker.enter(1, "A") == []
        assert tracker.enter(2, "B") == ["A"]
        assert tracker.enter(3, "C") == ["A", "B"]
        assert tracker.ancestry() == ["A", "B", "C"]

    def test_sibling_closes_previous_scope(self):
        tracker = HeaderContextTracker()
        tracker.enter(1, "A")
        tracker.enter(2, "B1")
        tracker.enter(3, "Deep")
        assert tracker.enter(2, "B2") == ["A"]
        assert tracker.ancestry() == ["A", "B2"]

    def test_shallower_heading_pops_everything_deeper(self):
        tracker = HeaderContextTracker()
        for level, text in [(1, "A"), (2, "B"), (3, "C"), (4, "D")]:
            tracker.enter(level, text)
        tracker.enter(1, "Z")
        assert tracker.ancestry() == ["Z"]

    def test_skipped_levels_keep_stack_increasing(self):
        tracker = HeaderContextTracker()
        tracker.enter(1, "A")
        tracker.enter(4, "D")
        tracker.enter(3, "C")
        assert tracker.frames() == (HeaderFrame(1, "A"), HeaderFrame(3, "C"))

    def test_depth_is_capped(self):
        tracker = HeaderContextTracker()
        for level in range(1, 10_001):
            tracker.enter(level, f"h{level}")
        assert len(tracker) == MAX_HEADER_DEPTH
        assert tracker.ancestry() == [f"h{level}" for level in range(1, MAX_HEADER_DEPTH + 1)]

    def test_ancestry_is_a_snapshot(self):
        tracker = HeaderContextTracker()
        tracker.enter(1, "A")
        snapshot = tracker.ancestry()
        tracker.enter(2, "B")
        assert snapshot == ["A"]

    def test_reset(self):
        tracker = HeaderContextTracker(max_depth=3)
        tracker.enter(1, "A")
        tracker.reset()
        assert tracker.ancestry() == []

    def test_blank_heading_is_not_recorded(self):
        tracker = HeaderContextTracker()
        tracker.enter(1, "A")
        tracker.enter(2, "B")
        assert tracker.enter(1, "") == ["A", "B"]
        assert tracker.enter(2, "   ") == ["A", "B"]
        assert tracker.ancestry() == ["A", "B"]
