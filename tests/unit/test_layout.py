"""Tests for flexsvg/layout.py: the resumable layout handle"""

import pytest

from flexsvg.layout import LayoutHandle, LayoutState
from flexsvg.utils.exceptions import LayoutProtocolError


class RecordingSteps:
    def __init__(self, missing=None):
        self.missing = missing or []
        self.calls = []

    def collect_missing_segments(self):
        self.calls.append("collect")
        return self.missing

    def resume(self):
        self.calls.append("resume")

    def finalize(self, origin):
        self.calls.append(("finalize", origin))
        return "<rect/>"


class TestLayoutHandle:
    """Test the fixed three-step protocol"""

    def test_steps_run_in_order(self) -> None:
        steps = RecordingSteps(["漢"])
        handle = LayoutHandle(steps)
        assert handle.state is LayoutState.CREATED

        first = handle.advance()
        assert first.state is LayoutState.SEGMENTS_REPORTED
        assert first.value == ["漢"]

        second = handle.advance()
        assert second.state is LayoutState.RESUMED
        assert second.value is None

        third = handle.advance((0, 0))
        assert third.state is LayoutState.FINALIZED
        assert third.value == "<rect/>"
        assert steps.calls == ["collect", "resume", ("finalize", (0, 0))]

    def test_none_missing_segments_becomes_empty_list(self) -> None:
        class NoneSteps(RecordingSteps):
            def collect_missing_segments(self):
                return None

        assert LayoutHandle(NoneSteps()).advance().value == []

    def test_finalize_requires_origin(self) -> None:
        handle = LayoutHandle(RecordingSteps())
        handle.advance()
        handle.advance()
        with pytest.raises(LayoutProtocolError):
            handle.advance()
        assert handle.state is LayoutState.RESUMED

    def test_single_use(self) -> None:
        handle = LayoutHandle(RecordingSteps())
        handle.advance()
        handle.advance()
        handle.advance((0, 0))
        with pytest.raises(LayoutProtocolError):
            handle.advance((0, 0))
