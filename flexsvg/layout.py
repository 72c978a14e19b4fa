from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Protocol, Tuple

from flexsvg.fonts import FontRegistry
from flexsvg.utils.exceptions import LayoutProtocolError


@dataclass
class LayoutContext:
    """Everything the tree-to-box resolver receives for one render."""

    parent: Any
    font: FontRegistry
    inherited_style: Dict[str, Any]
    grapheme_images: Dict[str, str]
    id: str = "id"
    parent_style: Dict[str, Any] = field(default_factory=dict)
    embed_font: bool = True
    debug: bool = False
    can_load_additional_assets: bool = False


class LayoutSteps(Protocol):
    """Resumable computation produced by a TreeResolver for one element tree."""

    def collect_missing_segments(self) -> List[str]:
        """Builds the box tree and reports text without glyph coverage."""
        ...

    def resume(self) -> None:
        """Continues after fonts/images have been added to the context."""
        ...

    def finalize(self, origin: Tuple[float, float]) -> str:
        """Reads computed geometry and returns the serialized SVG body."""
        ...


class TreeResolver(Protocol):
    def resolve(self, element: Any, context: LayoutContext) -> LayoutSteps: ...


class LayoutState(Enum):
    CREATED = "created"
    SEGMENTS_REPORTED = "segments_reported"
    RESUMED = "resumed"
    FINALIZED = "finalized"


@dataclass(frozen=True)
class LayoutStep:
    state: LayoutState
    value: Any = None


class LayoutHandle:
    """
    Single-use driver for LayoutSteps.

    Each advance() performs exactly the next step:
    CREATED -> SEGMENTS_REPORTED (value: missing segments)
    SEGMENTS_REPORTED -> RESUMED (value: None)
    RESUMED -> FINALIZED (input: origin offset, value: SVG body)
    """

    def __init__(self, steps: LayoutSteps):
        self._steps = steps
        self.state = LayoutState.CREATED

    def advance(self, value: Optional[Tuple[float, float]] = None) -> LayoutStep:
        if self.state is LayoutState.CREATED:
            missing = list(self._steps.collect_missing_segments() or [])
            self.state = LayoutState.SEGMENTS_REPORTED
            return LayoutStep(self.state, missing)

        if self.state is LayoutState.SEGMENTS_REPORTED:
            self._steps.resume()
            self.state = LayoutState.RESUMED
            return LayoutStep(self.state)

        if self.state is LayoutState.RESUMED:
            if value is None:
                raise LayoutProtocolError("Finalizing a layout requires an origin offset.")
            content = self._steps.finalize(value)
            self.state = LayoutState.FINALIZED
            self._steps = None
            return LayoutStep(self.state, content)

        raise LayoutProtocolError("Layout handle has already been finalized.")
