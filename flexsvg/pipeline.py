import asyncio
import inspect
import time
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from flexsvg.backends import get_flex_engine, get_rasterizer, get_resolver
from flexsvg.config import RenderOptions
from flexsvg.fonts import FontOptions, get_font_registry
from flexsvg.language import EMOJI_CODE, detect_language_code
from flexsvg.layout import LayoutContext, LayoutHandle
from flexsvg.svg import build_svg
from flexsvg.text.segmentation import segment
from flexsvg.utils.exceptions import AssetLoadError
from flexsvg.utils.logging import log_message
from flexsvg.validation import (AlignContent, AlignItems, Direction,
                                FlexDirection, FlexWrap, JustifyContent,
                                Overflow)


class PipelineState(Enum):
    INIT = "init"
    FIRST_PASS = "first_pass"
    ASSET_RESOLUTION = "asset_resolution"
    SECOND_PASS = "second_pass"
    DONE = "done"
    FAILED = "failed"


async def _maybe_await(value):
    if inspect.isawaitable(value):
        return await value
    return value


def unique_graphemes(segments: Iterable[str]) -> List[str]:
    """Grapheme clusters of all segments, deduplicated in encounter order."""
    return list(dict.fromkeys(segment("".join(segments), "grapheme")))


async def group_by_language(
    graphemes: Iterable[str],
    detect_language: Optional[Callable[[str], Any]] = None,
) -> Dict[str, List[str]]:
    """
    Buckets graphemes by detected language code.

    Emoji keep one entry per grapheme (each is usually its own image);
    every other code gets a single entry concatenating its graphemes.
    """
    detect = detect_language or detect_language_code
    buckets: Dict[str, List[str]] = {}

    for grapheme in graphemes:
        code = await _maybe_await(detect(grapheme))
        entries = buckets.setdefault(code, [])
        if code == EMOJI_CODE or not entries:
            entries.append(grapheme)
        else:
            entries[0] += grapheme

    return buckets


async def load_additional_assets(
    buckets: Dict[str, List[str]],
    load_additional_asset: Callable[[str, str], Any],
    verbose: bool = False,
) -> Tuple[List[FontOptions], Dict[str, str]]:
    """
    Calls the loader once per bucket entry, concurrently, and waits for all.

    Returns:
        (fonts to register, grapheme -> image URI)

    Raises:
        AssetLoadError: If any loader call fails
    """

    async def _load(code: str, text: str):
        log_message(f"Loading additional asset: {code} -> '{text}'", verbose=verbose)
        try:
            asset = await _maybe_await(load_additional_asset(code, text))
        except Exception as e:
            log_message(
                f"Additional asset loader failed for {code} '{text}': {e}",
                always_print=True,
            )
            raise AssetLoadError(
                f"Failed to load additional asset for language '{code}': '{text}'"
            ) from e
        return text, asset

    tasks = [
        asyncio.ensure_future(_load(code, text))
        for code, entries in buckets.items()
        for text in entries
    ]
    try:
        results = await asyncio.gather(*tasks)
    except BaseException:
        # Don't leave sibling loads running after the request has failed.
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

    fonts: List[FontOptions] = []
    images: Dict[str, str] = {}
    for text, asset in results:
        if isinstance(asset, str):
            images[text] = asset
        elif asset:
            fonts.append(asset)

    return fonts, images


class RenderPipeline:
    """
    Two-pass render of one element tree.

    INIT -> FIRST_PASS -> (ASSET_RESOLUTION) -> SECOND_PASS -> DONE, with
    FAILED entered from any state when an exception escapes.
    """

    def __init__(self, element: Any, options: RenderOptions):
        self.element = element
        self.options = options
        self.state = PipelineState.INIT

    def _transition(self, state: PipelineState) -> None:
        log_message(f"Render state: {self.state.value} -> {state.value}", verbose=self.options.debug)
        self.state = state

    async def run(self) -> str:
        """
        Returns:
            The SVG document

        Raises:
            ConfigurationError: If no flex engine or resolver is installed
            AssetLoadError: If the additional asset loader fails
        """
        try:
            return await self._run()
        except Exception:
            self._transition(PipelineState.FAILED)
            raise

    async def _run(self) -> str:
        start_time = time.time()
        options = self.options
        verbose = options.debug
        width, height = options.width, options.height

        engine = get_flex_engine()
        resolver = options.resolver or get_resolver()
        font = get_font_registry(options.fonts, verbose=verbose)

        root = engine.construct(width, height)
        try:
            engine.configure(
                root,
                flex_direction=FlexDirection.ROW,
                flex_wrap=FlexWrap.WRAP,
                align_content=AlignContent.AUTO,
                align_items=AlignItems.FLEX_START,
                justify_content=JustifyContent.FLEX_START,
                overflow=Overflow.HIDDEN,
            )

            self._transition(PipelineState.FIRST_PASS)
            grapheme_images = dict(options.grapheme_images)
            context = LayoutContext(
                parent=root,
                font=font,
                inherited_style=options.inherited_style.to_dict(width, height),
                grapheme_images=grapheme_images,
                embed_font=options.embed_font,
                debug=options.debug,
                can_load_additional_assets=options.load_additional_asset is not None,
            )
            handle = LayoutHandle(resolver.resolve(self.element, context))
            segments_missing_font = handle.advance().value

            if options.load_additional_asset is not None and segments_missing_font:
                self._transition(PipelineState.ASSET_RESOLUTION)
                graphemes = unique_graphemes(segments_missing_font)
                log_message(f"Missing glyphs for {len(graphemes)} graphemes", verbose=verbose)

                buckets = await group_by_language(graphemes, options.detect_language)
                fonts, images = await load_additional_assets(
                    buckets, options.load_additional_asset, verbose
                )

                # Mutate the shared registry and this request's grapheme map in place.
                font.add_fonts(fonts)
                grapheme_images.update(images)

            self._transition(PipelineState.SECOND_PASS)
            handle.advance()
            engine.compute(root, width, height, Direction.LTR)
            content = handle.advance((0, 0)).value
        finally:
            engine.release(root)

        self._transition(PipelineState.DONE)
        log_message(f"Rendered SVG in {time.time() - start_time:.3f}s", verbose=verbose)
        return build_svg(width, height, content)


async def to_svg(element: Any, options: RenderOptions) -> str:
    """Renders an element tree to an SVG document."""
    return await RenderPipeline(element, options).run()


async def to_png(element: Any, options: RenderOptions) -> bytes:
    """Renders an element tree to PNG bytes scaled to options.width."""
    document = await to_svg(element, options)
    return get_rasterizer().render(document, fit_width=options.width)
