"""
Color Engine - Runs extraction requests on a private serial worker

Each engine owns one worker thread. Requests submitted to the same engine
run one at a time in submission order; separate engines are independent
and may run in parallel. Every request builds its own histogram, so no
state is shared between requests.

Results come back as concurrent.futures.Future objects. A completion
callback can also be given; pass `callback_executor` to have it invoked
somewhere other than the worker thread, e.g. `loop.call_soon_threadsafe`
for an asyncio loop or `root.after_idle` for a Tk window.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Iterable, List, Optional

import numpy as np

from .config import EngineConfig, DEFAULT_CONFIG
from .options import ColorOptions, DEFAULT_OPTIONS, BRIGHT_OPTIONS, DARK_OPTIONS
from .parser import ImageSource
from .pipeline import process_image
from .utils import Color, ColorLike, ColorUtils

logger = logging.getLogger(__name__)

Completion = Callable[[Any], None]
CallbackExecutor = Callable[[Callable[[], None]], Any]


class NoColorFoundError(ValueError):
    """Raised when a main color is requested but every candidate was filtered out"""


def main_color(
    image: Optional[ImageSource],
    config: EngineConfig = DEFAULT_CONFIG
) -> Color:
    """Most significant color with default options"""
    colors = process_image(image, DEFAULT_OPTIONS, (), config)
    if not colors:
        raise NoColorFoundError("No color passed filtering; the image has no bright pixels")
    return colors[0]


def _snapshot(image: Optional[ImageSource]) -> Optional[ImageSource]:
    """Private copy of mutable pixel sources"""
    if isinstance(image, (bytearray, memoryview)):
        return bytes(image)
    if isinstance(image, np.ndarray):
        return image.copy()
    return image


class ColorEngine:
    """Asynchronous front end of the quantization pipeline"""

    def __init__(self, config: EngineConfig = DEFAULT_CONFIG, name: str = "primary-color"):
        """
        Args:
            config: Pipeline constants used by every request
            name: Worker thread name prefix
        """
        self.config = config
        self.name = name
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=name)
        self._closed = False

    def __enter__(self) -> 'ColorEngine':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown(wait=True)

    @property
    def closed(self) -> bool:
        return self._closed

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting requests; queued requests still run"""
        self._closed = True
        self._executor.shutdown(wait=wait)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _submit(
        self,
        fn: Callable[..., Any],
        *args: Any,
        completion: Optional[Completion] = None,
        callback_executor: Optional[CallbackExecutor] = None
    ) -> Future:
        future: Future = Future()
        # Submitted requests always run to completion
        future.set_running_or_notify_cancel()

        def run() -> None:
            try:
                result = fn(*args)
            except Exception as e:
                future.set_exception(e)
            else:
                future.set_result(result)

        self._executor.submit(run)

        if completion is not None:
            future.add_done_callback(
                lambda f: self._deliver(f, completion, callback_executor)
            )
        return future

    @staticmethod
    def _deliver(
        future: Future,
        completion: Completion,
        callback_executor: Optional[CallbackExecutor]
    ) -> None:
        error = future.exception()
        if error is not None:
            logger.error("Extraction failed, completion not called: %s", error)
            return

        result = future.result()
        if callback_executor is None:
            completion(result)
        else:
            callback_executor(lambda: completion(result))

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def extract_colors(
        self,
        image: Optional[ImageSource],
        options: ColorOptions = DEFAULT_OPTIONS,
        avoid: Iterable[ColorLike] = (),
        completion: Optional[Completion] = None,
        callback_executor: Optional[CallbackExecutor] = None
    ) -> Future:
        """
        Queue a color extraction.

        Args:
            image: Path, Pillow image, numpy array or rendered RGBA bytes
            options: Option flags for this request
            avoid: Colors to keep out of the result
            completion: Called with the list of colors once done
            callback_executor: Schedules the completion call

        Returns:
            Future resolving to the ordered list of colors
        """
        return self._submit(
            process_image, _snapshot(image), options, ColorUtils.as_color_list(avoid), self.config,
            completion=completion, callback_executor=callback_executor
        )

    def extract_main_color(
        self,
        image: Optional[ImageSource],
        completion: Optional[Completion] = None,
        callback_executor: Optional[CallbackExecutor] = None
    ) -> Future:
        """
        Queue a main color extraction.

        The future raises NoColorFoundError when nothing survives the
        default bright-only filtering; callers must not rely on a color for
        such images.
        """
        return self._submit(
            main_color, _snapshot(image), self.config,
            completion=completion, callback_executor=callback_executor
        )

    def extract_bright_colors(
        self,
        image: Optional[ImageSource],
        completion: Optional[Completion] = None,
        callback_executor: Optional[CallbackExecutor] = None
    ) -> Future:
        """Bright pixels only, brightest first"""
        return self.extract_colors(
            image, BRIGHT_OPTIONS,
            completion=completion, callback_executor=callback_executor
        )

    def extract_dark_colors(
        self,
        image: Optional[ImageSource],
        completion: Optional[Completion] = None,
        callback_executor: Optional[CallbackExecutor] = None
    ) -> Future:
        """Dark pixels only, darkest first"""
        return self.extract_colors(
            image, DARK_OPTIONS,
            completion=completion, callback_executor=callback_executor
        )

    def extract_each(
        self,
        images: Iterable[Optional[ImageSource]],
        options: ColorOptions = DEFAULT_OPTIONS,
        avoid: Iterable[ColorLike] = ()
    ) -> List[Future]:
        """Queue one extraction per image, futures in submission order"""
        avoid = ColorUtils.as_color_list(avoid)
        return [self.extract_colors(image, options, avoid) for image in images]
