# Filter pipeline orchestration
"""
Runs the filter stages over an RGBA buffer in their fixed order:

    preset looks -> basic tonal stage -> spatial / effect stage

Each stage reads from one buffer and writes into another, so no stage ever
sees its own partial output. The caller's buffer is only ever read.
"""

import functools
import time
import concurrent.futures
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

import numpy as np

from ..config import settings
from ..utils.errors import ProcessingError
from ..utils.imaging import as_rgba_array, check_rgba_image
from ..utils.logger import get_logger
from .adjustments import ImageAdjustments, TONAL_FIELDS
from .effects import Effects
from .looks import LOOK_KERNELS
from .params import FilterParams

logger = get_logger(__name__)

PHASE_PRESET = "preset"
PHASE_TONAL = "tonal"
PHASE_EFFECT = "effect"

Kernel = Callable[[np.ndarray, np.ndarray, FilterParams], None]


@dataclass(frozen=True)
class FilterStage:
    """A single transform in the pipeline."""
    name: str
    phase: str
    kernel: Kernel
    gate: Callable[[FilterParams], bool]
    # Per-pixel kernels have no spatial dependency and may run on row bands
    per_pixel: bool = True

    def is_active(self, params: FilterParams) -> bool:
        return self.gate(params)

    def run(
        self,
        src: np.ndarray,
        dst: np.ndarray,
        params: FilterParams,
        executor: Optional[concurrent.futures.Executor] = None,
        bands: int = 1,
    ) -> bool:
        """
        Apply the stage from ``src`` into ``dst``.

        Returns:
            False if the stage was skipped because its parameters are neutral
            (``dst`` is left untouched), True otherwise.
        """
        if not self.gate(params):
            return False

        if executor is None or not self.per_pixel or bands < 2 or src.shape[0] < bands:
            self.kernel(src, dst, params)
            return True

        bounds = np.linspace(0, src.shape[0], bands + 1).astype(int)
        futures = [
            executor.submit(self.kernel, src[start:stop], dst[start:stop], params)
            for start, stop in zip(bounds[:-1], bounds[1:])
        ]
        for future in futures:
            future.result()
        return True


@dataclass
class PipelineResult:
    """Result of pipeline execution."""
    image: np.ndarray
    stages_executed: List[str]
    total_time: float
    stage_times: Dict[str, float] = field(default_factory=dict)


def _positive(name: str) -> Callable[[FilterParams], bool]:
    return lambda params: getattr(params, name) > 0


def _scaled_kernel(name, kernel, src, dst, params):
    # Slider value 0-100 -> intensity 0.0-1.0
    kernel(src, dst, getattr(params, name) / 100)


def _blur_kernel(src, dst, params):
    Effects.apply_blur(src, dst, params.blur)


def _tonal_active(params: FilterParams) -> bool:
    return (
        any(not params.is_neutral(name) for name in TONAL_FIELDS[:5])
        or params.grayscale > 0
        or params.sepia > 0
    )


def _build_default_stages() -> tuple:
    stages = []
    for name in settings.LOOK_ORDER:
        kernel, spatial = LOOK_KERNELS[name]
        stages.append(FilterStage(
            name=name,
            phase=PHASE_PRESET,
            kernel=functools.partial(_scaled_kernel, name, kernel),
            gate=_positive(name),
            per_pixel=not spatial,
        ))

    stages.append(FilterStage(
        name="tonal",
        phase=PHASE_TONAL,
        kernel=ImageAdjustments.apply_tonal,
        gate=_tonal_active,
    ))

    effects = (
        ("vignette", Effects.apply_vignette, False),
        ("hdr", Effects.apply_hdr, True),
        ("clarify", Effects.apply_clarify, False),
    )
    for name, kernel, per_pixel in effects:
        stages.append(FilterStage(
            name=name,
            phase=PHASE_EFFECT,
            kernel=functools.partial(_scaled_kernel, name, kernel),
            gate=_positive(name),
            per_pixel=per_pixel,
        ))

    # Blur is a post-process over the fully filtered image
    stages.append(FilterStage(
        name="blur",
        phase=PHASE_EFFECT,
        kernel=_blur_kernel,
        gate=_positive("blur"),
        per_pixel=False,
    ))
    return tuple(stages)


DEFAULT_STAGES = _build_default_stages()


class FilterPipeline:
    """
    Ordered filter stages over an RGBA image.

    Holds no image state between calls; every ``execute`` allocates its own
    working buffers.
    """

    def __init__(
        self,
        stages: Optional[Sequence[FilterStage]] = None,
        parallel_min_pixels: Optional[int] = None,
        max_workers: Optional[int] = None,
    ):
        self._stages = tuple(DEFAULT_STAGES if stages is None else stages)
        self.parallel_min_pixels = (
            settings.ENGINE_DEFAULTS["parallel_min_pixels"]
            if parallel_min_pixels is None else parallel_min_pixels
        )
        self.max_workers = (
            settings.ENGINE_DEFAULTS["max_workers"] if max_workers is None else max_workers
        )

    @property
    def stages(self) -> tuple:
        return self._stages

    def active_stages(self, params: FilterParams) -> List[str]:
        return [stage.name for stage in self._stages if stage.is_active(params)]

    def execute(
        self,
        image: np.ndarray,
        params: Union[FilterParams, Mapping[str, Any], None] = None,
        progress_callback: Optional[Callable[[str, float], None]] = None,
    ) -> PipelineResult:
        """
        Run every active stage over ``image``.

        Args:
            image: Source (H, W, 4) uint8 RGBA array. Never modified.
            params: FilterParams or a mapping accepted by FilterParams.from_dict.
            progress_callback: Optional callback(stage_name, percent).

        Returns:
            PipelineResult holding a newly allocated output image.
        """
        source = check_rgba_image(image)
        params = FilterParams.from_dict(params)

        total_start = time.time()
        stages_executed = []
        stage_times = {}

        if params.is_identity():
            return PipelineResult(source.copy(), stages_executed, time.time() - total_start, stage_times)

        buffers = [source.copy(), source.copy()]
        current = source
        target = 0

        executor = None
        bands = 1
        height, width = source.shape[:2]
        if self.max_workers > 1 and height * width >= self.parallel_min_pixels:
            bands = min(self.max_workers, height)
            executor = concurrent.futures.ThreadPoolExecutor(max_workers=bands)

        try:
            for index, stage in enumerate(self._stages):
                if progress_callback:
                    progress_callback(stage.name, index / len(self._stages) * 100)

                stage_start = time.time()
                try:
                    applied = stage.run(current, buffers[target], params, executor, bands)
                except Exception as e:
                    raise ProcessingError(
                        f"Stage '{stage.name}' failed: {e}",
                        step=stage.name,
                        original_error=e,
                    ) from e

                if applied:
                    current = buffers[target]
                    target ^= 1
                    stages_executed.append(stage.name)
                    stage_times[stage.name] = time.time() - stage_start
        finally:
            if executor is not None:
                executor.shutdown(wait=True)

        if progress_callback:
            progress_callback("done", 100.0)

        total_time = time.time() - total_start
        logger.debug(
            "Filtered %dx%d image through %s in %.3fs",
            width, height, ", ".join(stages_executed) or "no stages", total_time,
        )
        output = current if current is not source else source.copy()
        return PipelineResult(output, stages_executed, total_time, stage_times)


def apply_filters(image, params=None):
    """Filter an (H, W, 4) RGBA array and return a new array of the same shape."""
    return FilterPipeline().execute(image, params).image


def apply_filters_to_buffer(buffer, width, height, params=None):
    """
    Filter a flat row-major RGBA buffer of ``width`` x ``height`` pixels.

    Returns:
        A new flat uint8 array of length width * height * 4.

    Raises:
        DimensionMismatchError: If the buffer length does not match.
    """
    image = as_rgba_array(buffer, width, height)
    return FilterPipeline().execute(image, params).image.reshape(-1)
