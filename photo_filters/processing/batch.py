# Batch processing handler
import os
import concurrent.futures
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

import numpy as np

from ..config import settings
from ..io.image_loader import extract_metadata, load_image
from ..io.image_saver import save_image
from ..utils.errors import AppError, format_user_error
from ..utils.logger import get_logger
from .params import FilterParams
from .pipeline import FilterPipeline

logger = get_logger(__name__)


@dataclass
class BatchResult:
    """Outcome of filtering one image in a batch."""
    index: int
    image: Optional[np.ndarray]
    success: bool
    error: Optional[str] = None


def _default_workers():
    return min(settings.ENGINE_DEFAULTS["max_workers"], os.cpu_count() or 1)


def process_batch(
    images: Sequence[np.ndarray],
    params,
    max_workers: Optional[int] = None,
    progress_callback: Optional[Callable[[int, int], None]] = None,
) -> List[BatchResult]:
    """Apply one parameter set to many RGBA images in parallel.

    NumPy releases the GIL for the heavy array work, so a thread pool is
    enough. A failing image is reported in its result and does not stop the
    rest of the batch.

    Args:
        images (sequence): (H, W, 4) uint8 RGBA arrays.
        params: FilterParams or a mapping accepted by FilterParams.from_dict.
        max_workers (int): Thread count, defaults to ENGINE_DEFAULTS['max_workers'].
        progress_callback (callable): Optional callback(done_count, total).

    Returns:
        list: BatchResult per input image, in input order.
    """
    params = FilterParams.from_dict(params)
    # Row banding inside each image would only compete with the batch threads
    pipeline = FilterPipeline(max_workers=1)
    total = len(images)
    results = [None] * total

    def process_single(index):
        try:
            image = pipeline.execute(images[index], params).image
            return BatchResult(index, image, True)
        except AppError as e:
            return BatchResult(index, None, False, format_user_error(e))

    with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers or _default_workers()) as executor:
        future_to_index = {executor.submit(process_single, i): i for i in range(total)}

        done = 0
        for future in concurrent.futures.as_completed(future_to_index):
            done += 1
            index = future_to_index[future]
            try:
                result = future.result()
            except Exception as exc:
                # Anything that is not an AppError is a bug in a kernel; keep the batch alive
                logger.exception("Unexpected error filtering batch item %d", index)
                result = BatchResult(index, None, False, f"Executor error: {exc}")
            results[index] = result
            if not result.success:
                logger.warning("(%d/%d) Batch item %d failed: %s", done, total, index, result.error)
            if progress_callback:
                progress_callback(done, total)

    return results


def process_files(
    file_paths: Sequence[str],
    params,
    output_dir: str,
    fmt: Optional[str] = None,
    quality: Optional[int] = None,
    max_workers: Optional[int] = None,
):
    """Load, filter and save many image files.

    Args:
        file_paths (list): Paths of the input images.
        params: FilterParams or mapping.
        output_dir (str): Directory receiving ``filtered_<name>`` files.
        fmt (str): Optional output extension (e.g. '.png'); keeps the input's when None.
        quality (int): JPEG quality, defaults to IO_DEFAULTS['default_jpeg_quality'].

    Returns:
        list: (file_path, success, error_message) tuples sorted by file path.
    """
    params = FilterParams.from_dict(params)
    os.makedirs(output_dir, exist_ok=True)
    pipeline = FilterPipeline(max_workers=1)

    def process_single_file(file_path):
        try:
            image = load_image(file_path)
            filtered = pipeline.execute(image, params).image

            stem, ext = os.path.splitext(os.path.basename(file_path))
            output_path = os.path.join(output_dir, f"filtered_{stem}{fmt or ext}")
            save_image(filtered, output_path, quality=quality, metadata=extract_metadata(file_path))
            return (file_path, True, None)
        except AppError as e:
            return (file_path, False, format_user_error(e))

    results = []
    with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers or _default_workers()) as executor:
        future_to_file = {executor.submit(process_single_file, fp): fp for fp in file_paths}
        total_files = len(file_paths)
        for processed_count, future in enumerate(concurrent.futures.as_completed(future_to_file), 1):
            result = future.result()
            results.append(result)
            logger.info(
                "(%d/%d) Processed: %s - Success: %s%s",
                processed_count, total_files, result[0], result[1],
                f" - Error: {result[2]}" if not result[1] else "",
            )

    return sorted(results, key=lambda x: x[0])
