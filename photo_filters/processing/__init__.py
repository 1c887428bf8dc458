# Processing package initialization
from .params import FilterParams
from .color import hue_shift, hue_shift_array
from .adjustments import ImageAdjustments, contrast_factor
from .effects import Effects
from .looks import LOOK_KERNELS
from .pipeline import (
    FilterStage, FilterPipeline, PipelineResult, DEFAULT_STAGES,
    apply_filters, apply_filters_to_buffer,
)
from .batch import BatchResult, process_batch, process_files
