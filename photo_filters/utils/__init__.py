# This file makes the 'utils' directory a Python package.

from .errors import (
    AppError,
    FileIOError,
    ProcessingError,
    DimensionMismatchError,
    ConfigurationError,
    ErrorCategory,
    handle_errors,
    log_and_continue,
    format_user_error,
)
from .imaging import as_rgba_array, check_rgba_image, quantize, radial_distance_ratio

__all__ = [
    # Errors
    'AppError',
    'FileIOError',
    'ProcessingError',
    'DimensionMismatchError',
    'ConfigurationError',
    'ErrorCategory',
    'handle_errors',
    'log_and_continue',
    'format_user_error',
    # Buffers
    'as_rgba_array',
    'check_rgba_image',
    'quantize',
    'radial_distance_ratio',
]
