# Error types and handling helpers for the filter engine
"""
Exceptions raised by the engine and its I/O helpers, plus the small set of
helpers used at call sites that either fall back or re-raise.

Every exception raised on purpose is an ``AppError`` subclass carrying an
``ErrorCategory`` and a message that can be shown to a user as-is.
"""

import functools
import traceback
from enum import Enum
from typing import Any, Callable, Optional, Tuple, Type, TypeVar, Union

from .logger import get_logger

logger = get_logger(__name__)

F = TypeVar('F', bound=Callable[..., Any])


class ErrorCategory(Enum):
    """Where an error came from."""
    RECOVERABLE = "recoverable"      # Logged; the caller carries on
    USER_INPUT = "user_input"        # Bad CLI arguments or slider values
    FILE_IO = "file_io"              # Reading or writing image files
    PROCESSING = "processing"        # A filter stage or buffer validation
    CONFIGURATION = "configuration"  # Unusable filter parameter
    FATAL = "fatal"


class AppError(Exception):
    """Base class for errors raised by photo_filters."""

    category = ErrorCategory.RECOVERABLE

    def __init__(
        self,
        message: str,
        category: Optional[ErrorCategory] = None,
        original_error: Optional[Exception] = None,
        user_message: Optional[str] = None,
    ):
        super().__init__(message)
        if category is not None:
            self.category = category
        self.original_error = original_error
        self.user_message = user_message or message

    def __str__(self) -> str:
        message = self.args[0]
        if self.original_error is None:
            return message
        return f"{message} (caused by: {type(self.original_error).__name__})"


class FileIOError(AppError):
    """An image file could not be read or written."""

    category = ErrorCategory.FILE_IO

    def __init__(self, message: str, file_path: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.file_path = file_path


class ProcessingError(AppError):
    """A filter stage failed; ``step`` names the stage."""

    category = ErrorCategory.PROCESSING

    def __init__(self, message: str, step: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.step = step


class DimensionMismatchError(ProcessingError):
    """Pixel buffer does not match the declared width and height."""

    def __init__(
        self,
        message: str,
        expected: Optional[int] = None,
        actual: Optional[int] = None,
        **kwargs,
    ):
        kwargs.setdefault('step', 'validate')
        super().__init__(message, **kwargs)
        self.expected = expected
        self.actual = actual


class ConfigurationError(AppError):
    """A filter parameter has an unusable value; ``setting_name`` names it."""

    category = ErrorCategory.CONFIGURATION

    def __init__(self, message: str, setting_name: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.setting_name = setting_name


def handle_errors(
    fallback_value: Any = None,
    category: ErrorCategory = ErrorCategory.RECOVERABLE,
    log_level: str = "warning",
    reraise: bool = False,
    user_message: Optional[str] = None,
    catch: Tuple[Type[BaseException], ...] = (Exception,),
) -> Callable[[F], F]:
    """
    Decorator turning unexpected exceptions into a fallback value or an AppError.

    AppErrors always propagate unchanged. Anything else listed in ``catch``
    is logged at ``log_level`` and then either wrapped in an AppError of
    ``category`` (``reraise=True``) or replaced by ``fallback_value``, which
    is called when callable so mutable fallbacks are built fresh.

    Example:
        @handle_errors(fallback_value=ImageMetadata, category=ErrorCategory.FILE_IO)
        def extract_metadata(path):
            ...
    """
    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except AppError:
                raise
            except catch as e:
                log_func = getattr(logger, log_level, logger.warning)
                log_func("[%s] %s failed: %s", category.value, func.__qualname__, e)
                if log_level == "exception":
                    logger.debug("Full traceback:\n%s", traceback.format_exc())

                if reraise:
                    raise AppError(
                        f"{func.__qualname__} failed: {e}",
                        category=category,
                        original_error=e,
                        user_message=user_message,
                    ) from e
                return fallback_value() if callable(fallback_value) else fallback_value

        return wrapper  # type: ignore
    return decorator


def log_and_continue(
    message: str,
    category: ErrorCategory = ErrorCategory.RECOVERABLE,
    level: str = "warning",
) -> None:
    """Log a problem that does not stop filtering."""
    log_func = getattr(logger, level, logger.warning)
    log_func("[%s] %s", category.value, message)


def format_user_error(error: Union[Exception, str], context: Optional[str] = None) -> str:
    """
    One-line message for the CLI and batch reports.

    AppErrors already carry a user-facing message. Common OS and decoder
    failures are reworded; anything else is passed through with ``context``
    (e.g. "loading image") when given.
    """
    if isinstance(error, AppError):
        return error.user_message

    where = f" while {context}" if context else ""
    if isinstance(error, str):
        detail = error
    elif isinstance(error, FileNotFoundError):
        return f"File not found{where}"
    elif isinstance(error, PermissionError):
        return f"Permission denied{where}"
    elif isinstance(error, MemoryError):
        return "Not enough memory to filter this image. Try a smaller image."
    else:
        detail = str(error)

    lowered = detail.lower()
    if "no such file or directory" in lowered:
        return f"File not found{where}"
    if "permission denied" in lowered:
        return f"Permission denied{where}"
    if "cannot identify image file" in lowered:
        return f"Unsupported or corrupted image file{where}"
    if "out of memory" in lowered:
        return "Not enough memory to filter this image. Try a smaller image."

    if context:
        return f"Error {context}: {detail}"
    return f"An error occurred: {detail}"
