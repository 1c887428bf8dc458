# Filter parameter set
"""
The immutable record of filter intensities consumed by the pipeline.

Every field is independently defaulted to its neutral value (see
``config.settings.FILTER_DEFAULTS``); a field at its neutral value switches
its transform off.
"""

import math
from dataclasses import dataclass, asdict, fields, replace
from numbers import Real
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..config import settings
from ..utils.errors import ConfigurationError
from ..utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class FilterParams:
    """Named filter intensities for one pipeline invocation."""
    # basic tonal adjustments
    brightness: float = settings.FILTER_DEFAULTS["brightness"]
    contrast: float = settings.FILTER_DEFAULTS["contrast"]
    saturation: float = settings.FILTER_DEFAULTS["saturation"]
    temperature: float = settings.FILTER_DEFAULTS["temperature"]
    hue: float = settings.FILTER_DEFAULTS["hue"]
    grayscale: float = settings.FILTER_DEFAULTS["grayscale"]
    sepia: float = settings.FILTER_DEFAULTS["sepia"]
    # spatial effects
    blur: float = settings.FILTER_DEFAULTS["blur"]
    vignette: float = settings.FILTER_DEFAULTS["vignette"]
    hdr: float = settings.FILTER_DEFAULTS["hdr"]
    clarify: float = settings.FILTER_DEFAULTS["clarify"]
    # preset looks
    vintage: float = settings.FILTER_DEFAULTS["vintage"]
    drama: float = settings.FILTER_DEFAULTS["drama"]
    lomo: float = settings.FILTER_DEFAULTS["lomo"]
    cross: float = settings.FILTER_DEFAULTS["cross"]
    pinhole: float = settings.FILTER_DEFAULTS["pinhole"]
    kodachrome: float = settings.FILTER_DEFAULTS["kodachrome"]
    technicolor: float = settings.FILTER_DEFAULTS["technicolor"]
    polaroid: float = settings.FILTER_DEFAULTS["polaroid"]

    @classmethod
    def field_names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "FilterParams":
        """
        Build a parameter set from a plain mapping.

        Unknown keys are ignored and missing keys (or ``None`` values) fall
        back to the neutral value.

        Raises:
            ConfigurationError: If a known field holds a non-numeric value.
        """
        if data is None:
            return cls()
        if isinstance(data, cls):
            return data

        known = set(cls.field_names())
        values = {}
        for key, value in data.items():
            if key not in known:
                logger.debug("Ignoring unknown filter field '%s'", key)
                continue
            if value is None:
                continue
            values[key] = _coerce(key, value)
        return cls(**values)

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    def is_neutral(self, name: str) -> bool:
        return getattr(self, name) == settings.FILTER_DEFAULTS[name]

    def is_identity(self) -> bool:
        """True when every field is at its neutral value."""
        return all(self.is_neutral(name) for name in self.field_names())

    def active_fields(self) -> List[str]:
        """Names of the non-neutral fields, in declaration order."""
        return [name for name in self.field_names() if not self.is_neutral(name)]

    def out_of_range_fields(self) -> List[str]:
        """Fields whose value lies outside the documented slider range."""
        result = []
        for name in self.field_names():
            low, high = settings.FILTER_RANGES[name]
            if not low <= getattr(self, name) <= high:
                result.append(name)
        return result

    def with_look(self, name: str, intensity: Optional[float] = None) -> "FilterParams":
        """
        Select a single preset look: every look is reset to 0 and ``name`` is
        set to ``intensity`` (``LOOK_DEFAULT_INTENSITY`` when omitted).
        Non-look fields are kept.
        """
        if name not in settings.LOOK_ORDER:
            raise ConfigurationError(
                f"Unknown look '{name}'. Available: {', '.join(settings.LOOK_ORDER)}",
                setting_name=name,
            )
        if intensity is None:
            intensity = settings.LOOK_DEFAULT_INTENSITY
        looks = {look: settings.FILTER_DEFAULTS[look] for look in settings.LOOK_ORDER}
        looks[name] = _coerce(name, intensity)
        return replace(self, **looks)

    def reset(self) -> "FilterParams":
        return type(self)()

    def css_filter_string(self) -> str:
        """
        CSS ``filter`` property approximating the basic adjustments, used for
        cheap live previews in a browser front end.
        """
        parts = []
        if self.grayscale > 0:
            parts.append(f"grayscale({_fmt(self.grayscale)}%)")
        if self.sepia > 0:
            parts.append(f"sepia({_fmt(self.sepia)}%)")
        if not self.is_neutral("brightness"):
            parts.append(f"brightness({_fmt(self.brightness)}%)")
        if not self.is_neutral("contrast"):
            parts.append(f"contrast({_fmt(self.contrast)}%)")
        if not self.is_neutral("saturation"):
            parts.append(f"saturate({_fmt(self.saturation)}%)")
        if not self.is_neutral("hue"):
            parts.append(f"hue-rotate({_fmt(self.hue)}deg)")
        if self.blur > 0:
            parts.append(f"blur({_fmt(self.blur)}px)")
        return " ".join(parts) if parts else "none"


def _coerce(name: str, value: Any) -> float:
    # bool is an int subclass but never a meaningful intensity
    if isinstance(value, bool) or not isinstance(value, (Real, str)):
        raise ConfigurationError(
            f"Filter '{name}' must be a number, got {type(value).__name__}",
            setting_name=name,
        )
    try:
        number = float(value)
    except ValueError as e:
        raise ConfigurationError(
            f"Filter '{name}' must be a number, got {value!r}",
            setting_name=name,
            original_error=e,
        ) from e
    if math.isnan(number):
        raise ConfigurationError(f"Filter '{name}' is NaN", setting_name=name)
    return number


def _fmt(value: float) -> str:
    return f"{value:g}"
