# Application settings

# --- Filter Parameters ---
# Neutral value of every filter field. A field at its neutral value is skipped
# entirely by the pipeline.
FILTER_DEFAULTS = {
    # Basic tonal adjustments (percent based, 100 = unchanged)
    "brightness": 100.0,
    "contrast": 100.0,
    "saturation": 100.0,
    "temperature": 0.0,
    "hue": 0.0,
    "grayscale": 0.0,
    "sepia": 0.0,

    # Spatial effects
    "blur": 0.0,
    "vignette": 0.0,
    "hdr": 0.0,
    "clarify": 0.0,

    # Preset looks (0-100 intensity)
    "vintage": 0.0,
    "drama": 0.0,
    "lomo": 0.0,
    "cross": 0.0,
    "pinhole": 0.0,
    "kodachrome": 0.0,
    "technicolor": 0.0,
    "polaroid": 0.0,
}

# Documented slider ranges (min, max). Informational only: the engine accepts
# values outside these ranges.
FILTER_RANGES = {
    "brightness": (0.0, 200.0),
    "contrast": (0.0, 200.0),
    "saturation": (0.0, 200.0),
    "temperature": (-100.0, 100.0),
    "hue": (-180.0, 180.0),
    "grayscale": (0.0, 100.0),
    "sepia": (0.0, 100.0),
    "blur": (0.0, 10.0),
    "vignette": (0.0, 100.0),
    "hdr": (0.0, 100.0),
    "clarify": (0.0, 100.0),
    "vintage": (0.0, 100.0),
    "drama": (0.0, 100.0),
    "lomo": (0.0, 100.0),
    "cross": (0.0, 100.0),
    "pinhole": (0.0, 100.0),
    "kodachrome": (0.0, 100.0),
    "technicolor": (0.0, 100.0),
    "polaroid": (0.0, 100.0),
}

# Order in which preset looks compound. Changing it changes the output.
LOOK_ORDER = (
    "vintage",
    "drama",
    "lomo",
    "cross",
    "pinhole",
    "kodachrome",
    "technicolor",
    "polaroid",
)

# Intensity used when a look is picked with one click
LOOK_DEFAULT_INTENSITY = 70.0

# --- Engine Parameters ---
ENGINE_DEFAULTS = {
    # The contrast factor has a pole at 259; inputs are clamped below it
    "contrast_ceiling": 258.0,

    # Gaussian sigma (px) per unit of the blur parameter, CSS blur() semantics
    "blur_sigma_per_unit": 1.0,

    # Per-pixel stages are split by rows across threads above this size
    "parallel_min_pixels": 1_000_000,
    "max_workers": 4,
}

# --- IO Defaults ---
IO_DEFAULTS = {
    "default_jpeg_quality": 95,
    "default_png_compression": 6, # Typical default
}

# --- Logging ---
LOGGING_LEVEL = "INFO" # Options: DEBUG, INFO, WARNING, ERROR
