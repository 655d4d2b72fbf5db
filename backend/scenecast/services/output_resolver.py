"""Map caller-facing output tokens onto a concrete OutputSpec.

Every function here is total: unrecognised or missing tokens degrade to
safe defaults instead of raising.
"""

from scenecast.schemas.render import OutputFormat, OutputQuality, OutputSpec, ResolutionTier

DEFAULT_ASPECT_RATIO = "16:9"
DEFAULT_RESOLUTION: ResolutionTier = "hd"
DEFAULT_FORMAT: OutputFormat = "mp4"
DEFAULT_QUALITY: OutputQuality = "high"
DEFAULT_FPS = 30

RESOLUTION_TIERS: dict[str, ResolutionTier] = {
    "sd": "sd",
    "480": "sd",
    "720": "sd",
    "hd": "hd",
    "1080": "hd",
    "full-hd": "hd",
    "fullhd": "hd",
    "4k": "4k",
    "2160": "4k",
    "uhd": "4k",
}

ASPECT_RATIO_SIZES: dict[str, tuple[int, int]] = {
    "16:9": (1920, 1080),
    "9:16": (1080, 1920),
    "1:1": (1080, 1080),
    "4:5": (1080, 1350),
    "4:3": (1440, 1080),
}

OUTPUT_FORMATS: tuple[OutputFormat, ...] = ("mp4", "gif", "webm")
QUALITIES: tuple[OutputQuality, ...] = ("low", "medium", "high")


def _token(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip().lower()


def resolve_resolution(resolution: object) -> ResolutionTier:
    return RESOLUTION_TIERS.get(_token(resolution), DEFAULT_RESOLUTION)


def resolve_aspect_ratio_token(aspect_ratio: object) -> str:
    """Canonical aspect ratio token, falling back to 16:9."""
    token = _token(aspect_ratio)
    return token if token in ASPECT_RATIO_SIZES else DEFAULT_ASPECT_RATIO


def resolve_aspect_ratio(aspect_ratio: object) -> tuple[int, int]:
    """Pixel (width, height) for an aspect ratio token."""
    return ASPECT_RATIO_SIZES[resolve_aspect_ratio_token(aspect_ratio)]


def resolve_format(output_format: object) -> OutputFormat:
    token = _token(output_format)
    for fmt in OUTPUT_FORMATS:
        if token == fmt:
            return fmt
    return DEFAULT_FORMAT


def resolve_quality(quality: object, default: OutputQuality = DEFAULT_QUALITY) -> OutputQuality:
    token = _token(quality)
    for q in QUALITIES:
        if token == q:
            return q
    return default


def resolve_output(
    aspect_ratio: object = None,
    resolution: object = None,
    output_format: object = None,
    *,
    quality: object = None,
    fps: int = DEFAULT_FPS,
    default_quality: OutputQuality = DEFAULT_QUALITY,
) -> OutputSpec:
    """Resolve all output tokens into an OutputSpec. Never raises."""
    ratio = resolve_aspect_ratio_token(aspect_ratio)
    width, height = ASPECT_RATIO_SIZES[ratio]
    if not isinstance(fps, int) or isinstance(fps, bool) or fps <= 0:
        fps = DEFAULT_FPS
    return OutputSpec(
        format=resolve_format(output_format),
        resolution=resolve_resolution(resolution),
        aspect_ratio=ratio,
        width=width,
        height=height,
        fps=fps,
        quality=resolve_quality(quality, resolve_quality(default_quality)),
    )
