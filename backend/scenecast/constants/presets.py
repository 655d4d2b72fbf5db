"""Video templates and style presets offered to callers."""

from scenecast.schemas.catalog import AspectRatioPreset, ColorPreset, VideoTemplate
from scenecast.services.output_resolver import ASPECT_RATIO_SIZES, OUTPUT_FORMATS

TEMPLATE_CATEGORIES = ["marketing", "social", "tutorial", "intro", "promo", "story"]

VIDEO_TEMPLATES: list[VideoTemplate] = [
    # Social media - vertical (9:16)
    VideoTemplate(
        id="tiktok-promo",
        name="TikTok Promo",
        description="Eye-catching vertical video for TikTok",
        category="social",
        aspect_ratio="9:16",
        duration=15,
        background="#000000",
    ),
    VideoTemplate(
        id="instagram-reel",
        name="Instagram Reel",
        description="Engaging Reel for Instagram",
        category="social",
        aspect_ratio="9:16",
        duration=30,
        background="#1a1a2e",
    ),
    VideoTemplate(
        id="youtube-short",
        name="YouTube Short",
        description="Vertical short for YouTube Shorts",
        category="social",
        aspect_ratio="9:16",
        duration=60,
        background="#0f0f23",
    ),
    # Marketing - horizontal (16:9)
    VideoTemplate(
        id="product-showcase",
        name="Product Showcase",
        description="Professional product demo video",
        category="marketing",
        aspect_ratio="16:9",
        duration=30,
        background="#1a1a2e",
    ),
    VideoTemplate(
        id="brand-intro",
        name="Brand Introduction",
        description="Introduce your brand with style",
        category="marketing",
        aspect_ratio="16:9",
        duration=45,
        background="#16213e",
    ),
    VideoTemplate(
        id="testimonial",
        name="Customer Testimonial",
        description="Share customer success stories",
        category="marketing",
        aspect_ratio="16:9",
        duration=60,
        background="#0d1b2a",
    ),
    # Tutorials
    VideoTemplate(
        id="how-to-guide",
        name="How-To Guide",
        description="Step-by-step tutorial video",
        category="tutorial",
        aspect_ratio="16:9",
        duration=120,
        background="#1a0a2e",
    ),
    VideoTemplate(
        id="quick-tip",
        name="Quick Tip",
        description="Short educational tip video",
        category="tutorial",
        aspect_ratio="16:9",
        duration=30,
        background="#2d132c",
    ),
    # Intro/outro
    VideoTemplate(
        id="youtube-intro",
        name="YouTube Intro",
        description="Professional YouTube channel intro",
        category="intro",
        aspect_ratio="16:9",
        duration=5,
        background="#0a0a0a",
    ),
    VideoTemplate(
        id="podcast-intro",
        name="Podcast Video Intro",
        description="Intro for video podcasts",
        category="intro",
        aspect_ratio="16:9",
        duration=8,
        background="#1a1a2e",
    ),
    # Square (1:1)
    VideoTemplate(
        id="instagram-post",
        name="Instagram Post Video",
        description="Square video for Instagram feed",
        category="social",
        aspect_ratio="1:1",
        duration=30,
        background="#262626",
    ),
    # Stories (9:16)
    VideoTemplate(
        id="story-announcement",
        name="Story Announcement",
        description="Announcement for IG/FB Stories",
        category="story",
        aspect_ratio="9:16",
        duration=15,
        background="#000000",
    ),
]

# Friendly name -> engine title style
TEXT_STYLES: dict[str, str] = {
    "minimal": "minimal",
    "bold": "blockbuster",
    "modern": "future",
    "elegant": "skinny",
    "playful": "chunk",
    "news": "subtitle",
    "cinematic": "marker",
}

COLOR_PRESETS: dict[str, ColorPreset] = {
    "dark": ColorPreset(background="#0a0a0a", text="#ffffff", accent="#6366f1"),
    "light": ColorPreset(background="#ffffff", text="#1a1a2e", accent="#3b82f6"),
    "vibrant": ColorPreset(background="#1a1a2e", text="#ffffff", accent="#ec4899"),
    "corporate": ColorPreset(background="#16213e", text="#ffffff", accent="#0ea5e9"),
    "warm": ColorPreset(background="#2d132c", text="#ffffff", accent="#f59e0b"),
    "cool": ColorPreset(background="#0d1b2a", text="#ffffff", accent="#06b6d4"),
}

TRANSITIONS = [
    "fade",
    "reveal",
    "wipeLeft",
    "wipeRight",
    "slideLeft",
    "slideRight",
    "slideUp",
    "slideDown",
    "zoom",
]
EFFECTS = ["zoomIn", "zoomOut", "slideLeft", "slideRight", "slideUp", "slideDown"]
FILTERS = ["boost", "contrast", "darken", "greyscale", "lighten", "muted", "negative", "sepia"]
RESOLUTIONS = ["sd", "hd", "4k"]

_ASPECT_RATIO_NAMES = {
    "16:9": "Landscape (YouTube)",
    "9:16": "Portrait (TikTok/Reels)",
    "1:1": "Square (Instagram)",
    "4:5": "Portrait 4:5 (Instagram)",
    "4:3": "Classic 4:3",
}

ASPECT_RATIOS: dict[str, AspectRatioPreset] = {
    ratio: AspectRatioPreset(name=_ASPECT_RATIO_NAMES[ratio], width=width, height=height)
    for ratio, (width, height) in ASPECT_RATIO_SIZES.items()
}

FORMATS = list(OUTPUT_FORMATS)


def find_template(template_id: str) -> VideoTemplate | None:
    for template in VIDEO_TEMPLATES:
        if template.id == template_id:
            return template
    return None


def filter_templates(
    category: str | None = None, aspect_ratio: str | None = None
) -> list[VideoTemplate]:
    templates = VIDEO_TEMPLATES
    if category:
        templates = [t for t in templates if t.category == category]
    if aspect_ratio:
        templates = [t for t in templates if t.aspect_ratio == aspect_ratio]
    return templates
