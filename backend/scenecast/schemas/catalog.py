"""Schemas for templates and style presets."""

from typing import Literal

from pydantic import BaseModel, Field

TemplateCategory = Literal["marketing", "social", "tutorial", "intro", "promo", "story"]


class VideoTemplate(BaseModel):
    id: str
    name: str
    description: str
    category: TemplateCategory
    aspect_ratio: str
    duration: float  # seconds
    background: str = "#1a1a2e"
    thumbnail: str | None = None


class ColorPreset(BaseModel):
    background: str
    text: str
    accent: str


class AspectRatioPreset(BaseModel):
    name: str
    width: int
    height: int


class TemplateListResponse(BaseModel):
    templates: list[VideoTemplate]
    categories: list[str]
    aspect_ratios: list[str]
    text_styles: dict[str, str]
    color_presets: dict[str, ColorPreset]
    total: int


class TemplateDetailResponse(BaseModel):
    template: VideoTemplate
    text_styles: dict[str, str]
    color_presets: dict[str, ColorPreset]


class PresetsResponse(BaseModel):
    text_styles: dict[str, str]
    color_presets: dict[str, ColorPreset]
    transitions: list[str]
    effects: list[str]
    filters: list[str]
    aspect_ratios: dict[str, AspectRatioPreset] = Field(default_factory=dict)
    formats: list[str]
    resolutions: list[str]
