from typing import Annotated

from fastapi import Depends

from scenecast.config import Settings, get_settings
from scenecast.services.render_engine import RenderEngineClient, ShotstackRenderEngine
from scenecast.services.video_service import VideoRenderService


def get_render_engine(settings: Annotated[Settings, Depends(get_settings)]) -> RenderEngineClient:
    return ShotstackRenderEngine(settings)


def get_video_service(
    settings: Annotated[Settings, Depends(get_settings)],
    engine: Annotated[RenderEngineClient, Depends(get_render_engine)],
) -> VideoRenderService:
    return VideoRenderService(settings, engine)


# Type aliases for dependency injection
VideoService = Annotated[VideoRenderService, Depends(get_video_service)]
