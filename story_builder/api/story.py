from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from story_builder.agents.narrative.orchestrator import generate_story
from story_builder.core.config import Settings, get_settings
from story_builder.core.errors import StoryError
from story_builder.core.logger import get_logger, log_error
from story_builder.schemas.schema import GenerationRequest

logger = get_logger("api.story")
router = APIRouter()


@router.post("/generate-story")
def generate_story_endpoint(request: GenerationRequest, settings: Settings = Depends(get_settings)):
    """
    Generate a story (and optionally one illustration per paragraph).
    Upstream failures are rendered by the StoryError handler.
    """
    logger.info(
        f"Story requested: genre={request.genre.value} paragraphs={request.paragraphs} "
        f"characters={len(request.characters)} images={request.images_per_paragraph}"
    )
    try:
        result = generate_story(
            request,
            api_key=settings.DEEPINFRA_API_KEY,
            fallback_enabled=settings.DEV_FALLBACK,
            settings=settings,
        )
    except StoryError:
        raise
    except Exception as e:
        log_error("Unhandled server error", e)
        return JSONResponse(status_code=500, content={"error": "server_error", "message": str(e)})

    return result.model_dump(exclude_none=True)
