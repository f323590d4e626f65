"""
Story orchestration: prompt, text upstream, optional per-paragraph images.

Three outcomes per request:
  - placeholder/fallback story (no key, or upstream unreachable in fallback mode)
  - upstream story with its image slots
  - a StoryError raised for the API layer to render
"""
from typing import List

from story_builder.agents.narrative import painter, writer
from story_builder.agents.narrative.prompts import build_story_prompt, join_characters
from story_builder.core.config import Settings
from story_builder.core.errors import UpstreamUnavailableError
from story_builder.core.logger import get_logger
from story_builder.schemas.schema import GenerationRequest, ImageResult, StoryResult

logger = get_logger("orchestrator")

PLACEHOLDER = "placeholder"
FALLBACK = "fallback"

_SYNTHETIC_WORDING = {
    PLACEHOLDER: ("A short", "This is a placeholder summary."),
    FALLBACK: ("A fallback", "This is a fallback placeholder."),
}


def build_synthetic_story(request: GenerationRequest, variant: str = PLACEHOLDER) -> StoryResult:
    """Deterministic stand-in story with exactly `request.paragraphs` paragraphs."""
    lead, preface = _SYNTHETIC_WORDING[variant]
    cast = join_characters(request.characters) or "characters"
    paragraphs = [
        f"Paragraph {i + 1}: {lead} {request.genre.value} scene featuring {cast}."
        for i in range(request.paragraphs)
    ]
    story = "\n\n".join(paragraphs) + f"\n\nPreface: {preface}"
    return StoryResult(story=story, paragraphs=paragraphs, images=[])


def generate_story(
    request: GenerationRequest,
    *,
    api_key: str,
    fallback_enabled: bool,
    settings: Settings,
) -> StoryResult:
    if not api_key and fallback_enabled:
        logger.warning("Fallback mode active and no DEEPINFRA_API_KEY set: returning placeholder story.")
        return build_synthetic_story(request, PLACEHOLDER)

    prompt = build_story_prompt(request)
    try:
        raw = writer.request_story_text(prompt, settings, api_key)
    except UpstreamUnavailableError:
        if not fallback_enabled:
            raise
        logger.warning("Falling back to placeholder story after text model failure.")
        return build_synthetic_story(request, FALLBACK)

    story = writer.extract_text(raw)
    paragraphs = painter.split_paragraphs(story, request.paragraphs)

    images: List[ImageResult] = []
    if request.images_per_paragraph:
        images = painter.illustrate_paragraphs(paragraphs, settings, api_key)

    logger.info(f"Story generated: {len(paragraphs)} paragraphs, {len(images)} image slots")
    return StoryResult(story=story, paragraphs=paragraphs, images=images, raw=raw)
