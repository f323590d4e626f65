import re
import time
from typing import Any, List

import requests

from story_builder.agents.narrative.prompts import build_illustration_prompt
from story_builder.core.config import Settings
from story_builder.core.logger import get_logger, log_error, log_upstream_call
from story_builder.schemas.schema import ImageError, ImageInline, ImageRaw, ImageResult, ImageUrl

logger = get_logger("painter")

PARAGRAPH_BREAK = re.compile(r"\n+")
DATA_URL_PREFIX = re.compile(r"^data:[^;,]+;base64,")


def split_paragraphs(text: str, limit: int) -> List[str]:
    """Non-blank paragraphs of the story, at most `limit` of them."""
    paragraphs = [p.strip() for p in PARAGRAPH_BREAK.split(text) if p.strip()]
    return paragraphs[:limit] or [text]


def request_image(prompt: str, settings: Settings, api_key: str) -> requests.Response:
    url = settings.inference_url(settings.IMAGE_MODEL)
    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }
    start = time.perf_counter()
    resp = requests.post(url, json={"prompt": prompt}, headers=headers, timeout=settings.IMAGE_TIMEOUT_SECONDS)
    log_upstream_call("image", settings.IMAGE_MODEL, resp.status_code, (time.perf_counter() - start) * 1000)
    return resp


def extract_image(payload: Any) -> ImageResult:
    """
    Picks a displayable reference out of an image-model response.

    Order: output_url, url, results[0].output, images[0] (inline base64).
    Anything else is handed back raw for the client to interpret.
    """
    if isinstance(payload, dict):
        results = payload.get("results")
        nested = results[0] if isinstance(results, list) and results and isinstance(results[0], dict) else {}
        # Only non-empty strings count as references; anything else goes back raw
        for candidate in (payload.get("output_url"), payload.get("url"), nested.get("output")):
            if isinstance(candidate, str) and candidate:
                return ImageUrl(url=candidate)

        images = payload.get("images")
        if isinstance(images, list) and images and isinstance(images[0], str):
            return ImageInline(base64=DATA_URL_PREFIX.sub("", images[0]))

    return ImageRaw(raw=payload)


def illustrate_paragraphs(paragraphs: List[str], settings: Settings, api_key: str) -> List[ImageResult]:
    """
    Generates one illustration per paragraph, strictly in order.

    A failed paragraph gets an error slot and the loop moves on; an unexpected
    exception stops the loop and appends a single batch error.
    """
    images: List[ImageResult] = []
    try:
        for index, paragraph in enumerate(paragraphs):
            resp = request_image(build_illustration_prompt(paragraph), settings, api_key)
            if not resp.ok:
                body = resp.text
                logger.error(f"Image model returned non-OK for paragraph {index + 1}: {resp.status_code} {body[:1000]}")
                images.append(ImageError(error=f"image_upstream_{resp.status_code}", detail=body))
                continue
            images.append(extract_image(resp.json()))
    except Exception as e:
        log_error("Error generating images", e, {"completed": len(images), "requested": len(paragraphs)})
        images.append(ImageError(error="image_generation_failed", message=str(e)))
    return images
