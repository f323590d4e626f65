"""
Prompt templates for the text and image upstreams.
"""
from typing import List, Union

from story_builder.schemas.schema import GenerationRequest


STORY_PROMPT_TEMPLATE = (
    "System: You are a helpful creative fiction writer.\n"
    "User: Write a {paragraphs}-paragraph {genre} short story for adults. Characters: {characters}.\n"
    "Constraints: Each paragraph should be distinct and between 2-6 sentences. "
    "After the story include a 1-2 sentence preface/summary. "
    "Output only the story and the preface."
)

ILLUSTRATION_PROMPT_TEMPLATE = (
    "Create an illustration for: {paragraph}\n"
    "Style: cinematic, detailed, suitable for a book illustration."
)


def join_characters(characters: Union[str, List[str]]) -> str:
    if isinstance(characters, str):
        return characters
    return ", ".join(characters)


def build_story_prompt(request: GenerationRequest) -> str:
    return STORY_PROMPT_TEMPLATE.format(
        paragraphs=int(request.paragraphs),
        genre=request.genre.value,
        characters=join_characters(request.characters),
    )


def build_illustration_prompt(paragraph: str) -> str:
    return ILLUSTRATION_PROMPT_TEMPLATE.format(paragraph=paragraph)
