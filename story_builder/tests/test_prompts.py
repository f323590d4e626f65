from story_builder.agents.narrative.prompts import (
    build_illustration_prompt,
    build_story_prompt,
    join_characters,
)
from story_builder.schemas.schema import GenerationRequest


def test_story_prompt_embeds_parameters():
    request = GenerationRequest(genre="mystery", characters=["Arya", "Tom"], paragraphs=4)
    prompt = build_story_prompt(request)

    assert prompt.startswith("System: You are a helpful creative fiction writer.\n")
    assert "Write a 4-paragraph mystery short story for adults." in prompt
    assert "Characters: Arya, Tom." in prompt


def test_story_prompt_keeps_fixed_constraints():
    prompt = build_story_prompt(GenerationRequest())

    assert "between 2-6 sentences" in prompt
    assert "1-2 sentence preface/summary" in prompt
    assert prompt.endswith("Output only the story and the preface.")


def test_story_prompt_with_no_characters():
    prompt = build_story_prompt(GenerationRequest(characters=[]))
    assert "Characters: ." in prompt


def test_join_characters():
    assert join_characters(["Arya", "Tom", "Zed"]) == "Arya, Tom, Zed"
    assert join_characters("Arya and Tom") == "Arya and Tom"
    assert join_characters([]) == ""


def test_illustration_prompt():
    prompt = build_illustration_prompt("The ship drifted.")
    assert prompt == (
        "Create an illustration for: The ship drifted.\n"
        "Style: cinematic, detailed, suitable for a book illustration."
    )
