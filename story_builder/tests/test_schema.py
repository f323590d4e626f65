import pytest
from pydantic import ValidationError

from story_builder.schemas.schema import Genre, GenerationRequest, ImageError, ImageUrl, StoryResult


class TestGenerationRequest:
    """Test request parsing and coercion."""

    def test_defaults(self):
        request = GenerationRequest()
        assert request.genre == Genre.FANTASY
        assert request.characters == []
        assert request.paragraphs == 3
        assert request.images_per_paragraph is False

    def test_camel_case_alias(self):
        request = GenerationRequest.model_validate({"imagesPerParagraph": True})
        assert request.images_per_paragraph is True

    def test_characters_string_is_split(self):
        request = GenerationRequest(characters="Arya, Tom ,, ")
        assert request.characters == ["Arya", "Tom"]

    def test_characters_list_is_trimmed(self):
        request = GenerationRequest(characters=[" Arya ", "", "Tom"])
        assert request.characters == ["Arya", "Tom"]

    def test_numeric_string_paragraphs_cast(self):
        assert GenerationRequest(paragraphs="5").paragraphs == 5

    @pytest.mark.parametrize("count", [0, 11, -1])
    def test_paragraphs_out_of_range(self, count):
        with pytest.raises(ValidationError):
            GenerationRequest(paragraphs=count)

    def test_unknown_genre_rejected(self):
        with pytest.raises(ValidationError):
            GenerationRequest(genre="romance")

    def test_sci_fi_genre(self):
        assert GenerationRequest(genre="sci-fi").genre == Genre.SCI_FI


def test_story_result_omits_absent_fields():
    result = StoryResult(story="x", images=[ImageUrl(url="u"), ImageError(error="image_upstream_500", detail="boom")])
    dumped = result.model_dump(exclude_none=True)

    assert dumped == {
        "story": "x",
        "images": [{"url": "u"}, {"error": "image_upstream_500", "detail": "boom"}],
    }
