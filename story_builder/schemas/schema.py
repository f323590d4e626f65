from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Genre(str, Enum):
    FANTASY = "fantasy"
    MYSTERY = "mystery"
    SCI_FI = "sci-fi"


class GenerationRequest(BaseModel):
    genre: Genre = Genre.FANTASY
    characters: List[str] = Field(default_factory=list)
    paragraphs: int = Field(default=3, ge=1, le=10)
    images_per_paragraph: bool = Field(default=False, alias="imagesPerParagraph")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("characters", mode="before")
    @classmethod
    def split_characters(cls, value: Any) -> Any:
        # The form may send "Arya, Tom" instead of a list
        if value is None:
            return []
        if isinstance(value, str):
            value = value.split(",")
        if isinstance(value, list):
            return [str(name).strip() for name in value if str(name).strip()]
        return value


# --- Image slots: exactly one of these shapes per paragraph ---

class ImageUrl(BaseModel):
    url: str


class ImageInline(BaseModel):
    base64: str


class ImageError(BaseModel):
    error: str
    detail: Optional[str] = None
    message: Optional[str] = None


class ImageRaw(BaseModel):
    raw: Any


ImageResult = Union[ImageUrl, ImageInline, ImageError, ImageRaw]


class StoryResult(BaseModel):
    story: str
    paragraphs: Optional[List[str]] = None
    images: List[ImageResult] = Field(default_factory=list)
    raw: Optional[Any] = None
