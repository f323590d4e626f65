from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.templating import Jinja2Templates

from story_builder.schemas.schema import Genre

# This points to the 'story_builder/templates' folder
BASE_DIR = Path(__file__).resolve().parent.parent
templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))

router = APIRouter()


@router.get("/")
async def home(request: Request):
    return templates.TemplateResponse(request, "index.html", {
        "genres": [genre.value for genre in Genre],
        "default_characters": "Arya, Tom",
        "default_paragraphs": 3,
    })
