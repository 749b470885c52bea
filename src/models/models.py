"""Data models and schemas for the Recipe Vision Service.

Defines Pydantic models for request/response validation and domain objects.
Wire names are camelCase (matching the web client); Python attributes are
snake_case. All models use Pydantic v2.
"""

from pathlib import Path
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class RecipeRequest(CamelModel):
    """Request body for POST /api/generate-recipe.

    ``ingredients`` is optional at the schema level so that a missing value is
    reported as ``400 {"error": "Ingredients are required"}`` by the
    synthesizer rather than as a schema error.
    """

    ingredients: Annotated[
        Optional[str],
        Field(None, description="Free text or comma-separated ingredient list"),
    ]
    cuisine: Annotated[
        Optional[str],
        Field(None, description='Cuisine constraint; "Any" means no constraint'),
    ]
    dietary_restrictions: Annotated[
        Optional[str],
        Field(None, description='Dietary constraint; "None" means no constraint'),
    ]

    @field_validator("ingredients", mode="before")
    @classmethod
    def join_ingredient_list(cls, ingredients):
        """Accept the array returned by /api/analyze-image as well as a string."""
        if isinstance(ingredients, list):
            return ", ".join(str(item).strip() for item in ingredients if str(item).strip())
        return ingredients


class RecipeResponse(BaseModel):
    """Response body for POST /api/generate-recipe."""

    recipe: str


class IngredientsResponse(BaseModel):
    """Response body for POST /api/analyze-image."""

    ingredients: List[str]


class VideoSearchRequest(CamelModel):
    """Request body for POST /api/find-recipe-video."""

    recipe_name: Annotated[Optional[str], Field(None, description="Recipe to find a video for")]
    ingredients: Annotated[Optional[str], Field(None, description="Optional main ingredients hint")]
    cuisine: Annotated[Optional[str], Field(None, description="Optional cuisine hint")]

    @field_validator("ingredients", mode="before")
    @classmethod
    def join_ingredient_list(cls, ingredients):
        """Accept an ingredient array as well as a string."""
        if isinstance(ingredients, list):
            return ", ".join(str(item).strip() for item in ingredients if str(item).strip())
        return ingredients


class VideoSearchResult(CamelModel):
    """Search query plus the YouTube URLs derived from it."""

    search_query: str
    youtube_embed_url: str
    youtube_first_result_url: str
    youtube_search_url: str


class StagedUpload(BaseModel):
    """An uploaded image written to the staging directory for one request."""

    model_config = ConfigDict(frozen=True)

    file_path: Path
    mime_type: str
    size_bytes: int = Field(ge=0)
