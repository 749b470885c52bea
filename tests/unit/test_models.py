"""Unit tests for Pydantic models validation."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from src.models.models import (
    IngredientsResponse,
    RecipeRequest,
    StagedUpload,
    VideoSearchRequest,
    VideoSearchResult,
)


class TestRecipeRequest:
    """Test RecipeRequest parsing of the generate-recipe body."""

    def test_camel_case_aliases(self):
        request = RecipeRequest.model_validate(
            {"ingredients": "tomato, onion", "cuisine": "Italian", "dietaryRestrictions": "vegan"}
        )
        assert request.ingredients == "tomato, onion"
        assert request.cuisine == "Italian"
        assert request.dietary_restrictions == "vegan"

    def test_snake_case_names_accepted(self):
        request = RecipeRequest(ingredients="rice", dietary_restrictions="gluten-free")
        assert request.dietary_restrictions == "gluten-free"

    def test_all_fields_optional(self):
        """Missing ingredients are reported by the synthesizer, not the schema."""
        request = RecipeRequest()
        assert request.ingredients is None
        assert request.cuisine is None
        assert request.dietary_restrictions is None

    def test_whitespace_stripped(self):
        request = RecipeRequest(ingredients="  tomato, onion  ", cuisine=" Thai ")
        assert request.ingredients == "tomato, onion"
        assert request.cuisine == "Thai"

    def test_ingredient_list_joined(self):
        request = RecipeRequest.model_validate({"ingredients": ["tomato", " onion ", "", "garlic"]})
        assert request.ingredients == "tomato, onion, garlic"

    def test_empty_ingredient_list_becomes_blank(self):
        request = RecipeRequest.model_validate({"ingredients": []})
        assert request.ingredients == ""

    def test_non_string_ingredients_rejected(self):
        with pytest.raises(ValidationError):
            RecipeRequest.model_validate({"ingredients": {"tomato": 2}})


class TestVideoSearchRequest:
    def test_camel_case_aliases(self):
        request = VideoSearchRequest.model_validate(
            {"recipeName": "Pad Thai", "ingredients": "noodles, shrimp", "cuisine": "Thai"}
        )
        assert request.recipe_name == "Pad Thai"
        assert request.ingredients == "noodles, shrimp"
        assert request.cuisine == "Thai"

    def test_ingredient_list_joined(self):
        request = VideoSearchRequest.model_validate({"recipeName": "Pad Thai", "ingredients": ["noodles", "shrimp"]})
        assert request.ingredients == "noodles, shrimp"

    def test_recipe_name_optional_at_schema_level(self):
        assert VideoSearchRequest().recipe_name is None


class TestVideoSearchResult:
    def test_serializes_camel_case(self):
        result = VideoSearchResult(
            search_query="pad thai recipe",
            youtube_embed_url="embed",
            youtube_first_result_url="first",
            youtube_search_url="search",
        )
        assert result.model_dump(by_alias=True) == {
            "searchQuery": "pad thai recipe",
            "youtubeEmbedUrl": "embed",
            "youtubeFirstResultUrl": "first",
            "youtubeSearchUrl": "search",
        }


class TestIngredientsResponse:
    def test_empty_list_allowed(self):
        assert IngredientsResponse(ingredients=[]).model_dump() == {"ingredients": []}


class TestStagedUpload:
    def test_valid(self, tmp_path):
        staged = StagedUpload(file_path=tmp_path / "a.jpg", mime_type="image/jpeg", size_bytes=10)
        assert isinstance(staged.file_path, Path)

    def test_frozen(self, tmp_path):
        staged = StagedUpload(file_path=tmp_path / "a.jpg", mime_type="image/jpeg", size_bytes=10)
        with pytest.raises(ValidationError):
            staged.size_bytes = 20

    def test_negative_size_rejected(self, tmp_path):
        with pytest.raises(ValidationError):
            StagedUpload(file_path=tmp_path / "a.jpg", mime_type="image/jpeg", size_bytes=-1)
