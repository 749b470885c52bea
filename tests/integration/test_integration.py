"""Integration tests against the real Gemini API.

Each stage is exercised end to end with the live provider, plus one pass
through the HTTP layer. Requires GEMINI_API_KEY (see conftest.py).

Run: pytest tests/integration -m integration -v
"""

import base64

import pytest
from fastapi.testclient import TestClient

from src.api.app import create_app
from src.pipeline.ingredients import ImageIngredientExtractor
from src.pipeline.recipes import RecipeSynthesizer
from src.pipeline.videos import VideoQueryDeriver

pytestmark = pytest.mark.integration

# 1x1 PNG; the provider may see no food at all, which must still parse to a list
TINY_PNG = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mP8z8BQDwAEhQGAhKmMIQAAAABJRU5ErkJggg=="
)


@pytest.mark.asyncio
async def test_extract_ingredients_returns_list(gemini_client, live_settings):
    extractor = ImageIngredientExtractor(gemini_client, live_settings.max_image_bytes)

    ingredients = await extractor.extract(TINY_PNG, "image/png")

    assert isinstance(ingredients, list)
    assert all(item and item == item.strip() for item in ingredients)


@pytest.mark.asyncio
async def test_synthesize_recipe(gemini_client):
    recipe = await RecipeSynthesizer(gemini_client).synthesize(
        "chicken, rice, broccoli", cuisine="Chinese", dietary_restrictions="None"
    )

    assert recipe.strip()
    assert "ingredient" in recipe.lower()


@pytest.mark.asyncio
async def test_derive_video_query(gemini_client):
    result = await VideoQueryDeriver(gemini_client).derive_query(
        "Chicken Tikka Masala", ingredients="chicken, yogurt, tomato", cuisine="Indian"
    )

    assert result.search_query
    assert result.search_query == result.search_query.strip()
    assert result.youtube_search_url.startswith("https://www.youtube.com/results?search_query=")
    assert result.youtube_first_result_url == result.youtube_embed_url


def test_generate_recipe_over_http(live_settings, tmp_path):
    live_settings.UPLOAD_DIR = str(tmp_path / "uploads")

    with TestClient(create_app(live_settings)) as client:
        response = client.post("/api/generate-recipe", json={"ingredients": ["egg", "spinach", "feta"]})

    assert response.status_code == 200
    assert response.json()["recipe"].strip()
