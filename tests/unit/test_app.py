"""Unit tests for the entry points: app.py (server) and query.py (CLI)."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

import app as server
import query
from src.models.models import VideoSearchResult


class TestServerMain:
    def test_exits_on_missing_key(self, settings):
        settings.GEMINI_API_KEY = ""
        with patch.object(server, "config", settings), patch.object(server.uvicorn, "run") as mock_run:
            with pytest.raises(SystemExit) as exc_info:
                server.main()

        assert exc_info.value.code == 1
        mock_run.assert_not_called()

    def test_runs_uvicorn_with_configured_address(self, settings):
        with patch.object(server, "config", settings), \
                patch("src.providers.gemini.genai.Client"), \
                patch.object(server.uvicorn, "run") as mock_run:
            server.main()

        mock_run.assert_called_once()
        assert mock_run.call_args.kwargs["host"] == "0.0.0.0"
        assert mock_run.call_args.kwargs["port"] == 5007


class TestRecipeTitle:
    @pytest.mark.parametrize(
        "recipe, expected",
        [
            ("**Recipe Name:** Tomato Soup\n\n**Description:** ...", "Tomato Soup"),
            ("# Recipe Name\nGarlic Butter Pasta\n", "Garlic Butter Pasta"),
            ("## Spicy Thai Basil Chicken\n- Ingredients", "Spicy Thai Basil Chicken"),
            ("\n\n", ""),
        ],
    )
    def test_title(self, recipe, expected):
        assert query.recipe_title(recipe) == expected


class TestQueryMain:
    def test_requires_input(self):
        with pytest.raises(SystemExit) as exc_info:
            query.main([])
        assert exc_info.value.code == 2

    def test_text_runs_recipe_stage(self, settings):
        synthesizer = MagicMock()
        synthesizer.synthesize = AsyncMock(return_value="**Recipe Name:** Fried Rice")

        with patch.object(query, "config", settings), \
                patch.object(query.GeminiClient, "from_config"), \
                patch.object(query, "RecipeSynthesizer", return_value=synthesizer), \
                patch.object(query, "console"):
            query.main(["--cuisine", "Chinese", "rice,", "egg"])

        synthesizer.synthesize.assert_awaited_once_with("rice, egg", cuisine="Chinese", dietary_restrictions=None)

    def test_video_only(self, settings):
        deriver = MagicMock()
        deriver.derive_query = AsyncMock(
            return_value=VideoSearchResult(
                search_query="pad thai recipe",
                youtube_embed_url="embed",
                youtube_first_result_url="embed",
                youtube_search_url="search",
            )
        )

        with patch.object(query, "config", settings), \
                patch.object(query.GeminiClient, "from_config"), \
                patch.object(query, "VideoQueryDeriver", return_value=deriver), \
                patch.object(query, "RecipeSynthesizer") as mock_synth, \
                patch.object(query, "console"):
            query.main(["--video", "Pad", "Thai"])

        deriver.derive_query.assert_awaited_once_with("Pad Thai", ingredients=None, cuisine=None)
        mock_synth.assert_not_called()

    def test_missing_key_exits(self, settings):
        settings.GEMINI_API_KEY = ""
        with patch.object(query, "config", settings), pytest.raises(SystemExit) as exc_info:
            query.main(["tomato"])
        assert exc_info.value.code == 1
