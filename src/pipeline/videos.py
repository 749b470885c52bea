"""Video search query derivation for a recipe (stage c).

The provider writes a short YouTube search query; the URLs are then pure
string formatting with no further provider interaction.
"""

from typing import Optional
from urllib.parse import quote

from src.models.models import VideoSearchResult
from src.prompts.prompts import build_video_query_prompt
from src.providers.gemini import GeminiClient
from src.utils.exceptions import InferenceError, RequestValidationFailed
from src.utils.logger import logger

# Privacy-enhanced embed domain
YOUTUBE_EMBED_URL = "https://www.youtube-nocookie.com/embed?search={query}"
YOUTUBE_SEARCH_URL = "https://www.youtube.com/results?search_query={query}"

# Characters JavaScript's encodeURIComponent leaves alone besides alphanumerics and "_.-~"
URI_COMPONENT_SAFE = "!*'()"


def encode_uri_component(value: str) -> str:
    """Percent-encode like encodeURIComponent (space becomes %20, not +)."""
    return quote(value, safe=URI_COMPONENT_SAFE)


def build_video_urls(search_query: str) -> VideoSearchResult:
    """Substitute the encoded query into the YouTube URL templates."""
    encoded = encode_uri_component(search_query)
    embed_url = YOUTUBE_EMBED_URL.format(query=encoded)
    return VideoSearchResult(
        search_query=search_query,
        youtube_embed_url=embed_url,
        youtube_first_result_url=embed_url,
        youtube_search_url=YOUTUBE_SEARCH_URL.format(query=encoded),
    )


class VideoQueryDeriver:
    """Asks the provider for a 5-10 word tutorial search query."""

    def __init__(self, client: GeminiClient) -> None:
        self.client = client

    async def derive_query(
        self,
        recipe_name: Optional[str],
        ingredients: Optional[str] = None,
        cuisine: Optional[str] = None,
    ) -> VideoSearchResult:
        """Derive a search query and the video URLs for a recipe.

        Raises:
            RequestValidationFailed: If recipe_name is missing or blank.
            InferenceError: If the provider call fails or the query is blank.
        """
        if not recipe_name or not recipe_name.strip():
            raise RequestValidationFailed("Recipe name is required")

        prompt = build_video_query_prompt(recipe_name, ingredients, cuisine)
        search_query = (await self.client.generate([prompt])).strip()

        if not search_query:
            raise InferenceError("Gemini returned an empty search query")

        logger.info(f"Video search query for '{recipe_name.strip()}': {search_query}")
        return build_video_urls(search_query)
