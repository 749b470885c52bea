"""Recipe synthesis from an ingredient list and optional constraints (stage b)."""

from typing import Optional

from src.prompts.prompts import build_recipe_prompt
from src.providers.gemini import GeminiClient
from src.utils.exceptions import InferenceError, RequestValidationFailed
from src.utils.logger import logger


class RecipeSynthesizer:
    """Builds the recipe prompt and returns the provider's text verbatim."""

    def __init__(self, client: GeminiClient) -> None:
        self.client = client

    async def synthesize(
        self,
        ingredients: Optional[str],
        cuisine: Optional[str] = None,
        dietary_restrictions: Optional[str] = None,
    ) -> str:
        """Generate a recipe that uses every supplied ingredient.

        Args:
            ingredients: Free text or comma-separated list. Required.
            cuisine: Optional cuisine; "Any" means no constraint.
            dietary_restrictions: Optional restriction; "None" means no constraint.

        Returns:
            Recipe text exactly as generated (eight named sections).

        Raises:
            RequestValidationFailed: If ingredients are missing or blank.
            InferenceError: If the provider call fails or returns blank text.
        """
        if not ingredients or not ingredients.strip():
            raise RequestValidationFailed("Ingredients are required")

        prompt = build_recipe_prompt(ingredients, cuisine, dietary_restrictions)
        recipe = await self.client.generate([prompt])

        if not recipe.strip():
            raise InferenceError("Gemini returned an empty recipe")

        logger.info(f"Generated recipe ({len(recipe)} chars) for ingredients: {ingredients.strip()[:80]}")
        return recipe
