"""Prompts for the three inference stages.

Provides the fixed ingredient-extraction instruction and factory functions
for the recipe and video-search prompts. Builders are pure: they only format
strings, so they can be tested without a provider.
"""

from typing import Optional

# Sentinel values the web client sends for "no constraint"
ANY_CUISINE = "Any"
NO_DIETARY_RESTRICTION = "None"

INGREDIENT_EXTRACTION_PROMPT = (
    "Analyze this food image and list all visible ingredients. "
    "Return just the ingredient names as a simple comma-separated list, "
    "with no additional formatting or explanation."
)

RECIPE_SECTIONS = (
    "Recipe Name",
    "Ingredients (with measurements)",
    "Instructions (step-by-step)",
    "Cooking Time",
    "Servings",
    "Dietary Information",
    "Tips and Variations",
    "Nutritional Information (approximate)",
)


def active_constraint(value: Optional[str], sentinel: str) -> Optional[str]:
    """Return the trimmed constraint, or None if it is blank or the sentinel.

    The sentinel is matched case-insensitively, so "any" and "ANY" also mean
    no cuisine constraint.
    """
    if value is None:
        return None
    value = value.strip()
    if not value or value.lower() == sentinel.lower():
        return None
    return value


def build_recipe_prompt(
    ingredients: str,
    cuisine: Optional[str] = None,
    dietary_restrictions: Optional[str] = None,
) -> str:
    """Generate the recipe synthesis prompt.

    Args:
        ingredients: Free text or comma-separated ingredient list.
        cuisine: Cuisine constraint, omitted when blank or "Any".
        dietary_restrictions: Dietary constraint, omitted when blank or "None".

    Returns:
        str: Prompt asking for a recipe in the eight named sections that uses
        every supplied ingredient.
    """
    lines = [f"Create a detailed recipe using these ingredients: {ingredients.strip()}."]

    cuisine = active_constraint(cuisine, ANY_CUISINE)
    if cuisine:
        lines.append(f"The cuisine should be {cuisine}.")

    dietary_restrictions = active_constraint(dietary_restrictions, NO_DIETARY_RESTRICTION)
    if dietary_restrictions:
        lines.append(f"Please ensure the recipe is {dietary_restrictions}.")

    lines.append("")
    lines.append("Format the recipe with these sections:")
    lines.extend(f"- {section}" for section in RECIPE_SECTIONS)
    lines.append("")
    lines.append(
        "Be creative but practical, and make sure all the provided ingredients are used."
    )
    return "\n".join(lines)


def build_video_query_prompt(
    recipe_name: str,
    ingredients: Optional[str] = None,
    cuisine: Optional[str] = None,
) -> str:
    """Generate the prompt that asks for a YouTube search query.

    Ingredient and cuisine hints are included only when supplied.
    """
    lines = [
        "Create a precise YouTube search query for a recipe tutorial.",
        "",
        f"Recipe: {recipe_name.strip()}",
    ]
    if ingredients and ingredients.strip():
        lines.append(f"Main ingredients: {ingredients.strip()}")
    if cuisine and cuisine.strip():
        lines.append(f"Cuisine type: {cuisine.strip()}")

    lines.append("")
    lines.append(
        """INSTRUCTIONS:
1. Format the query to find reliable recipe tutorials.
2. Include the exact recipe name and essential ingredients.
3. Add phrases like "recipe tutorial" or "how to make" to target instructional videos.
4. Keep it between 5-10 words for optimal YouTube search results.
5. Avoid generic terms like "best" or "top" unless part of the recipe name.
6. Focus on popular cooking terms that will yield multiple high-quality results.

Your response should ONLY contain the optimized search query text - no explanations, quotes, or additional formatting.
Example output: authentic chicken tikka masala recipe tutorial"""
    )
    return "\n".join(lines)
