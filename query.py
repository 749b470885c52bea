#!/usr/bin/env python3
"""Ad hoc query runner for the Recipe Vision pipeline.

Run pipeline stages directly against Gemini without starting the API server.

Usage:
    python query.py --image images/fridge.jpg
    python query.py "chicken, rice, broccoli"
    python query.py --cuisine Thai --diet vegetarian "tofu, rice noodles"
    python query.py --video "Chicken Tikka Masala"
    python query.py --image images/fridge.jpg --recipe --video

Features:
- --image runs ingredient extraction; add --recipe to feed the result into synthesis
- Plain text argument runs recipe synthesis
- --video derives a YouTube search query (from the text argument, or the
  generated recipe's first line when combined with --recipe)
- --debug prints raw JSON results
"""

import argparse
import asyncio
import mimetypes
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markdown import Markdown

from src.pipeline.ingredients import ImageIngredientExtractor
from src.pipeline.recipes import RecipeSynthesizer
from src.pipeline.videos import VideoQueryDeriver
from src.providers.gemini import GeminiClient
from src.utils.config import config
from src.utils.exceptions import APIError, InferenceError
from src.utils.logger import logger

console = Console()


def recipe_title(recipe: str) -> str:
    """Best-effort recipe name: first non-empty line without markdown decoration."""
    for line in recipe.splitlines():
        title = line.strip().lstrip("#*- ").rstrip("*").strip()
        if title.lower().startswith("recipe name:"):
            title = title.split(":", 1)[1].strip(" *")
        if title and title.lower() != "recipe name":
            return title
    return ""


async def run_pipeline(
    text: Optional[str],
    image_path: Optional[str],
    cuisine: Optional[str],
    diet: Optional[str],
    want_recipe: bool,
    want_video: bool,
    debug: bool,
) -> None:
    """Run the requested stages in sequence and print their results."""
    client = GeminiClient.from_config(config)
    ingredients_text = text

    if image_path:
        image_file = Path(image_path)
        if not image_file.exists():
            console.print(f"[red]✗ Error: Image file not found: {image_path}[/red]")
            sys.exit(1)

        mime_type = mimetypes.guess_type(image_file.name)[0] or "image/jpeg"
        extractor = ImageIngredientExtractor(client, config.max_image_bytes)
        logger.info(f"Analyzing image: {image_file.name} ({mime_type})...")
        ingredients = await extractor.extract(image_file.read_bytes(), mime_type)

        console.print("[bold cyan]Detected ingredients[/bold cyan]")
        if debug:
            console.print_json(data={"ingredients": ingredients})
        else:
            console.print(", ".join(ingredients) or "[yellow]none[/yellow]")
        console.print()
        ingredients_text = ", ".join(ingredients)

    recipe = None
    if want_recipe and ingredients_text:
        synthesizer = RecipeSynthesizer(client)
        logger.info("Generating recipe...")
        recipe = await synthesizer.synthesize(ingredients_text, cuisine=cuisine, dietary_restrictions=diet)
        console.print(Markdown(recipe))
        console.print()

    if want_video:
        recipe_name = recipe_title(recipe) if recipe else text
        deriver = VideoQueryDeriver(client)
        logger.info(f"Deriving video search query for: {recipe_name}")
        result = await deriver.derive_query(recipe_name, ingredients=ingredients_text if recipe else None, cuisine=cuisine)
        if debug:
            console.print_json(data=result.model_dump(by_alias=True))
        else:
            console.print(f"[bold cyan]Search query:[/bold cyan] {result.search_query}")
            console.print(f"[bold cyan]Watch:[/bold cyan] {result.youtube_search_url}")


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Run Recipe Vision pipeline stages from the terminal")
    parser.add_argument("text", nargs="*", help="Ingredients (recipe mode) or recipe name (--video only)")
    parser.add_argument("--image", help="Path to a food photo to extract ingredients from")
    parser.add_argument("--cuisine", help='Cuisine constraint ("Any" for none)')
    parser.add_argument("--diet", help='Dietary restriction ("None" for none)')
    parser.add_argument("--recipe", action="store_true", help="Generate a recipe (default for text input)")
    parser.add_argument("--video", action="store_true", help="Derive a YouTube search query")
    parser.add_argument("--debug", action="store_true", help="Print raw JSON results")
    args = parser.parse_args(argv)

    text = " ".join(args.text).strip() or None
    if not text and not args.image:
        parser.error("provide ingredients, a recipe name, or --image")

    # Plain text without --video means "make me a recipe"
    want_recipe = args.recipe or (bool(text) and not args.image and not args.video)

    try:
        config.validate()
        asyncio.run(
            run_pipeline(text, args.image, args.cuisine, args.diet, want_recipe, args.video, args.debug)
        )
    except KeyboardInterrupt:
        logger.info("Query interrupted by user.")
        sys.exit(0)
    except (ValueError, APIError, InferenceError) as e:
        logger.error(f"Query failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
