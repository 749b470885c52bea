"""Ingredient extraction from images using the Gemini vision API.

Stage (a) of the pipeline:
- validate_image_mime(): declared MIME must be image/*, sniffed bytes too
- validate_image_size(): reject empty or oversized images
- parse_ingredient_list(): pure parser for the provider's comma-separated reply
- ImageIngredientExtractor.extract(): validate -> one provider call -> parse

Validation failures raise RequestValidationFailed before the provider is
touched. Provider failures propagate as InferenceError.
"""

import re
from typing import Optional

import filetype

from src.prompts.prompts import INGREDIENT_EXTRACTION_PROMPT
from src.providers.gemini import GeminiClient
from src.utils.exceptions import RequestValidationFailed
from src.utils.logger import logger

DEFAULT_MAX_IMAGE_BYTES = 10 * 1024 * 1024

# Leading bullet or enumeration: "- ", "* ", "• ", "1. ", "2) "
LIST_MARKER = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s*")


def sniff_image_mime(image_bytes: bytes) -> Optional[str]:
    """Return the MIME type detected from magic bytes, or None if unknown."""
    kind = filetype.guess(image_bytes)
    return kind.mime if kind is not None else None


def validate_image_mime(image_bytes: bytes, mime_type: Optional[str]) -> bool:
    """Validate that an upload is an image.

    The declared MIME type must start with ``image/``. If the bytes carry a
    recognisable signature it must be an image signature as well; unknown
    signatures defer to the declared type.

    Args:
        image_bytes: Raw image bytes.
        mime_type: MIME type declared by the client.

    Returns:
        True if valid, False otherwise (logged as warning).
    """
    if not mime_type or not mime_type.lower().startswith("image/"):
        logger.warning(f"Rejected upload with non-image MIME type: {mime_type}")
        return False

    sniffed = sniff_image_mime(image_bytes)
    if sniffed is not None and not sniffed.startswith("image/"):
        logger.warning(f"Rejected upload declared as {mime_type} but detected as {sniffed}")
        return False
    return True


def validate_image_size(image_bytes: bytes, max_bytes: int = DEFAULT_MAX_IMAGE_BYTES) -> bool:
    """Validate image size against the configured limit.

    Returns:
        True if 0 < size <= max_bytes, False otherwise.
    """
    size = len(image_bytes)
    if size == 0:
        logger.warning("Rejected empty image upload")
        return False
    if size > max_bytes:
        logger.warning(
            f"Image size {size / (1024 * 1024):.2f}MB exceeds limit of "
            f"{max_bytes / (1024 * 1024):.0f}MB"
        )
        return False
    return True


def parse_ingredient_list(response_text: Optional[str]) -> list[str]:
    """Parse the provider's ingredient reply into an ordered list.

    Splits on commas, trims each token and drops empty ones. Order and
    duplicates are preserved. Never raises.

    Output without any comma is handled line by line: each non-empty line is
    an ingredient after removing a leading list marker. A single comma-free
    line is therefore returned as a single ingredient.

    Examples:
        >>> parse_ingredient_list("a, b ,c,")
        ['a', 'b', 'c']
        >>> parse_ingredient_list("- tomato\\n- onion")
        ['tomato', 'onion']
        >>> parse_ingredient_list("")
        []
    """
    if not response_text:
        return []

    if "," in response_text:
        tokens = response_text.split(",")
    else:
        tokens = [LIST_MARKER.sub("", line) for line in response_text.splitlines()]

    return [token.strip() for token in tokens if token.strip()]


class ImageIngredientExtractor:
    """Extracts an ingredient list from a food photo with one provider call."""

    def __init__(self, client: GeminiClient, max_image_bytes: int = DEFAULT_MAX_IMAGE_BYTES) -> None:
        self.client = client
        self.max_image_bytes = max_image_bytes

    def validate(self, image_bytes: bytes, mime_type: Optional[str]) -> None:
        """Raise RequestValidationFailed for anything that must not reach the provider."""
        if not image_bytes:
            raise RequestValidationFailed("Uploaded image is empty")
        if not validate_image_mime(image_bytes, mime_type):
            raise RequestValidationFailed("Not an image! Please upload an image file.")
        if not validate_image_size(image_bytes, self.max_image_bytes):
            raise RequestValidationFailed(
                f"Image too large. Maximum size is {self.max_image_bytes // (1024 * 1024)}MB"
            )

    async def extract(self, image_bytes: bytes, mime_type: Optional[str]) -> list[str]:
        """Return the ingredients visible in the image.

        Args:
            image_bytes: Raw image bytes.
            mime_type: Declared MIME type (must be image/*).

        Returns:
            Ingredient names in provider order. May be empty.

        Raises:
            RequestValidationFailed: Invalid MIME type, empty or oversized image.
            InferenceError: Provider call failed.
        """
        self.validate(image_bytes, mime_type)

        # Prefer the sniffed type so "image/*" style declarations still reach Gemini correctly
        send_mime = sniff_image_mime(image_bytes) or mime_type
        text = await self.client.generate(
            [INGREDIENT_EXTRACTION_PROMPT, GeminiClient.image_part(image_bytes, send_mime)]
        )

        ingredients = parse_ingredient_list(text)
        logger.info(f"Extracted {len(ingredients)} ingredient(s) from image ({len(image_bytes)} bytes)")
        return ingredients
