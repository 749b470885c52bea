"""Gemini inference provider client.

Thin async wrapper around the google-genai SDK that the pipeline stages use
as an opaque ``generate(prompt_parts) -> text`` function. SDK failures are
re-raised as InferenceError with a readable message; nothing is retried.
"""

from typing import Optional, Sequence, Union

from google import genai
from google.genai import errors, types

from src.utils.config import Config
from src.utils.exceptions import InferenceError
from src.utils.logger import logger

PromptPart = Union[str, types.Part]


class GeminiClient:
    """Explicitly constructed provider client, injected into each stage."""

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-1.5-flash",
        vision_model: Optional[str] = None,
        timeout_ms: int = 60000,
        temperature: Optional[float] = None,
        max_output_tokens: Optional[int] = None,
    ) -> None:
        """Initialize the SDK client.

        Args:
            api_key: Gemini API key (from environment or secret store).
            model: Model used for text-only prompts.
            vision_model: Model used for prompts with an image. Defaults to ``model``.
            timeout_ms: Network timeout applied by the SDK to every call.
            temperature: Optional sampling temperature.
            max_output_tokens: Optional cap on response length.

        Raises:
            ValueError: If api_key is empty.
        """
        if not api_key:
            raise ValueError("GEMINI_API_KEY is required")

        self.model = model
        self.vision_model = vision_model or model
        self.generation_config = types.GenerateContentConfig(
            temperature=temperature,
            max_output_tokens=max_output_tokens,
        )
        self._client = genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=timeout_ms),
        )

    @classmethod
    def from_config(cls, config: Config) -> "GeminiClient":
        """Build a client from application configuration."""
        return cls(
            api_key=config.GEMINI_API_KEY,
            model=config.GEMINI_MODEL,
            vision_model=config.IMAGE_DETECTION_MODEL,
            timeout_ms=config.GEMINI_TIMEOUT_MS,
            temperature=config.TEMPERATURE,
            max_output_tokens=config.MAX_OUTPUT_TOKENS,
        )

    @staticmethod
    def image_part(data: bytes, mime_type: str) -> types.Part:
        """Inline image part; the SDK base64-encodes ``data`` on the wire."""
        return types.Part.from_bytes(data=data, mime_type=mime_type)

    async def generate(self, parts: Sequence[PromptPart], model: Optional[str] = None) -> str:
        """Submit prompt parts and return the generated text.

        Args:
            parts: Text strings and/or ``types.Part`` objects, in prompt order.
            model: Model override. Defaults to the vision model when any part is
                not a plain string, else the text model.

        Returns:
            The response text as returned by the provider.

        Raises:
            InferenceError: If the call fails, times out, or yields no text.
        """
        if model is None:
            has_media = any(not isinstance(part, str) for part in parts)
            model = self.vision_model if has_media else self.model

        logger.debug(f"Gemini call: model={model}, parts={len(parts)}")
        try:
            response = await self._client.aio.models.generate_content(
                model=model,
                contents=list(parts),
                config=self.generation_config,
            )
        except errors.APIError as e:
            raise InferenceError(f"Gemini API error {e.code}: {e.message}") from e
        except Exception as e:
            raise InferenceError(str(e) or type(e).__name__) from e

        text = response.text
        if text is None:
            raise InferenceError("Gemini returned no text (response may have been blocked)")
        return text
