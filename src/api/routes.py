"""HTTP routes for the three pipeline stages.

Each handler runs exactly one stage. APIError subclasses (validation
failures) pass through unchanged; anything else raised by the stage is
logged and converted into an UpstreamDependencyError carrying the route's
stable error string and the underlying message as ``details``.
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Request, UploadFile

from src.models.models import (
    IngredientsResponse,
    RecipeRequest,
    RecipeResponse,
    VideoSearchRequest,
    VideoSearchResult,
)
from src.pipeline.ingredients import ImageIngredientExtractor
from src.pipeline.recipes import RecipeSynthesizer
from src.pipeline.videos import VideoQueryDeriver
from src.uploads.staging import UploadStaging
from src.utils.exceptions import APIError, UpstreamDependencyError
from src.utils.logger import logger

router = APIRouter()


def get_extractor(request: Request) -> ImageIngredientExtractor:
    return request.app.state.extractor


def get_synthesizer(request: Request) -> RecipeSynthesizer:
    return request.app.state.synthesizer


def get_video_deriver(request: Request) -> VideoQueryDeriver:
    return request.app.state.video_deriver


def get_staging(request: Request) -> UploadStaging:
    return request.app.state.staging


def upstream_error(message: str, exc: Exception, request: Request) -> UpstreamDependencyError:
    """Log a stage failure and wrap it for the client."""
    detail = str(exc) or type(exc).__name__
    logger.error(
        f"{message}: {detail}",
        extra={"request_id": getattr(request.state, "request_id", None)},
    )
    return UpstreamDependencyError(message, details=detail)


@router.post("/analyze-image", response_model=IngredientsResponse)
async def analyze_image(
    request: Request,
    image: Optional[UploadFile] = File(None),
    extractor: ImageIngredientExtractor = Depends(get_extractor),
    staging: UploadStaging = Depends(get_staging),
) -> IngredientsResponse:
    """Extract ingredient names from an uploaded food photo."""
    try:
        async with staging.stage(image) as staged:
            image_bytes = await staging.read(staged)
            ingredients = await extractor.extract(image_bytes, staged.mime_type)
    except APIError:
        raise
    except Exception as e:
        raise upstream_error("Failed to analyze image", e, request) from e

    return IngredientsResponse(ingredients=ingredients)


@router.post("/generate-recipe", response_model=RecipeResponse)
async def generate_recipe(
    request: Request,
    body: Optional[RecipeRequest] = None,
    synthesizer: RecipeSynthesizer = Depends(get_synthesizer),
) -> RecipeResponse:
    """Generate a recipe from ingredients and optional constraints."""
    body = body or RecipeRequest()
    try:
        recipe = await synthesizer.synthesize(
            body.ingredients,
            cuisine=body.cuisine,
            dietary_restrictions=body.dietary_restrictions,
        )
    except APIError:
        raise
    except Exception as e:
        raise upstream_error("Failed to generate recipe", e, request) from e

    return RecipeResponse(recipe=recipe)


@router.post(
    "/find-recipe-video",
    response_model=VideoSearchResult,
    response_model_by_alias=True,
)
async def find_recipe_video(
    request: Request,
    body: Optional[VideoSearchRequest] = None,
    video_deriver: VideoQueryDeriver = Depends(get_video_deriver),
) -> VideoSearchResult:
    """Derive a YouTube search query and ready-to-use URLs for a recipe."""
    body = body or VideoSearchRequest()
    try:
        return await video_deriver.derive_query(
            body.recipe_name,
            ingredients=body.ingredients,
            cuisine=body.cuisine,
        )
    except APIError:
        raise
    except Exception as e:
        raise upstream_error("Failed to find recipe video", e, request) from e
