"""Recipe Vision Service - HTTP entry point.

Serves the three pipeline endpoints:
- POST /api/analyze-image      photo -> ingredient list
- POST /api/generate-recipe    ingredients + constraints -> recipe text
- POST /api/find-recipe-video  recipe name -> YouTube search query and URLs

Run with: python app.py
Or:       uvicorn src.api.app:create_app --factory --port 5007
"""

import uvicorn

from src.api.app import create_app
from src.utils.config import config
from src.utils.logger import logger


def main() -> None:
    """Validate configuration and start the server (fail fast on bad config)."""
    try:
        app = create_app(config)
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        raise SystemExit(1) from e

    logger.info(f"Starting Recipe Vision Service on {config.HOST}:{config.PORT}")
    logger.info(f"API docs available at: http://localhost:{config.PORT}/docs")
    uvicorn.run(app, host=config.HOST, port=config.PORT, log_level="warning")


if __name__ == "__main__":
    main()
