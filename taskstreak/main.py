"""Main entry point for the TaskStreak API"""
import logging
import uvicorn

from taskstreak.config import API_HOST, API_PORT, LOG_LEVEL, validate_config

# Configure logging
logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO)
)

logger = logging.getLogger(__name__)


def main() -> None:
    """Validate configuration and serve the API"""
    validate_config()
    logger.info(f"Serving TaskStreak API on {API_HOST}:{API_PORT}")
    uvicorn.run(
        "taskstreak.api.server:create_api_application",
        factory=True,
        host=API_HOST,
        port=API_PORT,
        log_level=LOG_LEVEL.lower()
    )


if __name__ == "__main__":
    main()
