import logging
import os
import sys
from lms import create_app
from config import Config

logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO)
)
logger = logging.getLogger(__name__)


def main():
    """Serve the LMS API with the Flask development server."""
    host = os.environ.get('HOST', '0.0.0.0')
    port = int(os.environ.get('PORT', '5000'))

    try:
        app = create_app()
    except Exception:
        logger.exception("Failed to start the LMS application")
        sys.exit(1)

    logger.info("=" * 50)
    logger.info(f"Starting LMS API on {host}:{port}")
    logger.info("=" * 50)

    try:
        app.run(host=host, port=port, debug=False, use_reloader=False)
    except KeyboardInterrupt:
        logger.info("Shutting down...")
        sys.exit(0)


if __name__ == '__main__':
    main()
