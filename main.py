"""
Entry point for the Users CRUD service
"""

import logging
from dotenv import load_dotenv

# Load environment variables from .env file before settings are read
load_dotenv()

from users_api.config.settings import HOST, PORT, configure_logging  # noqa: E402
from users_api.app import app  # noqa: E402

configure_logging()
logger = logging.getLogger(__name__)

if __name__ == "__main__":
    import uvicorn
    logger.info(f"Starting Users API on {HOST}:{PORT}")
    uvicorn.run(app, host=HOST, port=PORT)
