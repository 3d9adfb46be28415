"""
Configuration settings for the Users CRUD service
"""

import os
import logging

# Listen address is fixed, not read from the environment
HOST = "localhost"
PORT = 8081

# Database configuration
DATABASE_URL = os.getenv("DATABASE_URL")
DB_POOL_MIN_SIZE = int(os.getenv("DB_POOL_MIN_SIZE", 1))
DB_POOL_MAX_SIZE = int(os.getenv("DB_POOL_MAX_SIZE", 10))
DB_COMMAND_TIMEOUT = float(os.getenv("DB_COMMAND_TIMEOUT", 60))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str = LOG_LEVEL):
    """Configure root logging for the process"""
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
