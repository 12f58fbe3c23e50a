# catalog/config.py
import logging

from decouple import config

# Settings come from the environment or a local .env file.

DATABASE_URL = config("DATABASE_URL", default="sqlite:///./catalog.db")
HOST = config("HOST", default="0.0.0.0")
PORT = config("PORT", default=4000, cast=int)
LOG_LEVEL = config("LOG_LEVEL", default="INFO")
MAX_BODY_BYTES = config("MAX_BODY_BYTES", default=10 * 1024 * 1024, cast=int)  # room for base64 images

logging.basicConfig(level=LOG_LEVEL)

