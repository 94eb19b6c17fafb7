"""
Process configuration read from the environment (and a .env file if present).
"""

import os

from dotenv import load_dotenv

DEFAULT_PORT = 3000
DEFAULT_OPENAI_MODEL = "gpt-4o-mini"

# Fixed limits for everything the HTTP clients would otherwise leave open
REQUEST_TIMEOUT_SECONDS = 60
MONGODB_TIMEOUT_MS = 5000
MAX_CONTENT_LENGTH = 1024 * 1024

GOOGLE_REQUIRED = ["OPENAI_API_KEY", "GOOGLE_API_KEY"]
MONGO_REQUIRED = ["OPENAI_API_KEY", "MONGODB_URI", "MONGODB_DATABASE", "MONGODB_COLLECTION"]


class MissingConfiguration(Exception):
    def __init__(self, missing):
        self.missing = list(missing)
        super().__init__(f"Missing required environment variables: {', '.join(self.missing)}")


class Settings:
    """Values the servers need, resolved once at startup."""

    def __init__(self, env):
        self.openai_api_key = env.get("OPENAI_API_KEY")
        self.openai_model = env.get("OPENAI_MODEL") or DEFAULT_OPENAI_MODEL
        port = env.get("PORT") or DEFAULT_PORT
        try:
            self.port = int(port)
        except ValueError:
            raise ValueError(f"PORT must be an integer, got {port!r}") from None

        self.google_api_key = env.get("GOOGLE_API_KEY")
        self.google_service_account = env.get("GOOGLE_SERVICE_ACCOUNT")

        self.mongodb_uri = env.get("MONGODB_URI")
        self.mongodb_database = env.get("MONGODB_DATABASE")
        self.mongodb_collection = env.get("MONGODB_COLLECTION")


def load_settings(required, env=None):
    """
    Build Settings from the environment.

    Raises MissingConfiguration listing every required variable that is
    unset or empty.
    """
    if env is None:
        load_dotenv()
        env = os.environ

    missing = [name for name in required if not env.get(name)]
    if missing:
        raise MissingConfiguration(missing)
    return Settings(env)
