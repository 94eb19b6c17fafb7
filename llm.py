"""
Chat-completion client used to answer questions.
"""

import logging

import openai
from openai import OpenAI

from config import DEFAULT_OPENAI_MODEL, REQUEST_TIMEOUT_SECONDS
from errors import AuthError, ModelServiceError, RateLimited

logger = logging.getLogger(__name__)

MAX_TOKENS = 1000
TEMPERATURE = 0.7


class OpenAIChatModel:
    """Sends one chat completion per call; no retries."""

    def __init__(self, api_key=None, model=DEFAULT_OPENAI_MODEL, client=None):
        self.model = model
        self.client = client or OpenAI(
            api_key=api_key,
            timeout=REQUEST_TIMEOUT_SECONDS,
            max_retries=0,
        )

    def chat_complete(self, messages) -> str:
        logger.info("Calling OpenAI (%s)...", self.model)
        try:
            completion = self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                max_tokens=MAX_TOKENS,
                temperature=TEMPERATURE,
            )
        except openai.AuthenticationError as e:
            raise AuthError() from e
        except openai.RateLimitError as e:
            raise RateLimited() from e
        except openai.APIError as e:
            logger.error("OpenAI request failed: %s", e)
            raise ModelServiceError(f"Unable to process request with OpenAI: {e.message}") from e

        return completion.choices[0].message.content or ""
