"""Claude messages API access for label extraction."""

import logging
import time
from typing import Any, Dict, Optional

from anthropic import Anthropic, APIConnectionError, APIError, RateLimitError

from ..config import config

logger = logging.getLogger(__name__)

# Failures worth another attempt after a pause
TRANSIENT_ERRORS = (RateLimitError, APIConnectionError)


class ClaudeClient:
    """Single-turn Claude requests with backoff on transient failures.

    Label extraction sends one short prompt and expects one short reply, so
    only the text of the reply is returned.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        max_attempts: int = 3,
        backoff: float = 1.0,
        sdk_client: Optional[Any] = None,
    ) -> None:
        """Set up the client.

        Args:
            api_key: API key; falls back to ANTHROPIC_API_KEY.
            model: Model name; falls back to config.default_model.
            max_attempts: Tries per request for rate-limit and connection errors.
            backoff: First pause in seconds; doubled after each failed try.
            sdk_client: Ready-made SDK client (skips key lookup).

        Raises:
            ValueError: If no API key is available and no SDK client is given.
        """
        self.model = model or config.default_model
        self.max_attempts = max(1, max_attempts)
        self.backoff = backoff

        if sdk_client is None:
            api_key = api_key or config.anthropic_api_key
            if not api_key:
                raise ValueError("No Anthropic API key; set ANTHROPIC_API_KEY")
            sdk_client = Anthropic(api_key=api_key)
        self._sdk = sdk_client

    def complete(
        self,
        prompt: str,
        system: Optional[str] = None,
        max_tokens: int = 1024,
        temperature: float = 0.0,
    ) -> str:
        """Send ``prompt`` and return the reply text.

        Raises:
            APIError: On a non-transient failure, or when every attempt failed.
        """
        request: Dict[str, Any] = {
            "model": self.model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system:
            request["system"] = system
        return self._reply_text(self._send(request))

    def _send(self, request: Dict[str, Any]) -> Any:
        attempt = 1
        while True:
            logger.debug(f"Claude request {attempt}/{self.max_attempts} ({self.model})")
            try:
                return self._sdk.messages.create(**request)
            except TRANSIENT_ERRORS as e:
                if attempt >= self.max_attempts:
                    logger.error(f"Claude unavailable after {attempt} attempt(s): {e}")
                    raise
                pause = self.backoff * 2 ** (attempt - 1)
                logger.warning(f"{type(e).__name__} from Claude, retrying in {pause:.1f}s")
                time.sleep(pause)
                attempt += 1
            except APIError as e:
                logger.error(f"Claude request failed: {e}")
                raise

    @staticmethod
    def _reply_text(response: Any) -> str:
        return "".join(getattr(block, "text", "") for block in response.content)
