"""Base class for agents that ask Claude for a JSON document."""

import json
import logging
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Generic, Optional, TypeVar

from ..config import config
from ..services.anthropic import ClaudeClient

logger = logging.getLogger(__name__)

PROMPTS_DIR = Path(__file__).parent.parent.parent.parent / "templates" / "prompts"

FENCE_PATTERN = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL)

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")


def extract_json(reply: str) -> str:
    """Cut the JSON document out of a reply that may wrap it in prose or a code fence."""
    fenced = FENCE_PATTERN.search(reply)
    if fenced and fenced.group(1).strip():
        return fenced.group(1).strip()

    openers = [(reply.find(o), o, c) for o, c in (("{", "}"), ("[", "]")) if o in reply]
    if not openers:
        return reply.strip()

    start, opener, closer = min(openers)
    depth = 0
    for index in range(start, len(reply)):
        if reply[index] == opener:
            depth += 1
        elif reply[index] == closer:
            depth -= 1
            if depth == 0:
                return reply[start:index + 1]
    return reply[start:]


class JsonAgent(ABC, Generic[InputT, OutputT]):
    """One prompt in, one validated JSON reply out.

    Subclasses set :attr:`name` and :attr:`prompt_file`, build the user
    prompt and turn the decoded reply into their output type.
    """

    name = "agent"
    prompt_file: Optional[str] = None
    fallback_prompt = "Reply with valid JSON only."
    max_tokens = 1024

    def __init__(self, client: Optional[ClaudeClient] = None, model: Optional[str] = None) -> None:
        """Initialize the agent.

        Args:
            client: Client used for requests. A ClaudeClient is built from
                config when omitted.
            model: Model for the default client (ignored when ``client`` is given).
        """
        if client is None:
            client = ClaudeClient(model=model or config.default_model)
        self._client = client
        self._logger = logging.getLogger(f"{__name__}.{self.name}")

    @property
    def model(self) -> str:
        """Return the model the client sends requests to."""
        return self._client.model

    @property
    def system_prompt(self) -> str:
        """Prompt file contents, or the inline fallback when the file is missing."""
        if self.prompt_file:
            path = PROMPTS_DIR / self.prompt_file
            if path.exists():
                return path.read_text(encoding="utf-8")
            self._logger.debug(f"Prompt file {path} not found, using inline prompt")
        return self.fallback_prompt

    @abstractmethod
    def build_prompt(self, input_data: InputT) -> str:
        """Build the user prompt.

        Args:
            input_data: Agent-specific input.

        Returns:
            Prompt text sent as the user message.
        """
        ...

    @abstractmethod
    def parse(self, data: Any, input_data: InputT) -> OutputT:
        """Validate a decoded reply.

        Args:
            data: Decoded JSON value.
            input_data: The input the prompt was built from.

        Returns:
            The agent's output.

        Raises:
            ValueError: If the reply does not have the expected shape.
        """
        ...

    def run(self, input_data: InputT) -> OutputT:
        """Ask Claude and parse the reply.

        Args:
            input_data: Agent-specific input.

        Returns:
            The parsed output.

        Raises:
            ValueError: If the reply holds no usable JSON.
            APIError: If the request itself fails.
        """
        prompt = self.build_prompt(input_data)
        reply = self._client.complete(
            prompt,
            system=self.system_prompt,
            max_tokens=self.max_tokens,
            temperature=0.0,
        )
        self._logger.debug(f"Prompt {len(prompt)} chars, reply {len(reply)} chars")

        try:
            data = json.loads(extract_json(reply))
        except json.JSONDecodeError as e:
            self._logger.debug(f"Unparseable reply: {reply!r}")
            raise ValueError(f"{self.name} reply is not JSON: {e}") from e
        return self.parse(data, input_data)
