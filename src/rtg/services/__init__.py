"""External service clients."""

from .anthropic import ClaudeClient

__all__ = ["ClaudeClient"]
