"""
Anthropic model caller
단일 요청/응답 - 재시도나 페일오버 없이 한 번 호출하고 오류를 분류한다
"""

import logging
from typing import Any, Dict, Optional

import anthropic

from ..core.config import settings
from ..core.exceptions import AuthError, NetworkError, ProviderError

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = "Please enter your Anthropic API key"


def _upstream_error(body: Any) -> Dict[str, Any]:
    """Pull the provider's {'type', 'message'} error object out of a response body"""
    if isinstance(body, dict):
        error = body.get("error", body)
        if isinstance(error, dict):
            return error
    return {}


class ClaudeService:
    """Sends one prompt to the Messages API and returns the reply text"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        timeout: Optional[float] = None,
    ):
        self.api_key = api_key or settings.ANTHROPIC_API_KEY
        self.model = model or settings.ANTHROPIC_MODEL
        self.max_tokens = max_tokens or settings.MAX_TOKENS
        self.timeout = timeout or settings.REQUEST_TIMEOUT

    def _create_client(self, api_key: str) -> anthropic.AsyncAnthropic:
        return anthropic.AsyncAnthropic(api_key=api_key, timeout=self.timeout)

    async def call(self, prompt: str, api_key: Optional[str] = None) -> str:
        key = (api_key or self.api_key or "").strip()
        if not key:
            raise AuthError(MISSING_KEY_MESSAGE)

        logger.info(f"Calling {self.model} (prompt: {len(prompt)} chars)")

        try:
            async with self._create_client(key) as client:
                response = await client.messages.create(
                    model=self.model,
                    max_tokens=self.max_tokens,
                    messages=[{"role": "user", "content": prompt}],
                )
        except (anthropic.AuthenticationError, anthropic.PermissionDeniedError) as e:
            error = _upstream_error(e.body)
            raise AuthError(
                f"API Error: {error.get('message', e.message)}",
                details={"status_code": e.status_code, "error": error},
            ) from e
        except anthropic.APIConnectionError as e:
            raise NetworkError(f"API Error: {e.message}") from e
        except anthropic.APIStatusError as e:
            error = _upstream_error(e.body)
            raise ProviderError(
                f"API Error: {error.get('message', e.message)}",
                status_code=e.status_code,
                details={"error": error},
            ) from e

        text = "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )
        logger.info(f"Model reply received ({len(text)} chars)")
        return text
