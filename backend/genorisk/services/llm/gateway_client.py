import json
import logging
from typing import Any, Dict, Optional

import backoff
import httpx

from genorisk.core.config import ExplanationConfig, get_explanation_config
from genorisk.services.llm.prompt_builder import EXPLANATION_TOOL, SYSTEM_PROMPT

logger = logging.getLogger(__name__)

# Global shared HTTP client for connection reuse
_shared_client = httpx.AsyncClient(timeout=30.0)

_STATUS_MESSAGES = {
    402: "AI usage limit reached",
    429: "Rate limit exceeded",
}


def _giveup(e: Exception) -> bool:
    # Only transport errors and 5xx are worth a second attempt
    return isinstance(e, httpx.HTTPStatusError) and e.response.status_code < 500


class GatewayClient:
    """
    Client for an OpenAI-compatible chat completions gateway.
    Requests structured explanations through a forced function call.
    """

    def __init__(
        self,
        config: Optional[ExplanationConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = config or get_explanation_config()
        self.http_client = http_client or _shared_client

    @property
    def is_configured(self) -> bool:
        return bool(self.config.api_key)

    def _payload(self, prompt: str) -> Dict[str, Any]:
        return {
            "model": self.config.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "tools": [EXPLANATION_TOOL],
            "tool_choice": {
                "type": "function",
                "function": {"name": EXPLANATION_TOOL["function"]["name"]},
            },
        }

    @backoff.on_exception(
        backoff.expo,
        (httpx.RequestError, httpx.HTTPStatusError),
        max_tries=lambda: get_explanation_config().max_tries,
        giveup=_giveup,
    )
    async def _post(self, prompt: str) -> Dict[str, Any]:
        headers = {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
        }
        response = await self.http_client.post(
            self.config.api_url,
            json=self._payload(prompt),
            headers=headers,
            timeout=self.config.timeout_seconds,
        )
        response.raise_for_status()
        return response.json()

    async def generate_explanations(self, prompt: str) -> Optional[Dict[str, Any]]:
        """
        Send one batch prompt and return the decoded ``{"results": [...]}``
        payload, or None on any failure.
        """
        logger.info("Sending explanation request to gateway", extra={"model": self.config.model})

        try:
            data = await self._post(prompt)
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            reason = _STATUS_MESSAGES.get(status, "Gateway error")
            logger.error("%s (HTTP %d) from explanation gateway", reason, status)
            return None
        except httpx.RequestError as e:
            logger.error("Error communicating with explanation gateway: %s", e)
            return None
        except ValueError as e:
            logger.error("Explanation gateway returned invalid JSON: %s", e)
            return None

        parsed = extract_tool_payload(data)
        if parsed is None:
            logger.error("No valid structured response from explanation gateway")
        return parsed


def extract_tool_payload(data: Any) -> Optional[Dict[str, Any]]:
    """Decode the function-call arguments, falling back to message content."""
    try:
        message = data["choices"][0]["message"]
    except (KeyError, IndexError, TypeError):
        return None
    if not isinstance(message, dict):
        return None

    candidates = []
    tool_calls = message.get("tool_calls")
    for call in tool_calls if isinstance(tool_calls, list) else []:
        function = call.get("function") if isinstance(call, dict) else None
        args = function.get("arguments") if isinstance(function, dict) else None
        if args:
            candidates.append(args)
            break
    if message.get("content"):
        candidates.append(message["content"])

    for raw in candidates:
        try:
            parsed = json.loads(raw) if isinstance(raw, str) else raw
        except ValueError:
            continue
        if isinstance(parsed, dict):
            return parsed
    return None
