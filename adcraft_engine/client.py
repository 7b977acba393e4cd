"""
Client for the /generate endpoint.

Builds the request payload, attaches a prior result for refinement, and
enforces the client-side time budget. Every failure, whether transport or
provider, reaches the caller as a GenerationFailedError; running out of
time raises the GenerationTimeoutError subclass.
"""
import asyncio
from typing import Dict, Any, Optional, Union

import httpx

from adcraft_engine.config import settings
from adcraft_engine.errors import (
    InvalidRequestError,
    GenerationFailedError,
    GenerationTimeoutError,
)
from adcraft_engine.logging_config import logger
from adcraft_engine.services.tool_registry import ToolType, resolve_tool

GENERATE_TIMEOUT_MESSAGE = "Request timed out. The model is taking too long to respond."
REFINE_TIMEOUT_MESSAGE = "Refinement timed out."


class ContentEngineClient:
    """Request composer for generation and refinement calls"""

    def __init__(
        self,
        uid: str,
        base_url: str = None,
        timeout: float = None,
        transport: httpx.AsyncBaseTransport = None
    ):
        """
        Args:
            uid: Caller identity sent with every request
            base_url: Engine URL (defaults to settings.ENGINE_BASE_URL)
            timeout: Seconds before an in-flight call is cancelled (default 60)
            transport: Custom httpx transport, mainly for tests
        """
        self.uid = uid
        self.base_url = base_url or settings.ENGINE_BASE_URL
        self.timeout = timeout if timeout is not None else settings.CLIENT_TIMEOUT_SECONDS
        self.transport = transport

    async def generate_marketing_copy(
        self,
        tool_type: Union[ToolType, str],
        inputs: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Generate a new asset.

        Returns:
            The engine's output object, unmodified
        """
        tool = self._validate_inputs(tool_type, inputs)
        payload = {
            "toolType": tool.value,
            "inputs": inputs,
            "uid": self.uid,
        }
        return await self._post(payload, GENERATE_TIMEOUT_MESSAGE, refining=False)

    async def refine_asset(
        self,
        tool_type: Union[ToolType, str],
        previous_result: Dict[str, Any],
        refinement_prompt: str,
        original_inputs: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Refine a previously generated asset with a free-text instruction.

        Returns:
            The complete updated output object
        """
        tool = self._validate_inputs(tool_type, original_inputs)
        if not previous_result:
            raise InvalidRequestError("A previous result is required for refinement")
        if not refinement_prompt or not refinement_prompt.strip():
            raise InvalidRequestError("A refinement instruction is required")

        payload = {
            "toolType": tool.value,
            "inputs": {**original_inputs, "refinementPrompt": refinement_prompt},
            "previousResult": previous_result,
            "uid": self.uid,
        }
        return await self._post(payload, REFINE_TIMEOUT_MESSAGE, refining=True)

    def _validate_inputs(self, tool_type: Union[ToolType, str], inputs: Dict[str, Any]) -> ToolType:
        tool = resolve_tool(tool_type)
        if not isinstance(tool, ToolType):
            raise InvalidRequestError(f"Unknown tool type: {tool_type}")

        missing = [
            field for field in ("businessName", "offerDetails")
            if not str(inputs.get(field) or "").strip()
        ]
        if tool == ToolType.LOGO_GENERATOR and not str(inputs.get("logoStyle") or "").strip():
            missing.append("logoStyle")

        if missing:
            raise InvalidRequestError(f"Missing required inputs: {', '.join(missing)}")
        return tool

    async def _post(self, payload: Dict[str, Any], timeout_message: str, refining: bool) -> Dict[str, Any]:
        """Send one request; the call is cancelled when the time budget runs out."""
        async with httpx.AsyncClient(
            base_url=self.base_url,
            transport=self.transport,
            timeout=httpx.Timeout(self.timeout)
        ) as client:
            try:
                response = await asyncio.wait_for(
                    client.post("/generate", json=payload),
                    timeout=self.timeout
                )
            except (asyncio.TimeoutError, httpx.TimeoutException) as e:
                logger.error(
                    "Generation request timed out",
                    tool_type=payload["toolType"],
                    timeout=self.timeout,
                    refining=refining
                )
                raise GenerationTimeoutError(timeout_message) from e
            except httpx.HTTPError as e:
                logger.error("Generation request failed", tool_type=payload["toolType"], error=str(e))
                raise GenerationFailedError(str(e) or "Generation failed") from e

        if response.is_error:
            raise GenerationFailedError(
                self._error_message(response, refining),
                status_code=response.status_code
            )

        try:
            data = response.json()
        except ValueError as e:
            raise GenerationFailedError("Generation failed: invalid response body") from e

        if not isinstance(data, dict):
            raise GenerationFailedError("Generation failed: invalid response body")
        return data.get("output")

    @staticmethod
    def _error_message(response: httpx.Response, refining: bool) -> str:
        error: Optional[str] = None
        try:
            body = response.json()
            if isinstance(body, dict):
                error = body.get("error")
        except ValueError:
            pass

        if error:
            return error
        if refining:
            return "Refinement failed"
        return f"Generation failed: {response.reason_phrase}"
