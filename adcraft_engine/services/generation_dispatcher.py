"""
Generation dispatcher: turns one GenerateRequest into one GenerationResult.

received -> authorized -> classified -> generated -> returned. Refinement
is the same path with a validated prior result attached.
"""
import time
from typing import Dict, Any, Optional

from adcraft_engine.errors import UnauthorizedError
from adcraft_engine.logging_config import logger
from adcraft_engine.models import GenerateRequest
from adcraft_engine.services.content_schemas import validate_content
from adcraft_engine.services.gemini_content_generator import GeminiContentGenerator
from adcraft_engine.services.identity import IdentityVerifier, PresenceIdentityVerifier
from adcraft_engine.services.tool_registry import (
    ContentSchema,
    resolve_tool,
    is_image_task,
    get_content_schema,
)


class GenerationDispatcher:
    """Single entry point for generation and refinement requests"""

    def __init__(
        self,
        verifier: IdentityVerifier = None,
        generator: Optional[GeminiContentGenerator] = None
    ):
        self.verifier = verifier or PresenceIdentityVerifier()
        self._generator = generator

    @property
    def generator(self) -> GeminiContentGenerator:
        # Not built until a request has passed the identity gate
        if self._generator is None:
            self._generator = GeminiContentGenerator()
        return self._generator

    async def dispatch(self, request: GenerateRequest) -> Dict[str, Any]:
        """
        Run one generation or refinement.

        Raises:
            UnauthorizedError: No caller identity attached
            AdCraftError: Any provider, parsing or schema failure
        """
        start_time = time.time()

        identity = self.verifier.verify(request.uid)
        if not identity:
            logger.warning("Generation request without caller identity", tool_type=request.toolType)
            raise UnauthorizedError()

        tool = resolve_tool(request.toolType)
        schema = get_content_schema(tool)
        image_task = is_image_task(tool)

        logger.info(
            "Generation request received",
            uid=identity,
            tool_type=request.toolType,
            is_image_task=image_task,
            schema=schema.value,
            has_previous_result=request.previousResult is not None
        )

        if image_task:
            output = await self._dispatch_image(tool, request)
        else:
            output = await self._dispatch_text(schema, request)

        logger.info(
            "Generation request completed",
            uid=identity,
            tool_type=request.toolType,
            execution_time=time.time() - start_time
        )
        return output

    async def _dispatch_image(self, tool, request: GenerateRequest) -> Dict[str, Any]:
        previous_image = None
        if request.previousResult is not None:
            prior = validate_content(ContentSchema.IMAGE, request.previousResult, source="previousResult")
            previous_image = prior.get("image") or None

        return await self.generator.generate_image(tool, request.inputs, previous_image)

    async def _dispatch_text(self, schema: ContentSchema, request: GenerateRequest) -> Dict[str, Any]:
        previous_result = None
        refinement_prompt = (request.inputs.refinementPrompt or "").strip()
        if request.previousResult is not None and refinement_prompt:
            # The prior result must already satisfy this tool's schema
            previous_result = validate_content(schema, request.previousResult, source="previousResult")

        return await self.generator.generate_copy(
            request.toolType,
            schema,
            request.inputs,
            previous_result
        )
