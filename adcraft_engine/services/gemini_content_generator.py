"""
Content generation service using Google Gemini.

Text tools get schema-constrained JSON from the text model; image tools
get pixels plus an optional caption from the image model. Every public
call makes exactly one upstream request.
"""
import base64
import binascii
import json
import re
import time
from typing import Dict, Any, Optional, List, Union

from google import genai
from google.genai import types

from adcraft_engine.config import settings, is_placeholder_api_key
from adcraft_engine.errors import (
    ProviderConfigError,
    GenerationError,
    MalformedOutputError,
)
from adcraft_engine.logging_config import logger
from adcraft_engine.models import GenerationInputs
from adcraft_engine.services.content_schemas import get_schema_model, validate_content
from adcraft_engine.services.generation_prompts import (
    TEXT_SYSTEM_INSTRUCTION,
    build_image_prompt,
    build_image_refinement_prompt,
    build_text_prompt,
    build_text_refinement_prompt,
)
from adcraft_engine.services.tool_registry import (
    ToolType,
    ContentSchema,
    DEFAULT_ASPECT_RATIO,
)

DATA_URI_PREFIX = re.compile(r"^data:image/\w+;base64,")
PNG_DATA_URI = "data:image/png;base64,"


def strip_data_uri(image: str) -> str:
    """Drop a leading data:image/...;base64, prefix, leaving the raw base64."""
    return DATA_URI_PREFIX.sub("", image, count=1)


class GeminiContentGenerator:
    """Marketing copy and brand image generator backed by Gemini"""

    def __init__(self, api_key: str = None, client: Any = None):
        """
        Initialize the Gemini client.

        Args:
            api_key: Overrides settings.GEMINI_API_KEY
            client: Pre-built client (anything exposing ``aio.models.generate_content``)

        Raises:
            ProviderConfigError: If no client is given and the key is missing or a placeholder
        """
        if client is None:
            api_key = api_key if api_key is not None else settings.GEMINI_API_KEY
            if is_placeholder_api_key(api_key):
                raise ProviderConfigError("GEMINI_API_KEY not configured")
            client = genai.Client(api_key=api_key)

        self.client = client
        self.text_model = settings.GEMINI_TEXT_MODEL
        self.image_model = settings.GEMINI_IMAGE_MODEL

        logger.info(
            "Initialized GeminiContentGenerator",
            text_model=self.text_model,
            image_model=self.image_model
        )

    async def generate_image(
        self,
        tool_type: ToolType,
        inputs: GenerationInputs,
        previous_image: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Generate a logo or brand image, or refine a previous one.

        Args:
            tool_type: LOGO_GENERATOR or IMAGE_GENERATOR
            inputs: Brand parameters (refinementPrompt used when refining)
            previous_image: Data URI or raw base64 of the image being refined

        Returns:
            {"image": data URI (omitted when absent), "description": caption text}

        Raises:
            GenerationError: If neither an image nor a caption is available
        """
        start_time = time.time()
        parts = self._build_image_parts(tool_type, inputs, previous_image)

        if tool_type == ToolType.LOGO_GENERATOR:
            aspect_ratio = DEFAULT_ASPECT_RATIO
        else:
            aspect_ratio = inputs.aspectRatio or DEFAULT_ASPECT_RATIO

        # The image model does not accept response_mime_type / response_schema
        config = types.GenerateContentConfig(
            response_modalities=["TEXT", "IMAGE"],
            image_config=types.ImageConfig(aspect_ratio=aspect_ratio),
        )

        logger.info(
            "Calling Gemini image model",
            model=self.image_model,
            tool_type=tool_type.value,
            refining=bool(previous_image),
            aspect_ratio=aspect_ratio
        )

        response = await self.client.aio.models.generate_content(
            model=self.image_model,
            contents=parts,
            config=config
        )

        image_data, description = self._extract_image_response(response)

        # Refinement that produced no new pixels keeps the prior image
        if not image_data and previous_image:
            image_data = f"{PNG_DATA_URI}{strip_data_uri(previous_image)}"

        if not image_data and not description:
            logger.error("Gemini returned no image or text", tool_type=tool_type.value)
            raise GenerationError("No content generated. Please try again.")

        logger.info(
            "Image generation completed",
            tool_type=tool_type.value,
            has_image=bool(image_data),
            description_length=len(description),
            execution_time=time.time() - start_time
        )

        output = {"description": description}
        if image_data:
            output["image"] = image_data
        return output

    async def generate_copy(
        self,
        tool_type: Union[ToolType, str],
        schema: ContentSchema,
        inputs: GenerationInputs,
        previous_result: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Generate structured marketing copy, or refine a previous result.

        Args:
            tool_type: Tool selector, embedded in the prompt
            schema: Response contract for the tool
            inputs: Brand parameters
            previous_result: Validated prior output; triggers refinement together
                with inputs.refinementPrompt

        Returns:
            Parsed JSON object matching the schema

        Raises:
            GenerationError: Empty response
            MalformedOutputError: Response is not valid JSON
            SchemaMismatchError: Response does not match the schema
        """
        start_time = time.time()
        refining = previous_result is not None and bool(inputs.refinementPrompt)

        if refining:
            prompt = build_text_refinement_prompt(tool_type, inputs, previous_result)
        else:
            prompt = build_text_prompt(tool_type, inputs)

        config = types.GenerateContentConfig(
            system_instruction=TEXT_SYSTEM_INSTRUCTION,
            response_mime_type="application/json",
            response_schema=get_schema_model(schema),
        )

        logger.info(
            "Calling Gemini text model",
            model=self.text_model,
            tool_type=getattr(tool_type, "value", tool_type),
            schema=schema.value,
            refining=refining,
            prompt_length=len(prompt)
        )

        response = await self.client.aio.models.generate_content(
            model=self.text_model,
            contents=prompt,
            config=config
        )

        text = response.text
        if not text or not text.strip():
            raise GenerationError("Empty response from AI")

        try:
            parsed = json.loads(text)
        except json.JSONDecodeError as e:
            logger.error("Gemini returned malformed JSON", error=str(e), response_length=len(text))
            raise MalformedOutputError(f"Model returned malformed JSON: {e.msg}") from e

        output = validate_content(schema, parsed, source="Generated output")

        logger.info(
            "Copy generation completed",
            schema=schema.value,
            refining=refining,
            execution_time=time.time() - start_time
        )
        return output

    def _build_image_parts(
        self,
        tool_type: ToolType,
        inputs: GenerationInputs,
        previous_image: Optional[str]
    ) -> List[types.Part]:
        """Prior image + refine instruction, or the tool's initial prompt"""
        if previous_image:
            try:
                image_bytes = base64.b64decode(strip_data_uri(previous_image), validate=True)
            except (binascii.Error, ValueError) as e:
                raise GenerationError("Previous image is not valid base64 data") from e

            return [
                types.Part.from_bytes(data=image_bytes, mime_type="image/png"),
                types.Part.from_text(text=build_image_refinement_prompt(inputs)),
            ]

        return [types.Part.from_text(text=build_image_prompt(tool_type, inputs))]

    def _extract_image_response(self, response: Any) -> tuple:
        """Pull the image (as a PNG data URI) and caption text out of a response."""
        image_data = ""
        description = ""

        candidates = getattr(response, "candidates", None) or []
        if not candidates:
            return image_data, description

        content = getattr(candidates[0], "content", None)
        parts = getattr(content, "parts", None) or []

        for part in parts:
            inline_data = getattr(part, "inline_data", None)
            if inline_data and inline_data.data:
                data = inline_data.data
                if isinstance(data, bytes):
                    data = base64.b64encode(data).decode("ascii")
                image_data = f"{PNG_DATA_URI}{data}"
            elif getattr(part, "text", None):
                description += part.text

        return image_data, description
