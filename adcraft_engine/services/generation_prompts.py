"""
Prompt builders for text and image generation.

Each builder takes the user's GenerationInputs and returns the exact text
sent to Gemini. Defaults fill in any creative field the user left blank.
"""
import json
from typing import Dict, Any

from adcraft_engine.models import GenerationInputs
from adcraft_engine.services.tool_registry import ToolType


TEXT_SYSTEM_INSTRUCTION = "You are a world-class marketing strategist. Output purely valid JSON."

DEFAULT_REFINEMENT = "Apply subtle improvements."

LOGO_DEFAULTS = {
    "style": "Minimalist",
    "colors": "Black and White",
    "icons": "Abstract geometric shapes",
}

DEFAULT_IMAGE_STYLE = "Photorealistic"


def build_logo_prompt(inputs: GenerationInputs) -> str:
    return f"""Create a professional, vector-style logo for "{inputs.businessName}".
Industry: {inputs.niche}.
Style: {inputs.logoStyle or LOGO_DEFAULTS["style"]}.
Colors: {inputs.logoColors or LOGO_DEFAULTS["colors"]}.
Symbols: {inputs.logoIcons or LOGO_DEFAULTS["icons"]}.
Requirements: High contrast, clean lines, white background, no photorealism, no text other than the brand name."""


def build_brand_image_prompt(inputs: GenerationInputs) -> str:
    return f"""Generate a high-quality brand image for "{inputs.businessName}".
Context: {inputs.offerDetails}.
Style: {inputs.stylePreset or DEFAULT_IMAGE_STYLE}.
Mood: {inputs.tone}."""


def build_image_prompt(tool_type: ToolType, inputs: GenerationInputs) -> str:
    """Initial-generation prompt for an image tool"""
    if tool_type == ToolType.LOGO_GENERATOR:
        return build_logo_prompt(inputs)
    return build_brand_image_prompt(inputs)


def build_image_refinement_prompt(inputs: GenerationInputs) -> str:
    """Instruction sent alongside the prior image when refining it"""
    instruction = (inputs.refinementPrompt or "").strip() or DEFAULT_REFINEMENT
    return f"""REFINE THIS IMAGE: {instruction}.
CONTEXT: {inputs.businessName} - {inputs.niche}.
REQUIREMENT: Maintain high quality and brand consistency."""


def build_text_prompt(tool_type: str, inputs: GenerationInputs) -> str:
    """
    Build the copywriting prompt for a text tool.

    Args:
        tool_type: Tool selector value, embedded verbatim
        inputs: Brand parameters

    Returns:
        Prompt text
    """
    tool_name = getattr(tool_type, "value", tool_type)
    prompt = f"""Generate content for tool: {tool_name}.
Business: {inputs.businessName} ({inputs.niche}).
Audience: {inputs.audience}.
Tone: {inputs.tone}.
Details: {inputs.offerDetails}."""

    if inputs.writingSample:
        prompt += f"\nWriting sample (match this voice):\n{inputs.writingSample}"

    return prompt


def build_text_refinement_prompt(
    tool_type: str,
    inputs: GenerationInputs,
    previous_result: Dict[str, Any]
) -> str:
    """Text prompt plus the refine task and the full prior JSON"""
    prompt = build_text_prompt(tool_type, inputs)
    prompt += f"""

REFINE TASK: {inputs.refinementPrompt}.

ORIGINAL JSON:
{json.dumps(previous_result)}

Return the FULL updated JSON object, not only the changed fields."""
    return prompt
