"""
Tool registry: the 14 content tools, how each one is classified,
and which response contract it is held to.
"""
from enum import Enum
from typing import Dict, Any, List, Union


class ToolType(str, Enum):
    """Content tools a caller can invoke"""
    FACEBOOK_ADS = "facebook_ads"
    GOOGLE_ADS = "google_ads"
    ADS_CREATIVE = "ads_creative"
    VIDEO_ADS = "video_ads"
    SALES_PAGE = "sales_page"
    NEWSLETTER = "newsletter"
    FOLLOWUP = "followup"
    LANDING_PAGE = "landing_page"
    AGENCY_SITE = "agency_site"
    BRAND_TWIN = "brand_twin"
    VISUAL_DNA = "visual_dna"
    BRAND_STRATEGY = "brand_strategy"
    LOGO_GENERATOR = "logo_generator"
    IMAGE_GENERATOR = "image_generator"


class ContentSchema(str, Enum):
    """Response contract a tool's output must satisfy"""
    LANDING_PAGE = "landing_page"
    SALES_PAGE = "sales_page"
    AGENCY_SITE = "agency_site"
    GENERIC = "generic"
    IMAGE = "image"


# ads_creative stays a text task so it always yields structured copy
IMAGE_TOOLS = frozenset({ToolType.LOGO_GENERATOR, ToolType.IMAGE_GENERATOR})

TOOL_SCHEMAS: Dict[ToolType, ContentSchema] = {
    ToolType.FACEBOOK_ADS: ContentSchema.GENERIC,
    ToolType.GOOGLE_ADS: ContentSchema.GENERIC,
    ToolType.ADS_CREATIVE: ContentSchema.GENERIC,
    ToolType.VIDEO_ADS: ContentSchema.GENERIC,
    ToolType.SALES_PAGE: ContentSchema.SALES_PAGE,
    ToolType.NEWSLETTER: ContentSchema.GENERIC,
    ToolType.FOLLOWUP: ContentSchema.GENERIC,
    ToolType.LANDING_PAGE: ContentSchema.LANDING_PAGE,
    ToolType.AGENCY_SITE: ContentSchema.AGENCY_SITE,
    ToolType.BRAND_TWIN: ContentSchema.GENERIC,
    ToolType.VISUAL_DNA: ContentSchema.GENERIC,
    ToolType.BRAND_STRATEGY: ContentSchema.GENERIC,
    ToolType.LOGO_GENERATOR: ContentSchema.IMAGE,
    ToolType.IMAGE_GENERATOR: ContentSchema.IMAGE,
}

# Display metadata for the tool catalogue
TOOL_CONFIGS: Dict[ToolType, Dict[str, str]] = {
    ToolType.FACEBOOK_ADS: {
        "title": "Facebook Ads",
        "description": "Stop the scroll with 5 high-converting ad variants.",
    },
    ToolType.GOOGLE_ADS: {
        "title": "Google Ads",
        "description": "High-intent search ads (30-char headlines, 90-char desc).",
    },
    ToolType.ADS_CREATIVE: {
        "title": "Ads Creative",
        "description": "Generate both high-converting copy and professional ad imagery.",
    },
    ToolType.VIDEO_ADS: {
        "title": "Video Ad Scripts",
        "description": "Hook, Body, and CTA scripts for TikTok, Reels, and YouTube.",
    },
    ToolType.SALES_PAGE: {
        "title": "Sales Page",
        "description": "Long-form copy with headlines, story, benefits, and FAQ.",
    },
    ToolType.NEWSLETTER: {
        "title": "Email Newsletter",
        "description": "Engaging content with multiple subject line options.",
    },
    ToolType.FOLLOWUP: {
        "title": "Email Sequence",
        "description": "A 5-part email sequence designed to close leads.",
    },
    ToolType.LANDING_PAGE: {
        "title": "Landing Page",
        "description": "Hero, problem, solution, and call to action for a single offer.",
    },
    ToolType.AGENCY_SITE: {
        "title": "Agency Site",
        "description": "Multi-section website copy for a service agency.",
    },
    ToolType.BRAND_TWIN: {
        "title": "Brand Twin",
        "description": "Analyze writing samples to clone your unique brand voice.",
    },
    ToolType.VISUAL_DNA: {
        "title": "Visual DNA",
        "description": "Generate color palettes, typography, and mood guides.",
    },
    ToolType.BRAND_STRATEGY: {
        "title": "Brand Strategy",
        "description": "Generate a full business idea, USP, and mission statement.",
    },
    ToolType.LOGO_GENERATOR: {
        "title": "Logo Designer",
        "description": "Neural generation of professional brand marks and logos.",
    },
    ToolType.IMAGE_GENERATOR: {
        "title": "Brand Imagery",
        "description": "Create custom photos and illustrations for your brand.",
    },
}

TONE_OPTIONS = [
    "Professional",
    "Friendly",
    "Bold & Disruptive",
    "Luxury & Sophisticated",
    "Direct Response (Hard Sell)",
    "Helpful & Educational",
    "Witty & Humorous",
]

ASPECT_RATIOS = ["1:1", "16:9", "9:16", "4:3", "3:4"]
DEFAULT_ASPECT_RATIO = "1:1"


def resolve_tool(tool_type: Union[str, ToolType]) -> Union[ToolType, str]:
    """Return the ToolType for a known selector, or the raw string when unknown."""
    if isinstance(tool_type, ToolType):
        return tool_type
    try:
        return ToolType(tool_type)
    except ValueError:
        return tool_type


def is_known_tool(tool_type: Union[str, ToolType]) -> bool:
    return isinstance(resolve_tool(tool_type), ToolType)


def is_image_task(tool_type: Union[str, ToolType]) -> bool:
    """Image tasks are exactly the logo and brand image tools."""
    return resolve_tool(tool_type) in IMAGE_TOOLS


def get_content_schema(tool_type: Union[str, ToolType]) -> ContentSchema:
    """Look up the response contract; unknown selectors get the generic one."""
    return TOOL_SCHEMAS.get(resolve_tool(tool_type), ContentSchema.GENERIC)


def get_available_tools() -> List[Dict[str, Any]]:
    """Catalogue entries for every registered tool"""
    return [
        {
            "id": tool.value,
            "title": TOOL_CONFIGS[tool]["title"],
            "description": TOOL_CONFIGS[tool]["description"],
            "kind": "image" if tool in IMAGE_TOOLS else "text",
            "schema": TOOL_SCHEMAS[tool].value,
        }
        for tool in ToolType
    ]
