"""
Response contracts for each content schema.

The text models are handed to Gemini as ``response_schema`` and are also
used to validate what comes back, so the provider contract and the
validation contract cannot drift apart.
"""
from typing import Dict, Any, List, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from adcraft_engine.errors import SchemaMismatchError
from adcraft_engine.services.tool_registry import ContentSchema


class LandingPageCopy(BaseModel):
    """Landing page builder output"""
    heroHeadline: str = Field(min_length=1)
    problemDescription: str = Field(min_length=1)
    solutionDescription: str = Field(min_length=1)
    ctaText: str = Field(min_length=1)


class FaqItem(BaseModel):
    question: str
    answer: str


class SalesPageCopy(BaseModel):
    """Sales page builder output"""
    headline: str
    subheadline: str
    storySection: str
    benefits: List[str]
    faq: List[FaqItem]
    cta: str


class AgencySection(BaseModel):
    title: str
    content: str


class AgencySiteCopy(BaseModel):
    """Agency site builder output"""
    sections: List[AgencySection]


class GenericCopy(BaseModel):
    """Output for every text tool without a dedicated builder"""
    headline: str = Field(min_length=1)
    content: str = Field(min_length=1)
    cta: str = Field(min_length=1)


class ImageAsset(BaseModel):
    """Image tool output: data-URI PNG and/or the model's caption"""
    model_config = ConfigDict(extra="ignore")

    image: Optional[str] = None
    description: Optional[str] = None


TEXT_SCHEMA_MODELS: Dict[ContentSchema, Type[BaseModel]] = {
    ContentSchema.LANDING_PAGE: LandingPageCopy,
    ContentSchema.SALES_PAGE: SalesPageCopy,
    ContentSchema.AGENCY_SITE: AgencySiteCopy,
    ContentSchema.GENERIC: GenericCopy,
}


def get_schema_model(schema: ContentSchema) -> Type[BaseModel]:
    """Pydantic model backing a content schema"""
    if schema is ContentSchema.IMAGE:
        return ImageAsset
    return TEXT_SCHEMA_MODELS[schema]


def validate_content(schema: ContentSchema, data: Any, source: str = "output") -> Dict[str, Any]:
    """
    Validate a result against its schema strictly.

    Args:
        schema: Contract the data must satisfy
        data: Parsed result (usually a dict decoded from JSON)
        source: What is being validated, used in the error message

    Returns:
        The validated result as a plain dict

    Raises:
        SchemaMismatchError: If fields are missing or have the wrong type
    """
    model = get_schema_model(schema)
    if not isinstance(data, dict):
        raise SchemaMismatchError(
            f"{source} does not match the {schema.value} schema: expected an object"
        )

    try:
        validated = model.model_validate(data)
    except ValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
        raise SchemaMismatchError(
            f"{source} does not match the {schema.value} schema: {', '.join(fields)}"
        ) from e

    return validated.model_dump(exclude_none=True)
