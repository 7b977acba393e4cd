"""
Request and response models for the /generate endpoint
"""
from typing import Optional, Dict, Any, Literal

from pydantic import BaseModel, ConfigDict, Field


AspectRatio = Literal["1:1", "16:9", "9:16", "4:3", "3:4"]


class GenerationInputs(BaseModel):
    """Brand and creative parameters supplied by the user"""
    model_config = ConfigDict(extra="allow")

    businessName: Optional[str] = ""
    niche: Optional[str] = ""
    audience: Optional[str] = ""
    tone: Optional[str] = ""
    offerDetails: Optional[str] = ""
    writingSample: Optional[str] = None

    # Logo tool
    logoStyle: Optional[str] = None
    logoColors: Optional[str] = None
    logoIcons: Optional[str] = None

    # Image tools
    aspectRatio: Optional[AspectRatio] = None
    stylePreset: Optional[str] = None

    # Refinement
    refinementPrompt: Optional[str] = None


class GenerateRequest(BaseModel):
    """Request body for POST /generate"""
    toolType: str
    inputs: GenerationInputs = Field(default_factory=GenerationInputs)
    uid: Optional[str] = None
    previousResult: Optional[Dict[str, Any]] = None


class GenerateResponse(BaseModel):
    """Successful response body"""
    output: Dict[str, Any]


class ErrorResponse(BaseModel):
    """Failure response body"""
    error: str
