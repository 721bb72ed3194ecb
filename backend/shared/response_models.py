"""
Common API response models.
"""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard API error response."""

    error: str = Field(..., description="Error message")
    details: str | None = Field(None, description="Detailed error information")


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str = Field(..., description="Service status")
    message: str = Field(..., description="Health check message")
    version: str | None = Field(None, description="Service version")
    upload_dir: str | None = Field(None, description="Temporary upload directory")
    dependencies: dict[str, str] | None = Field(None, description="Configured media tool paths")


class FormatInfo(BaseModel):
    """Description of a subtitle format accepted by the service."""

    name: str
    extension: str
    mime_type: str
    description: str
    converted: bool = Field(..., description="Whether uploads in this format are converted to WebVTT")


class FormatsResponse(BaseModel):
    """Supported subtitle formats."""

    formats: list[FormatInfo]
    output_format: str = "vtt"
