"""
Pydantic models for the anonymization API.

Request bodies accept both snake_case and the camelCase spellings
(preserveFormat) used by existing clients.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

SEED_MIN = -(2**63)
SEED_MAX = 2**63 - 1


class AnonymizeRequest(BaseModel):
    """Request body for single-record anonymization."""

    model_config = ConfigDict(populate_by_name=True)

    data: Optional[dict[str, Any]] = Field(..., description="Record to anonymize")
    strategy: str = Field(
        ..., description="PSEUDONYMIZATION, MASKING, REDACTION or FORMAT_PRESERVING_ENCRYPTION"
    )
    preserve_format: bool = Field(
        True, alias="preserveFormat", description="Keep the surface format of values"
    )
    seed: Optional[int] = Field(
        None, ge=SEED_MIN, le=SEED_MAX, description="Seed for reproducible output"
    )


class AnonymizeResponse(BaseModel):
    """Response body for single-record anonymization."""

    anonymized_data: Optional[dict[str, Any]] = Field(None, description="Anonymized record")
    strategy: Optional[str] = Field(None, description="Strategy applied (or requested)")
    success: bool = Field(..., description="Whether anonymization succeeded")
    message: str = Field(..., description="Outcome message")
    fields_processed: int = Field(0, description="Top-level fields processed")
    timestamp: datetime = Field(default_factory=datetime.now)


class QuickAnonymizeResponse(BaseModel):
    """Response body for quick anonymization."""

    success: bool
    data: Optional[dict[str, Any]] = None
    message: str


class BatchAnonymizeRequest(BaseModel):
    """Request body for batch anonymization of named datasets."""

    model_config = ConfigDict(populate_by_name=True)

    datasets: dict[str, Optional[dict[str, Any]]] = Field(
        ..., description="Dataset name to record"
    )
    strategy: Optional[str] = Field(
        None, description="Strategy applied to every dataset (configured default if omitted)"
    )
    preserve_format: Optional[bool] = Field(None, alias="preserveFormat")
    seed: Optional[int] = Field(None, ge=SEED_MIN, le=SEED_MAX)


class BatchAnonymizeResponse(BaseModel):
    """Response body for batch anonymization."""

    success: bool
    datasets: dict[str, Any]
    total_fields_processed: int
    strategy: Optional[str]
    message: str


class StrategyInfo(BaseModel):
    """A single available strategy."""

    name: str
    description: str


class StrategiesResponse(BaseModel):
    """Response body listing available strategies."""

    strategies: list[StrategyInfo]
    count: int


class ServiceHealthResponse(BaseModel):
    """Response body for the anonymization service health check."""

    status: str = "UP"
    service: str
    version: str
    available_strategies: int


class HealthResponse(BaseModel):
    """Response body for the root health check."""

    status: str
    version: str


class FileAnonymizeResponse(BaseModel):
    """Response body for file anonymization."""

    success: bool
    message: str
    original_file_name: Optional[str] = None
    anonymized_file_name: Optional[str] = None
    file_path: Optional[str] = None
    strategy: Optional[str] = None
    records_processed: int = 0
    fields_processed: int = 0
    file_size: int = 0
    download_url: Optional[str] = None
