"""
Anonymization API endpoints.

Endpoints are plain ``def`` functions: anonymization is CPU-bound and
FastAPI runs them in its threadpool.
"""

import mimetypes
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, File, Form, HTTPException, UploadFile, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import FileResponse, JSONResponse

from record_anonymizer import __version__
from record_anonymizer.api.models import (
    AnonymizeRequest,
    AnonymizeResponse,
    BatchAnonymizeRequest,
    BatchAnonymizeResponse,
    FileAnonymizeResponse,
    QuickAnonymizeResponse,
    ServiceHealthResponse,
    StrategiesResponse,
    StrategyInfo,
)
from record_anonymizer.config.settings import Settings, get_settings
from record_anonymizer.core.anonymizer import (
    AnonymizationRequest,
    RecordAnonymizer,
    get_anonymizer,
)
from record_anonymizer.core.strategies import StrategyType
from record_anonymizer.files.service import FileAnonymizationService
from record_anonymizer.logging.setup import get_logger

logger = get_logger(__name__)

SERVICE_NAME = "Data Anonymization Service"

router = APIRouter(prefix="/api/v1/anonymization", tags=["Anonymization API"])

_file_service: Optional[FileAnonymizationService] = None


def get_file_service() -> FileAnonymizationService:
    """Get or create the file anonymization service."""
    global _file_service
    if _file_service is None:
        _file_service = FileAnonymizationService()
    return _file_service


def _status_for(result) -> int:
    if result.success:
        return status.HTTP_200_OK
    if result.is_client_error:
        return status.HTTP_400_BAD_REQUEST
    return status.HTTP_500_INTERNAL_SERVER_ERROR


@router.post("/anonymize", response_model=AnonymizeResponse)
def anonymize(
    request: AnonymizeRequest,
    anonymizer: RecordAnonymizer = Depends(get_anonymizer),
):
    """Anonymize a single record with the requested strategy."""
    logger.info(
        "Anonymization requested",
        extra={
            "event": "anonymize_requested",
            "strategy": request.strategy,
            "fields": len(request.data or {}),
        },
    )

    result = anonymizer.anonymize_data(
        AnonymizationRequest(
            data=request.data,
            strategy=request.strategy,
            preserve_format=request.preserve_format,
            seed=request.seed,
        )
    )
    response = AnonymizeResponse(
        anonymized_data=result.anonymized_data,
        strategy=result.strategy,
        success=result.success,
        message=result.message,
        fields_processed=result.fields_processed,
        timestamp=result.timestamp,
    )
    return JSONResponse(status_code=_status_for(result), content=jsonable_encoder(response))


@router.post("/quick-anonymize", response_model=QuickAnonymizeResponse)
def quick_anonymize(
    data: dict[str, Any] = Body(...),
    anonymizer: RecordAnonymizer = Depends(get_anonymizer),
):
    """Mask a raw record with format preservation and no seed."""
    result = anonymizer.anonymize_data(
        AnonymizationRequest(
            data=data,
            strategy=StrategyType.MASKING.value,
            preserve_format=True,
        )
    )
    response = QuickAnonymizeResponse(
        success=result.success,
        data=result.anonymized_data,
        message="Data anonymized successfully" if result.success else result.message,
    )
    return JSONResponse(status_code=_status_for(result), content=jsonable_encoder(response))


@router.get("/strategies", response_model=StrategiesResponse)
def strategies(anonymizer: RecordAnonymizer = Depends(get_anonymizer)):
    """List available anonymization strategies."""
    available = anonymizer.available_strategies()
    return StrategiesResponse(
        strategies=[
            StrategyInfo(name=strategy.value, description=strategy.description)
            for strategy in available
        ],
        count=len(available),
    )


@router.get("/health", response_model=ServiceHealthResponse)
def service_health(anonymizer: RecordAnonymizer = Depends(get_anonymizer)):
    return ServiceHealthResponse(
        status="UP",
        service=SERVICE_NAME,
        version=__version__,
        available_strategies=len(anonymizer.available_strategies()),
    )


@router.post("/batch-anonymize", response_model=BatchAnonymizeResponse)
def batch_anonymize(
    request: BatchAnonymizeRequest,
    anonymizer: RecordAnonymizer = Depends(get_anonymizer),
    settings: Settings = Depends(get_settings),
):
    """Anonymize several named datasets; failures are reported per dataset."""
    strategy = request.strategy or settings.default_strategy
    preserve_format = (
        request.preserve_format
        if request.preserve_format is not None
        else settings.default_preserve_format
    )
    logger.info(
        "Batch anonymization requested",
        extra={
            "event": "batch_anonymize_requested",
            "strategy": strategy,
            "datasets": len(request.datasets),
        },
    )

    result = anonymizer.anonymize_batch(
        request.datasets,
        strategy,
        preserve_format=preserve_format,
        seed=request.seed,
    )
    return BatchAnonymizeResponse(
        success=result.success,
        datasets=result.datasets,
        total_fields_processed=result.total_fields_processed,
        strategy=result.strategy,
        message=result.message,
    )


@router.post("/upload-anonymize", response_model=FileAnonymizeResponse)
def upload_anonymize(
    file: UploadFile = File(...),
    strategy: Optional[str] = Form(None),
    preserveFormat: Optional[bool] = Form(None),
    seed: Optional[int] = Form(None),
    outputFileName: Optional[str] = Form(None),
    service: FileAnonymizationService = Depends(get_file_service),
):
    """Anonymize an uploaded CSV or JSON file and store the result.

    Omitted strategy and preserveFormat fall back to the configured defaults.
    """
    content = file.file.read()
    if strategy is None:
        strategy = service.settings.default_strategy
    if preserveFormat is None:
        preserveFormat = service.settings.default_preserve_format

    try:
        result = service.anonymize_file(
            file.filename,
            content,
            strategy,
            preserve_format=preserveFormat,
            seed=seed,
            output_file_name=outputFileName,
        )
    except OSError as e:
        logger.exception(
            "Failed to write anonymized file",
            extra={"event": "file_write_failed", "file_name": file.filename, "error": str(e)},
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to write anonymized file: {e}",
        )

    response = FileAnonymizeResponse(
        success=result.success,
        message=result.message,
        original_file_name=result.original_file_name,
        anonymized_file_name=result.anonymized_file_name,
        file_path=result.file_path,
        strategy=result.strategy,
        records_processed=result.records_processed,
        fields_processed=result.fields_processed,
        file_size=result.file_size,
        download_url=result.download_url,
    )
    status_code = status.HTTP_200_OK if result.success else status.HTTP_400_BAD_REQUEST
    return JSONResponse(status_code=status_code, content=jsonable_encoder(response))


@router.get("/download/{file_name}")
def download(
    file_name: str,
    service: FileAnonymizationService = Depends(get_file_service),
):
    """Download a previously anonymized file."""
    if not service.output_exists(file_name):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found")

    path = service.get_output_path(file_name)
    media_type, _ = mimetypes.guess_type(path.name)
    return FileResponse(
        path,
        media_type=media_type or "application/octet-stream",
        filename=path.name,
    )


@router.get("/files", response_model=list[str])
def list_files(service: FileAnonymizationService = Depends(get_file_service)):
    """List anonymized files available for download."""
    return service.list_output_files()
