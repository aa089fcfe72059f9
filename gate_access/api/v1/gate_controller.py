# Standard library imports
import asyncio
import logging
from typing import Any, Dict

# External package imports
from fastapi import APIRouter, HTTPException, status

# Local application imports
from ...application.dto.scan_dto import DirectoryRefreshResponse, ScanRequest, ScanResponse
from ...application.services.directory_provider import DirectorySnapshotProvider
from ...application.use_cases.gate.process_scan import ProcessScanUseCase
from ...application.use_cases.gate.refresh_directory import RefreshDirectoryUseCase
from ...domain.exceptions import (
    DirectoryUnavailableError,
    InvalidDescriptorError,
    PersistenceError,
    get_user_message,
)
from ...di.container import get_container
from ... import __version__


logger = logging.getLogger(__name__)

router = APIRouter(tags=["gate"])


@router.post("/scan", response_model=ScanResponse)
async def scan(request: ScanRequest) -> ScanResponse:
    """
    Decide a face scan from a gate terminal

    Args:
        request: Face descriptor and terminal ID

    Returns:
        ScanResponse with the decision; denials are normal responses, not errors
    """
    container = get_container()
    process_scan_use_case = container.get(ProcessScanUseCase)

    try:
        # Matching and Mongo writes are blocking; keep them off the event loop
        return await asyncio.to_thread(process_scan_use_case.execute, request)
    except InvalidDescriptorError as exception:
        raise HTTPException(
            status_code=422,
            detail={"message": exception.message, **exception.details},
        )
    except (DirectoryUnavailableError, PersistenceError) as exception:
        logger.error(f"Scan from {request.terminal_id} failed: {exception.message}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=get_user_message(exception),
        )


@router.post("/directory/refresh", response_model=DirectoryRefreshResponse)
async def refresh_directory() -> DirectoryRefreshResponse:
    """
    Reload enrolled identities, e.g. right after an enrollment

    Returns:
        Number of identities now loaded
    """
    container = get_container()
    refresh_directory_use_case = container.get(RefreshDirectoryUseCase)

    try:
        return await asyncio.to_thread(refresh_directory_use_case.execute)
    except DirectoryUnavailableError as exception:
        logger.error(f"Directory refresh failed: {exception.message}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=get_user_message(exception),
        )


@router.get("/health")
async def health() -> Dict[str, Any]:
    """Liveness plus the size of the directory currently cached"""
    container = get_container()
    snapshot = container.get(DirectorySnapshotProvider).cached
    return {
        "status": "ok",
        "version": __version__,
        "directory_loaded": snapshot is not None,
        "identities": len(snapshot) if snapshot is not None else 0,
    }
