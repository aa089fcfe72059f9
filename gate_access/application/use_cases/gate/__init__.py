from .process_scan import ProcessScanUseCase
from .refresh_directory import RefreshDirectoryUseCase

__all__ = [
    "ProcessScanUseCase",
    "RefreshDirectoryUseCase",
]
