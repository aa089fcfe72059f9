from .gate import (
    ProcessScanUseCase,
    RefreshDirectoryUseCase,
)

__all__ = [
    "ProcessScanUseCase",
    "RefreshDirectoryUseCase",
]
