from .dive_log_input import DiveLogInput
from .dive_log_use_cases import (
    CreateDiveLogUseCase,
    DeleteDiveLogUseCase,
    GetDiveLogUseCase,
    ListDiveLogsUseCase,
    UpdateDiveLogUseCase,
)

__all__ = [
    "CreateDiveLogUseCase",
    "DeleteDiveLogUseCase",
    "DiveLogInput",
    "GetDiveLogUseCase",
    "ListDiveLogsUseCase",
    "UpdateDiveLogUseCase",
]
