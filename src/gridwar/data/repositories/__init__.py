"""Repository exports."""

from .jobs_repo import JobsRepository
from .stages_repo import StagesRepository

__all__ = [
    "JobsRepository",
    "StagesRepository",
]
