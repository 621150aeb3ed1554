"""Projects services - the contract constants record."""

from .project_management import (
    get_project_details,
    upsert_project_details,
    get_project_constants,
    default_project_constants,
)
from .exceptions import (
    ProjectsServiceError,
    InvalidProjectDataError,
)

__all__ = [
    'get_project_details',
    'upsert_project_details',
    'get_project_constants',
    'default_project_constants',
    'ProjectsServiceError',
    'InvalidProjectDataError',
]
