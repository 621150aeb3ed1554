"""Domain exceptions for projects app."""


class ProjectsServiceError(Exception):
    """Base exception for all projects service errors."""
    pass


class InvalidProjectDataError(ProjectsServiceError):
    """Project code missing or a contract figure is invalid."""
    pass
