class NotFoundError(LookupError):
    """A row referenced by the request does not exist."""


class SlugConflictError(ValueError):
    """Another job already uses the requested slug."""

    def __init__(self, message: str = "Job with this slug already exists"):
        super().__init__(message)


class InvalidSortError(ValueError):
    """The requested sort field is not one the job list can order by."""
