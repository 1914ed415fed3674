"""Error taxonomy shared by the services and the HTTP layer.

An empty search result is not an error and has no class here.
"""


class JobBoardError(Exception):
    """Base class for every error raised on purpose by jobboard."""


class ValidationError(JobBoardError):
    """A caller-supplied value is malformed (bad filter, bad payload)."""


class StoreError(JobBoardError):
    """The data store query failed; no partial result is available."""


class AuthError(JobBoardError):
    """The auth provider rejected the session or could not be reached."""


class NotFoundError(JobBoardError):
    pass


class PermissionDeniedError(JobBoardError):
    pass


class ConflictError(JobBoardError):
    pass
