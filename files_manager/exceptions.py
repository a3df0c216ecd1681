"""Error taxonomy shared by services and the HTTP layer"""


class FilesManagerError(Exception):
    """Base error carrying the HTTP status it maps to"""

    status_code = 500
    default_message = "Internal error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthorized(FilesManagerError):
    """Missing, unknown or expired token, or bad credentials"""

    status_code = 401
    default_message = "Unauthorized"


class ValidationError(FilesManagerError):
    """A request field is missing or invalid"""

    status_code = 400
    default_message = "Invalid request"


class MissingField(ValidationError):
    """A required field is absent (message names it, e.g. 'Missing name')"""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Missing {field}")


class ParentNotFound(ValidationError):
    default_message = "Parent not found"


class ParentNotAFolder(ValidationError):
    default_message = "Parent is not a folder"


class AlreadyExists(ValidationError):
    default_message = "Already exist"


class NotFound(FilesManagerError):
    """Resource is absent or owned by someone else"""

    status_code = 404
    default_message = "Not found"


class FolderHasNoContent(FilesManagerError):
    status_code = 400
    default_message = "A folder doesn't have content"


class JobError(FilesManagerError):
    """Raised by workers when a job cannot be completed"""

    default_message = "Job failed"
