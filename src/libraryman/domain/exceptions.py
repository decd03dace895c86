"""Domain error taxonomy raised by the member workflows and stores."""


class LibraryManError(Exception):
    """Base class for every error the API maps to a response code."""

    status_code: int = 500
    title: str = "Internal Server Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ResourceNotFoundError(LibraryManError):
    """No record exists for the requested identifier."""

    status_code = 404
    title = "Resource Not Found"


class InvalidSortFieldError(LibraryManError):
    """Pagination asked to sort by a property members do not have."""

    status_code = 400
    title = "Invalid Sort Field"


class InvalidCredentialError(LibraryManError):
    """Current password is wrong, or the new one equals it."""

    status_code = 400
    title = "Invalid Password"


class DeletionBlockedError(LibraryManError):
    """The member still has unpaid fines or books out."""

    status_code = 409
    title = "Deletion Blocked"


class DuplicateMemberError(LibraryManError):
    """The store already holds another member with this username or email."""

    status_code = 409
    title = "Duplicate Member"


class UnexpectedFailureError(LibraryManError):
    """A backing store or collaborator failed in a way callers cannot fix."""

    status_code = 500
    title = "Internal Server Error"
