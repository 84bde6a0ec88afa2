class DocumentError(Exception):
    """Base exception for document intake and processing errors."""


class AuthError(DocumentError):
    """Raised when the caller has no valid session."""


class NotFoundError(DocumentError):
    """Raised when a resource is missing or not owned by the caller."""


class DocumentNotFoundError(NotFoundError):
    """Raised when a document cannot be found for the caller."""


class TaxReturnNotFoundError(NotFoundError):
    """Raised when a tax return cannot be found for the caller."""


class DocumentValidationError(DocumentError):
    """Raised when an upload is rejected (mime type, size, missing fields)."""


class FileReadError(DocumentError):
    """Raised when a stored file cannot be read from disk."""


class DocumentStateError(DocumentError):
    """Raised when a status update does not match the document's current state."""


class ProcessingFailedError(DocumentError):
    """Raised after a processing attempt failed and the document was marked FAILED."""
