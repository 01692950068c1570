from typing import Optional


class ProcessingException(Exception):
    """Exception raised when a document operation fails after validation.

    The message is generic and can be shown to the caller; the underlying
    cause is chained (``raise ... from``) and logged server side.

    Attributes
    ----------
    message : str
        Generic explanation of the failure
    details : dict, optional
        Additional details about the failure, never returned to the caller
    """

    def __init__(
        self,
        message: str,
        details: Optional[dict] = None,
    ):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f'{self.message}\nDetails: {self.details}'
        return self.message


class DocumentLoadException(ProcessingException):
    """Exception raised when a source file cannot be opened as a PDF.

    Malformed bytes, encrypted files and documents without pages all end up
    here.
    """
