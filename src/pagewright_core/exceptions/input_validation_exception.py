from typing import Optional


class InputValidationException(Exception):
    """Exception raised when a request cannot be served as submitted.

    This exception should be raised for user-correctable problems such as
    too few files for a merge, a missing upload or a page range expression
    that does not fit the document. Nothing is written to the output
    directory when it is raised.

    Attributes
    ----------
    message : str
        Human-readable explanation, safe to return to the caller
    details : dict, optional
        Additional details about the error, such as the offending value

    Example
    ---------
    try:
        raise InputValidationException(
            message="Invalid page range",
            details={"pages": "2-1", "page_count": 5}
        )
    except InputValidationException as e:
        print(e)  # Will print: "Invalid page range"
    """

    def __init__(
        self,
        message: str,
        details: Optional[dict] = None,
    ):
        """Initialize the input validation error.

        Parameters
        ----------
        message : str
            Human-readable error message
        details : dict, optional
            Additional error details, by default None
        """
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return a string representation of the error.

        Returns
        -------
        str
            The error message, followed by the details when present
        """
        if self.details:
            return f'{self.message}\nDetails: {self.details}'
        return self.message
