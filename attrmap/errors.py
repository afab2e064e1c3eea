"""attrmap error types."""


class InvalidArgument(ValueError):
    """Raised when a required namespace or attribute name is None.

    Attributes:
        argument: The name of the offending parameter.
    """

    def __init__(self, argument: str, message: str | None = None) -> None:
        self.argument = argument
        super().__init__(message or f"Attribute {argument} must not be None")
