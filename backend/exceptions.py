class MalformedInputError(ValueError):
    """Raised when an uploaded file cannot be read as the expected CSV layout,
    e.g. a required header column is missing."""


class ImportValidationError(Exception):
    """Raised when parsed rows fail validation; carries every collected error."""

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__('; '.join(self.errors) if self.errors else 'Invalid import file')
