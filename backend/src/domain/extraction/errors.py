"""Exceptions raised by the rental agreement extraction pipeline.

Only input and template-resolution failures are raised to callers. Pattern and
field failures are recovered inside the pipeline and surface as data on the
returned result.
"""

from typing import Optional


class RentalAgreementExtractionError(Exception):
    """Base exception for extraction errors."""
    pass


class InvalidInputError(RentalAgreementExtractionError):
    """Raised when the document text is missing or not a string."""
    pass


class TemplateNotFoundError(RentalAgreementExtractionError):
    """Raised when a template id is not registered.

    Attributes:
        template_id: The id that could not be resolved
    """

    def __init__(self, template_id: str):
        self.template_id = template_id
        super().__init__(f"Template not found: {template_id}")


class FieldProcessingError(RentalAgreementExtractionError):
    """Unexpected failure while extracting a single field.

    Never escapes the orchestrator; its message is recorded on the result.
    """

    def __init__(self, field_name: str, cause: Exception):
        self.field_name = field_name
        self.cause = cause
        super().__init__(f"Error processing field {field_name}: {cause}")


class TextExtractionError(RentalAgreementExtractionError):
    """Raised by text sources when a file cannot be read or parsed."""
    pass


class DocumentProcessingError(RentalAgreementExtractionError):
    """Wraps any failure of a file-based extraction run.

    The original exception is chained as ``__cause__``.

    Attributes:
        file_path: Path of the document being processed
        template_id: Template requested by the caller
        version_id: Detected layout version, if detection had already run
    """

    def __init__(
        self,
        message: str,
        file_path: Optional[str] = None,
        template_id: Optional[str] = None,
        version_id: Optional[str] = None,
    ):
        self.file_path = file_path
        self.template_id = template_id
        self.version_id = version_id
        super().__init__(message)

    def to_dict(self) -> dict:
        """Diagnostic details for logging."""
        return {
            "message": str(self),
            "file_path": self.file_path,
            "template_id": self.template_id,
            "version_id": self.version_id,
            "cause": repr(self.__cause__) if self.__cause__ else None,
        }
