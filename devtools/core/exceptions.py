from typing import Dict, List, Optional, TypedDict, Union


class ConversionDetails(TypedDict, total=False):
    """Type-safe details for conversion errors."""

    input_format: str
    output_format: str
    file_size: int
    dimensions: tuple[int, int]


class ValidationDetails(TypedDict, total=False):
    """Type-safe details for validation errors."""

    field_name: str
    field_value: Union[str, int, float, bool]
    expected_values: List[Union[str, int]]
    constraints: str


class ResourceDetails(TypedDict, total=False):
    """Type-safe details for size limit errors."""

    file_size: int
    max_size: int


class FormatDetails(TypedDict, total=False):
    """Type-safe details for format errors."""

    requested_format: str
    supported_formats: List[str]
    mime_type: str


ErrorDetails = Union[
    ConversionDetails,
    ValidationDetails,
    ResourceDetails,
    FormatDetails,
    Dict[str, Union[str, int, float, bool, List[str], List[int]]],
]


class DevToolsError(Exception):
    """Base exception for all devtools server errors."""

    def __init__(
        self,
        message: str,
        error_code: str,
        status_code: int = 500,
        details: Optional[ErrorDetails] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}


class ValidationError(DevToolsError):
    """Raised when request parameters are missing or malformed."""

    def __init__(self, message: str, details: Optional[ValidationDetails] = None):
        super().__init__(
            message=message, error_code="VAL400", status_code=400, details=details
        )


class InvalidImageError(DevToolsError):
    """Raised when image data is empty, invalid or corrupted."""

    def __init__(self, message: str, details: Optional[ValidationDetails] = None):
        super().__init__(
            message=message, error_code="IMG400", status_code=400, details=details
        )


class PayloadTooLargeError(DevToolsError):
    """Raised when an upload exceeds the configured size limit."""

    def __init__(self, message: str, details: Optional[ResourceDetails] = None):
        super().__init__(
            message=message, error_code="REQ413", status_code=413, details=details
        )


class UnsupportedFormatError(DevToolsError):
    """Raised when a format cannot be read or written."""

    def __init__(self, message: str, details: Optional[FormatDetails] = None):
        super().__init__(
            message=message, error_code="FMT415", status_code=415, details=details
        )


class ConversionFailedError(DevToolsError):
    """Raised when the image library fails to produce output."""

    def __init__(self, message: str, details: Optional[ConversionDetails] = None):
        super().__init__(
            message=message, error_code="CONV500", status_code=500, details=details
        )
