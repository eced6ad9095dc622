# SPDX-License-Identifier: MIT
"""Error catalog and exception classes for manifest conversion.

Every conversion failure carries a fixed catalog entry (code, type, severity
and a message template) plus the positional parameters for that template. The
template is substituted only when the error is presented, so the exception
stays structured and easy to assert on.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


class Severity:
    """Severity levels understood by the error surface."""

    ERROR = "ERROR"
    WARNING = "WARNING"


class ErrorCode:
    """Numeric codes of the conversion error catalog."""

    MANIFEST_NOT_FOUND = 1
    START_URL_NOT_SPECIFIED = 2
    APPX_CREATION_FAILED = 3
    LAUNCH_URL_NOT_SPECIFIED = 4
    DOMAIN_PARSING_FAILED = 5
    NO_ICONS_FOUND = 6
    RELATIVE_PATH_REFERENCES_PARENT_DIRECTORY = 7
    RELATIVE_PATH_EXPECTED = 8
    UNSUPPORTED_PROTOCOL_IN_ACUR = 9
    ICON_NOT_FOUND = 10


@dataclass(frozen=True, slots=True)
class ErrorDefinition:
    """A single entry of the error catalog.

    Attributes:
        code: Stable numeric error code
        type: Short error type name
        severity: ERROR or WARNING
        message: Message template with positional ``{0}`` style placeholders
    """

    code: int
    type: str
    severity: str
    message: str


ERROR_CATALOG: dict[int, ErrorDefinition] = {
    definition.code: definition
    for definition in (
        ErrorDefinition(
            ErrorCode.MANIFEST_NOT_FOUND,
            "ManifestNotFound",
            Severity.ERROR,
            "Manifest could not be found at {0}.",
        ),
        ErrorDefinition(
            ErrorCode.START_URL_NOT_SPECIFIED,
            "StartUrlNotSpecified",
            Severity.ERROR,
            "The W3C manifest must specify a start_url.",
        ),
        ErrorDefinition(
            ErrorCode.APPX_CREATION_FAILED,
            "AppxCreationFailed",
            Severity.ERROR,
            "Error while running MakeAppx to create Appx package. Reason: {0}",
        ),
        ErrorDefinition(
            ErrorCode.LAUNCH_URL_NOT_SPECIFIED,
            "LaunchUrlNotSpecified",
            Severity.ERROR,
            "A value was specified neither at app.launch.web_url nor "
            "app.launch.local_path in the JSON manifest.",
        ),
        ErrorDefinition(
            ErrorCode.DOMAIN_PARSING_FAILED,
            "DomainParsingFailed",
            Severity.ERROR,
            "Domain parsing failed for the following url: {0}",
        ),
        ErrorDefinition(
            ErrorCode.NO_ICONS_FOUND,
            "NoIconsFound",
            Severity.ERROR,
            "Manifest must contain at least one icon.",
        ),
        ErrorDefinition(
            ErrorCode.RELATIVE_PATH_REFERENCES_PARENT_DIRECTORY,
            "RelativePathReferencesParentDirectory",
            Severity.ERROR,
            'Relative paths in manifest cannot reference parent directory using "..". '
            "Violating path: {0}",
        ),
        ErrorDefinition(
            ErrorCode.RELATIVE_PATH_EXPECTED,
            "RelativePathExpected",
            Severity.ERROR,
            "A relative path was expected, but instead found an absolute path: {0}",
        ),
        ErrorDefinition(
            ErrorCode.UNSUPPORTED_PROTOCOL_IN_ACUR,
            "UnsupportedProtocolInAcur",
            Severity.ERROR,
            "Expected protocol to be in ['http', 'https', '*']. Instead protocol was '{0}'.",
        ),
        ErrorDefinition(
            ErrorCode.ICON_NOT_FOUND,
            "IconNotFound",
            Severity.ERROR,
            'Manifest specifies icon that cannot be found at path: "{0}"',
        ),
    )
}


class ManifestError(Exception):
    """Base exception for manifest-related errors."""

    pass


class ConversionError(ManifestError):
    """Raised when a conversion fails with a catalog error.

    Attributes:
        definition: The catalog entry describing the failure
        params: Positional parameters for the message template
    """

    code: int = 0

    def __init__(self, *params: str, definition: ErrorDefinition | None = None):
        self.definition = definition or ERROR_CATALOG[self.code]
        self.code = self.definition.code
        self.params = tuple(str(p) for p in params)
        super().__init__(self.format_message())

    @property
    def type(self) -> str:
        return self.definition.type

    @property
    def severity(self) -> str:
        return self.definition.severity

    @property
    def message(self) -> str:
        """The unformatted message template."""
        return self.definition.message

    def format_message(self) -> str:
        """Substitute the parameters into the message template."""
        try:
            return self.definition.message.format(*self.params)
        except IndexError:
            # Missing parameters leave the template unformatted
            return self.definition.message

    def to_dict(self) -> dict[str, Any]:
        """Convert to the structured error record."""
        return {
            "code": self.definition.code,
            "type": self.definition.type,
            "severity": self.definition.severity,
            "message": self.definition.message,
            "params": list(self.params),
        }


class ManifestNotFoundError(ConversionError):
    """The manifest file is absent at the given path."""

    code = ErrorCode.MANIFEST_NOT_FOUND


class StartUrlNotSpecifiedError(ConversionError):
    """The manifest has no resolvable start URL."""

    code = ErrorCode.START_URL_NOT_SPECIFIED


class AppxCreationFailedError(ConversionError):
    """The external packager invocation failed."""

    code = ErrorCode.APPX_CREATION_FAILED


class LaunchUrlNotSpecifiedError(ConversionError):
    """A Chrome manifest declares neither a web nor a local launch target."""

    code = ErrorCode.LAUNCH_URL_NOT_SPECIFIED


class DomainParsingFailedError(ConversionError):
    """A declared URL could not be decomposed into a domain."""

    code = ErrorCode.DOMAIN_PARSING_FAILED


class NoIconsFoundError(ConversionError):
    code = ErrorCode.NO_ICONS_FOUND


class RelativePathReferencesParentDirectoryError(ConversionError):
    code = ErrorCode.RELATIVE_PATH_REFERENCES_PARENT_DIRECTORY


class RelativePathExpectedError(ConversionError):
    code = ErrorCode.RELATIVE_PATH_EXPECTED


class UnsupportedProtocolError(ConversionError):
    """A URL scheme other than http, https or * was found."""

    code = ErrorCode.UNSUPPORTED_PROTOCOL_IN_ACUR


class IconNotFoundError(ConversionError):
    code = ErrorCode.ICON_NOT_FOUND


class ManifestValidationError(ManifestError):
    """Raised when the manifest JSON does not have the expected shape.

    Attributes:
        errors: List of validation errors with field paths and messages
    """

    def __init__(self, errors: list[ValidationErrorDetail]):
        self.errors = errors
        message = f"Manifest validation failed with {len(errors)} error(s)"
        if errors:
            message += f": {errors[0].field}: {errors[0].message}"
        super().__init__(message)


@dataclass(frozen=True, slots=True)
class ValidationErrorDetail:
    """Details about a single validation error.

    Attributes:
        field: JSON path to the invalid field (e.g., "icons[0].src")
        message: Human-readable error message
        value: The invalid value that caused the error (if available)
    """

    field: str
    message: str
    value: Any = None


@dataclass
class ValidationResult:
    """Result of manifest shape validation.

    Attributes:
        valid: Whether the manifest is valid
        errors: List of validation errors (empty if valid)
    """

    valid: bool
    errors: list[ValidationErrorDetail] = field(default_factory=list)
