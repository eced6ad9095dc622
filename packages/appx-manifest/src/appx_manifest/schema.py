# SPDX-License-Identifier: MIT
"""JSON Schema definitions for the accepted manifest formats.

The schemas only constrain the shape of the fields the package descriptor is
built from. Everything else in a manifest is ignored, so unknown keys are
always allowed.
"""

from __future__ import annotations

from typing import Any

from jsonschema import Draft202012Validator, ValidationError

from .errors import ManifestValidationError, ValidationErrorDetail, ValidationResult
from .models import SourceFormat

_STRING = {"type": "string"}

# Display fields shared by both formats
_DISPLAY_PROPERTIES: dict[str, Any] = {
    "lang": _STRING,
    "name": _STRING,
    "short_name": _STRING,
    "description": _STRING,
    "scope": _STRING,
    "display": _STRING,
    "orientation": _STRING,
    "theme_color": _STRING,
    "background_color": _STRING,
    "store_version": _STRING,
}

W3C_MANIFEST_SCHEMA: dict = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "W3C Web App Manifest",
    "description": "Fields of a W3C manifest used by the package descriptor",
    "type": "object",
    "properties": {
        **_DISPLAY_PROPERTIES,
        "start_url": _STRING,
        "icons": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["src", "sizes"],
                "properties": {
                    "src": {"type": "string", "minLength": 1},
                    "sizes": _STRING,
                    "type": _STRING,
                },
            },
        },
        "mjs_access_whitelist": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["url"],
                "properties": {
                    "url": {"type": "string", "minLength": 1},
                    "apiAccess": {"type": ["string", "null"]},
                },
            },
        },
    },
}

CHROME_MANIFEST_SCHEMA: dict = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "Chrome Hosted App Manifest",
    "description": "Fields of a Chrome hosted-app manifest used by the package descriptor",
    "type": "object",
    "required": ["app"],
    "properties": {
        **_DISPLAY_PROPERTIES,
        "default_locale": _STRING,
        "icons": {
            "type": "object",
            "propertyNames": {"pattern": r"^[0-9]+$"},
            "additionalProperties": {"type": "string", "minLength": 1},
        },
        "app": {
            "type": "object",
            "properties": {
                "urls": {"type": "array", "items": _STRING},
                "launch": {
                    "type": "object",
                    "properties": {
                        "web_url": _STRING,
                        "local_path": _STRING,
                    },
                },
            },
        },
    },
}

SCHEMAS: dict[SourceFormat, dict] = {
    SourceFormat.W3C: W3C_MANIFEST_SCHEMA,
    SourceFormat.CHROME: CHROME_MANIFEST_SCHEMA,
}


def _json_path_from_error(error: ValidationError) -> str:
    """Convert a jsonschema error path to a readable field path."""
    if not error.absolute_path:
        return "<root>"
    parts = []
    for part in error.absolute_path:
        if isinstance(part, int):
            parts.append(f"[{part}]")
        elif parts:
            parts.append(f".{part}")
        else:
            parts.append(str(part))
    return "".join(parts)


def _format_error_message(error: ValidationError) -> str:
    """Format a jsonschema error into a human-readable message."""
    if error.validator == "required":
        missing = [name for name in error.validator_value if name not in error.instance]
        if len(missing) == 1:
            return f"Missing required field: {missing[0]}"
        return f"Missing required fields: {', '.join(missing)}"

    if error.validator == "type":
        expected = error.validator_value
        if isinstance(expected, list):
            expected = " or ".join(expected)
        return f"Expected {expected}, got {type(error.instance).__name__}"

    if error.validator == "minLength":
        return f"String must be at least {error.validator_value} character(s)"

    if "propertyNames" in error.schema_path:
        return "Icon sizes must be numeric"

    return error.message


def validate_manifest_shape(manifest: Any, source_format: SourceFormat) -> ValidationResult:
    """Validate a decoded manifest against the schema of its format.

    Args:
        manifest: The decoded manifest JSON
        source_format: Format the manifest was detected as

    Returns:
        ValidationResult listing every shape error found
    """
    if not isinstance(manifest, dict):
        return ValidationResult(
            valid=False,
            errors=[
                ValidationErrorDetail(
                    field="<root>",
                    message=f"Manifest must be a JSON object, got {type(manifest).__name__}",
                    value=manifest,
                )
            ],
        )

    validator = Draft202012Validator(SCHEMAS[source_format])
    errors = [
        ValidationErrorDetail(
            field=_json_path_from_error(error),
            message=_format_error_message(error),
            value=error.instance if error.absolute_path else None,
        )
        for error in sorted(validator.iter_errors(manifest), key=lambda e: list(map(str, e.absolute_path)))
    ]

    return ValidationResult(valid=not errors, errors=errors)


def validate_manifest_shape_strict(manifest: Any, source_format: SourceFormat) -> None:
    """Validate a decoded manifest and raise if its shape is wrong.

    Raises:
        ManifestValidationError: If the manifest does not match the schema
    """
    result = validate_manifest_shape(manifest, source_format)
    if not result.valid:
        raise ManifestValidationError(result.errors)
