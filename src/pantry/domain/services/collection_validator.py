"""Collection validation for names and field schemas.

A schema is a mapping of field name to one of the supported field type
tags (text, string, number, date, media).
"""

import re
from dataclasses import dataclass
from typing import Any

from pantry.domain.entities.collection import FieldType

# Keys the item store manages itself
RESERVED_FIELD_NAMES = frozenset({"id", "collection_id", "created_at", "updated_at"})

FIELD_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_ -]*$")


@dataclass
class CollectionValidationError:
    """A single collection validation error."""

    field: str
    message: str
    code: str


class CollectionValidator:
    """Validator for collection create and update requests."""

    MAX_NAME_LENGTH = 255
    MAX_FIELD_NAME_LENGTH = 64

    @classmethod
    def validate_name(cls, name: str | None) -> list[CollectionValidationError]:
        """Validate a collection name.

        Args:
            name: The collection name to validate.

        Returns:
            List of validation errors (empty if valid).
        """
        if not name or not name.strip():
            return [
                CollectionValidationError(
                    field="name",
                    message="Collection name is required",
                    code="name_required",
                )
            ]

        if len(name) > cls.MAX_NAME_LENGTH:
            return [
                CollectionValidationError(
                    field="name",
                    message=f"Collection name must be at most {cls.MAX_NAME_LENGTH} characters",
                    code="name_too_long",
                )
            ]

        return []

    @classmethod
    def validate_field(cls, name: str, field_type: Any) -> list[CollectionValidationError]:
        """Validate a single schema entry."""
        errors = []
        field_path = f"schema.{name}"

        if len(name) > cls.MAX_FIELD_NAME_LENGTH or not FIELD_NAME_PATTERN.match(name):
            errors.append(
                CollectionValidationError(
                    field=field_path,
                    message=(
                        "Field name must start with a letter or underscore and contain only "
                        f"letters, digits, spaces, dashes and underscores (max {cls.MAX_FIELD_NAME_LENGTH})"
                    ),
                    code="field_name_invalid_format",
                )
            )
        elif name.lower() in RESERVED_FIELD_NAMES:
            errors.append(
                CollectionValidationError(
                    field=field_path,
                    message=f"Field name '{name}' is reserved and cannot be used",
                    code="field_name_reserved",
                )
            )

        valid_types = [t.value for t in FieldType]
        if not isinstance(field_type, str) or field_type.lower() not in valid_types:
            errors.append(
                CollectionValidationError(
                    field=field_path,
                    message=f"Invalid field type '{field_type}'. Valid types: {', '.join(valid_types)}",
                    code="field_type_invalid",
                )
            )

        return errors

    @classmethod
    def validate_schema(cls, schema: Any) -> list[CollectionValidationError]:
        """Validate a collection schema. An empty schema is allowed."""
        if not isinstance(schema, dict):
            return [
                CollectionValidationError(
                    field="schema",
                    message="Schema must be an object mapping field names to types",
                    code="schema_invalid",
                )
            ]

        errors: list[CollectionValidationError] = []
        for name, field_type in schema.items():
            errors.extend(cls.validate_field(name, field_type))
        return errors

    @classmethod
    def validate(cls, name: str | None, schema: Any) -> list[CollectionValidationError]:
        """Validate a full collection definition."""
        return cls.validate_name(name) + cls.validate_schema(schema)

    @staticmethod
    def normalize_schema(schema: dict[str, str]) -> dict[str, str]:
        """Lower-case the type tags of an already validated schema."""
        return {name: field_type.lower() for name, field_type in schema.items()}
