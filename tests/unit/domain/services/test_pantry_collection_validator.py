"""Unit tests for CollectionValidator."""

import pytest

from pantry.domain.services import CollectionValidator


class TestValidateName:
    def test_valid_name(self) -> None:
        assert CollectionValidator.validate_name("Blog Posts") == []

    @pytest.mark.parametrize("name", [None, "", "   "])
    def test_missing_name(self, name) -> None:
        errors = CollectionValidator.validate_name(name)

        assert len(errors) == 1
        assert errors[0].field == "name"
        assert errors[0].code == "name_required"

    def test_name_too_long(self) -> None:
        errors = CollectionValidator.validate_name("x" * 256)

        assert errors[0].code == "name_too_long"


class TestValidateSchema:
    def test_empty_schema_is_valid(self) -> None:
        """Test that a collection may be created without fields."""
        assert CollectionValidator.validate_schema({}) == []

    def test_all_field_types_are_accepted(self) -> None:
        schema = {
            "body": "text",
            "title": "string",
            "rating": "number",
            "published": "date",
            "cover": "media",
        }

        assert CollectionValidator.validate_schema(schema) == []

    def test_type_tags_are_case_insensitive(self) -> None:
        assert CollectionValidator.validate_schema({"title": "String"}) == []

    def test_unknown_type_is_rejected(self) -> None:
        errors = CollectionValidator.validate_schema({"flag": "boolean"})

        assert len(errors) == 1
        assert errors[0].field == "schema.flag"
        assert errors[0].code == "field_type_invalid"

    def test_non_string_type_is_rejected(self) -> None:
        errors = CollectionValidator.validate_schema({"count": 3})

        assert errors[0].code == "field_type_invalid"

    @pytest.mark.parametrize("name", ["id", "created_at", "UPDATED_AT", "collection_id"])
    def test_reserved_field_names(self, name: str) -> None:
        errors = CollectionValidator.validate_schema({name: "string"})

        assert [e.code for e in errors] == ["field_name_reserved"]

    @pytest.mark.parametrize("name", ["1st", "", "title!", "a" * 65])
    def test_invalid_field_names(self, name: str) -> None:
        errors = CollectionValidator.validate_schema({name: "string"})

        assert [e.code for e in errors] == ["field_name_invalid_format"]

    def test_field_names_with_spaces_and_dashes_are_allowed(self) -> None:
        assert CollectionValidator.validate_schema({"Cover image": "media", "sub-title": "string"}) == []

    def test_non_mapping_schema(self) -> None:
        errors = CollectionValidator.validate_schema(["title"])

        assert errors[0].code == "schema_invalid"

    def test_errors_are_collected_per_field(self) -> None:
        errors = CollectionValidator.validate_schema({"id": "string", "flag": "bool"})

        assert {e.field for e in errors} == {"schema.id", "schema.flag"}


class TestValidate:
    def test_combines_name_and_schema_errors(self) -> None:
        errors = CollectionValidator.validate("", {"flag": "bool"})

        assert {e.code for e in errors} == {"name_required", "field_type_invalid"}

    def test_normalize_schema_lowercases_types(self) -> None:
        assert CollectionValidator.normalize_schema({"title": "STRING"}) == {"title": "string"}
