"""Tests for vector payload and body validation."""

import math

import pytest

from conftest import kinds
from iiif_embedding import (
    ErrorKind,
    ErrorLevel,
    ExternalReferenceBody,
    InlineBase64Body,
    InlineJsonArrayBody,
    PayloadKind,
    ValidationOptions,
    validate_body,
    validate_payload,
)
from iiif_embedding.validation import is_binary_media_type


def _json_array_body(vector, **model):
    return {
        "type": "EmbeddingVector",
        "vector": vector,
        "vectorEncoding": "json-array",
        "model": {"name": "m", "version": "1", **model},
    }


class TestPayloadShape:
    """Exactly one of vector and vectorReference."""

    def test_both_present(self, base64_body):
        base64_body["vectorReference"] = "https://example.org/v.bin"

        result = validate_body(base64_body)

        assert kinds(result) == ["MutuallyExclusiveFields"]
        assert result.errors[0].path == "/body"

    def test_neither_present(self, base64_body):
        del base64_body["vector"]

        result = validate_body(base64_body)

        assert kinds(result) == ["MissingPayload"]
        assert result.errors[0].path == "/body"

    def test_null_vector_is_absent(self, base64_body):
        base64_body["vector"] = None

        result = validate_body(base64_body)

        assert kinds(result) == ["MissingPayload"]

    def test_body_must_be_object(self):
        result = validate_body("EmbeddingVector")

        assert kinds(result) == ["StructuralError"]
        assert result.errors[0].path == "/body"

    def test_body_type_must_be_embedding_vector(self, base64_body):
        base64_body["type"] = "TextualBody"

        result = validate_body(base64_body)

        assert kinds(result) == ["InvalidType"]
        assert result.errors[0].path == "/body/type"

    def test_payload_without_model(self):
        result = validate_payload({"vector": [1, 2], "vectorEncoding": "json-array"})

        assert result.ok
        assert result.value.kind == PayloadKind.JSON_ARRAY
        assert result.value.dimensions == 2


class TestJsonArray:
    def test_valid_vector(self):
        result = validate_body(_json_array_body([0.1, 0.2, 0.3], dimensions=3))

        body = result.unwrap()
        assert isinstance(body, InlineJsonArrayBody)
        assert body.dimensions == 3
        assert body.values() == (0.1, 0.2, 0.3)

    def test_dimension_mismatch(self):
        result = validate_body(_json_array_body([1, 2, 3, 4, 5], dimensions=6))

        assert kinds(result) == ["DimensionMismatch"]
        assert result.errors[0].path == "/body/model/dimensions"
        assert "6" in result.errors[0].message and "5" in result.errors[0].message

    def test_non_numeric_elements(self):
        result = validate_body(_json_array_body([0.1, "0.2", True, math.nan]))

        assert kinds(result) == ["StructuralError"] * 3
        assert [d.path for d in result.errors] == ["/body/vector/1", "/body/vector/2", "/body/vector/3"]

    def test_empty_vector(self):
        result = validate_body(_json_array_body([]))

        assert kinds(result) == ["InvalidValue"]
        assert result.errors[0].path == "/body/vector"

    def test_string_vector_with_json_array_encoding(self):
        result = validate_body(_json_array_body("AACAPw=="))

        assert kinds(result) == ["StructuralError"]
        assert result.errors[0].path == "/body/vector"

    def test_missing_encoding_is_reported_and_checking_continues(self):
        body = _json_array_body([1, 2, 3], dimensions=4)
        del body["vectorEncoding"]

        result = validate_body(body)

        assert kinds(result) == ["MissingRequiredField", "DimensionMismatch"]
        assert result.errors[0].path == "/body/vectorEncoding"

    def test_unrecognized_encoding(self):
        body = _json_array_body([1, 2, 3])
        body["vectorEncoding"] = "hex"

        result = validate_body(body)

        assert kinds(result) == ["InvalidValue"]
        assert result.errors[0].path == "/body/vectorEncoding"

    def test_single_byte_type_with_endianness(self):
        result = validate_body(_json_array_body([1, 2, 3], dataType="int8", endianness="little"))

        assert kinds(result) == ["EndiannessNotApplicable"]
        assert result.errors[0].path == "/body/model/endianness"

    def test_multi_byte_type_without_endianness_is_fine(self):
        result = validate_body(_json_array_body([1.5, 2.5], dataType="float32"))

        assert result.ok
        assert result.diagnostics == ()


class TestBase64:
    def test_valid_vector(self, base64_body):
        result = validate_body(base64_body)

        body = result.unwrap()
        assert isinstance(body, InlineBase64Body)
        assert body.values() == (1.0, 2.0, 3.0)
        assert result.diagnostics == ()

    @pytest.mark.parametrize(
        ("vector", "size"),
        [
            ("AAAAAAAAAAAAAAA=", 11),
            ("AAAAAAAAAAAAAAAAAA==", 13),
            ("AAAAAAAA8D8=", 8),
        ],
    )
    def test_byte_length_mismatch(self, base64_body, vector, size):
        base64_body["vector"] = vector

        result = validate_body(base64_body)

        assert kinds(result) == ["ByteLengthMismatch"]
        error = result.errors[0]
        assert error.path == "/body/vector"
        assert f"{size} bytes" in error.message
        assert "12 bytes" in error.message

    def test_exact_length_passes(self, base64_body):
        base64_body["vector"] = "AAAAAAAAAAAAAAAA"

        assert validate_body(base64_body).ok

    def test_invalid_base64(self, base64_body):
        base64_body["vector"] = "not base64!"

        result = validate_body(base64_body)

        assert kinds(result) == ["InvalidBase64"]
        assert result.errors[0].path == "/body/vector"

    def test_array_vector_with_base64_encoding(self, base64_body):
        base64_body["vector"] = [1.0, 2.0, 3.0]

        result = validate_body(base64_body)

        assert kinds(result) == ["StructuralError"]

    def test_missing_endianness(self, base64_body):
        del base64_body["model"]["endianness"]

        result = validate_body(base64_body)

        assert result.errors[0].kind == ErrorKind.ENDIANNESS_REQUIRED
        assert kinds(result) == ["MissingRequiredField"]
        assert result.errors[0].path == "/body/model/endianness"

    def test_missing_dimensions_and_data_type(self, base64_body):
        del base64_body["model"]["dimensions"]
        del base64_body["model"]["dataType"]
        del base64_body["model"]["endianness"]

        result = validate_body(base64_body)

        assert [(d.kind.value, d.path) for d in result.errors] == [
            ("MissingRequiredField", "/body/model/dimensions"),
            ("MissingRequiredField", "/body/model/dataType"),
        ]

    def test_single_byte_type_needs_no_endianness(self, base64_body):
        base64_body["model"].update(dataType="uint8", dimensions=12)
        del base64_body["model"]["endianness"]

        result = validate_body(base64_body)

        assert result.ok
        assert result.diagnostics == ()

    def test_unknown_data_type_skips_length_check(self, base64_body):
        base64_body["model"]["dataType"] = "bfloat16"
        base64_body["vector"] = "AAAA"

        result = validate_body(base64_body)

        assert result.ok
        assert kinds(result) == ["UnknownDataType"]
        assert result.warnings[0].path == "/body/model/dataType"

    def test_unknown_data_type_as_error(self, base64_body):
        base64_body["model"]["dataType"] = "bfloat16"
        options = ValidationOptions(unknown_data_type_level=ErrorLevel.ERROR)

        result = validate_body(base64_body, options=options)

        assert not result.ok
        assert kinds(result) == ["UnknownDataType"]

    def test_payload_reports_byte_length(self, base64_body):
        result = validate_payload(base64_body, base64_body["model"])

        assert result.value.kind == PayloadKind.BASE64
        assert result.value.byte_length == 12
        assert result.value.binary is True


class TestReference:
    def test_valid_reference(self, reference_body):
        result = validate_body(reference_body)

        body = result.unwrap()
        assert isinstance(body, ExternalReferenceBody)
        assert body.vector_reference == "https://example.org/vectors/page1.bin"
        assert body.to_jsonld() == reference_body

    def test_format_required(self, reference_body):
        del reference_body["format"]

        result = validate_body(reference_body)

        assert kinds(result) == ["MissingRequiredField"]
        assert result.errors[0].path == "/body/format"

    def test_format_must_be_media_type(self, reference_body):
        reference_body["format"] = "binary"

        result = validate_body(reference_body)

        assert kinds(result) == ["InvalidValue"]

    def test_relative_reference(self, reference_body):
        reference_body["vectorReference"] = "vectors/page1.bin"

        result = validate_body(reference_body)

        assert kinds(result) == ["InvalidUri"]
        assert result.errors[0].path == "/body/vectorReference"

    def test_dimensions_required(self, reference_body):
        del reference_body["model"]["dimensions"]

        result = validate_body(reference_body)

        assert kinds(result) == ["MissingRequiredField"]
        assert result.errors[0].path == "/body/model/dimensions"

    def test_binary_format_requires_data_type(self, reference_body):
        del reference_body["model"]["dataType"]
        del reference_body["model"]["endianness"]

        result = validate_body(reference_body)

        assert kinds(result) == ["MissingRequiredField"]
        assert result.errors[0].path == "/body/model/dataType"

    def test_text_format_needs_no_data_type(self, reference_body):
        reference_body["format"] = "application/json"
        del reference_body["model"]["dataType"]
        del reference_body["model"]["endianness"]

        result = validate_body(reference_body)

        assert result.ok
        assert result.diagnostics == ()

    def test_binary_format_requires_endianness(self, reference_body):
        del reference_body["model"]["endianness"]

        result = validate_body(reference_body)

        assert kinds(result) == ["MissingRequiredField"]
        assert result.errors[0].path == "/body/model/endianness"

    def test_payload_summary(self, reference_body):
        result = validate_payload(reference_body, reference_body["model"], path="/body")

        payload = result.unwrap()
        assert payload.kind == PayloadKind.REFERENCE
        assert payload.dimensions == 512
        assert payload.media_type == "application/octet-stream"
        assert payload.binary is True


class TestBinaryMediaTypes:
    @pytest.mark.parametrize(
        ("media_type", "binary"),
        [
            ("application/octet-stream", True),
            ("application/x-npy", True),
            ("application/json", False),
            ("application/ld+json", False),
            ("text/csv; charset=utf-8", False),
            ("Application/X-NDJSON", False),
        ],
    )
    def test_default_classification(self, media_type, binary):
        assert is_binary_media_type(media_type) is binary

    def test_extra_text_types_from_options(self):
        options = ValidationOptions(text_media_types=("application/x-npy",))

        assert is_binary_media_type("application/x-npy", options) is False
