"""Tests for the binary vector codec."""

import pytest

from iiif_embedding import byte_width, decode_base64_vector, encode_base64_vector
from iiif_embedding.domain.codec import decode_base64, expected_byte_length


class TestByteWidths:
    @pytest.mark.parametrize(
        ("data_type", "width"),
        [("int8", 1), ("uint8", 1), ("int16", 2), ("uint16", 2), ("int32", 4), ("float32", 4), ("float64", 8)],
    )
    def test_known_types(self, data_type, width):
        assert byte_width(data_type) == width

    def test_unknown_type(self):
        assert byte_width("bfloat16") is None
        assert expected_byte_length(4, "bfloat16") is None

    def test_expected_length(self):
        assert expected_byte_length(512, "float32") == 2048


class TestDecode:
    def test_little_endian_float32(self):
        assert decode_base64_vector("AACAPwAAAEAAAEBA", "float32", "little") == (1.0, 2.0, 3.0)

    def test_big_endian_int16(self):
        # 0x0001, 0x0100
        assert decode_base64_vector("AAEBAA==", "int16", "big") == (1, 256)

    def test_single_byte_types_ignore_endianness(self):
        assert decode_base64_vector("/wE=", "int8") == (-1, 1)
        assert decode_base64_vector("/wE=", "uint8") == (255, 1)

    def test_multi_byte_type_needs_endianness(self):
        with pytest.raises(ValueError, match="endianness"):
            decode_base64_vector("AACAPw==", "float32")

    def test_partial_element(self):
        with pytest.raises(ValueError, match="whole number"):
            decode_base64_vector("AACA", "float32", "little")

    @pytest.mark.parametrize("text", ["AAA", "AA=A", "AACAPw==\n", "AACA?w=="])
    def test_strict_base64(self, text):
        with pytest.raises(ValueError, match="invalid base64"):
            decode_base64(text)


class TestEncode:
    def test_encode_matches_decode(self):
        text = encode_base64_vector([1.0, 2.0, 3.0], "float32", "little")

        assert text == "AACAPwAAAEAAAEBA"

    def test_out_of_range_value(self):
        with pytest.raises(ValueError, match="int8"):
            encode_base64_vector([300], "int8")

    def test_unsupported_type(self):
        with pytest.raises(ValueError, match="unsupported"):
            encode_base64_vector([1.0], "bfloat16", "little")
