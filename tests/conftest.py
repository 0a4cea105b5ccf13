"""Shared fixtures for the embedding annotation tests."""

import copy
from typing import Any

import pytest

from iiif_embedding.domain.vocabulary import EXTENSION_CONTEXT, PRESENTATION_CONTEXT


@pytest.fixture
def json_array_annotation() -> dict[str, Any]:
    """Minimal valid annotation with an inline json-array vector."""
    return {
        "type": "Annotation",
        "motivation": "embedding",
        "target": "http://x/canvas1",
        "body": {
            "type": "EmbeddingVector",
            "vector": [0.1, 0.2, 0.3],
            "vectorEncoding": "json-array",
            "model": {"name": "m", "version": "1.0"},
        },
    }


@pytest.fixture
def base64_model() -> dict[str, Any]:
    """Model descriptor for three little-endian float32 elements."""
    return {
        "name": "m",
        "version": "1.0",
        "dimensions": 3,
        "dataType": "float32",
        "endianness": "little",
    }


@pytest.fixture
def base64_body(base64_model) -> dict[str, Any]:
    """Body holding 1.0, 2.0, 3.0 as little-endian float32 (12 bytes)."""
    return {
        "type": "EmbeddingVector",
        "vector": "AACAPwAAAEAAAEBA",
        "vectorEncoding": "base64",
        "model": base64_model,
    }


@pytest.fixture
def reference_body() -> dict[str, Any]:
    """Body pointing at an external float32 file of 512 elements."""
    return {
        "type": "EmbeddingVector",
        "vectorReference": "https://example.org/vectors/page1.bin",
        "format": "application/octet-stream",
        "model": {
            "name": "clip-vit-b-32",
            "version": "2024-01",
            "dimensions": 512,
            "dataType": "float32",
            "endianness": "little",
        },
    }


@pytest.fixture
def full_annotation(reference_body) -> dict[str, Any]:
    """Annotation exercising id, @context, a SpecificResource target and extras."""
    return {
        "@context": [EXTENSION_CONTEXT, PRESENTATION_CONTEXT],
        "id": "https://example.org/anno/1",
        "type": "Annotation",
        "motivation": "embedding",
        "label": {"en": ["Page 1 embedding"]},
        "target": {
            "type": "SpecificResource",
            "source": {
                "id": "https://example.org/canvas/1",
                "type": "Canvas",
                "height": 1000,
                "width": 750,
            },
            "selector": {"type": "ImageApiSelector", "region": "10,20,300,400"},
        },
        "body": copy.deepcopy(reference_body),
    }


def kinds(result) -> list[str]:
    """Kind values of every diagnostic in a result, in order."""
    return [d.kind.value for d in result.diagnostics]
