"""Static reference data for the embedding annotation vocabulary.

Nothing here is computed; consumers building their own serializers can use
these tables directly.
"""

from types import MappingProxyType

# Linked-data contexts. The extension context must be listed before the
# Presentation context in a document's top-level @context array.
EXTENSION_CONTEXT = "https://iiif.io/api/extension/embedding/context.json"
PRESENTATION_CONTEXT = "http://iiif.io/api/presentation/3/context.json"
CONTEXT_ORDER: tuple[str, str] = (EXTENSION_CONTEXT, PRESENTATION_CONTEXT)

EMBEDDING_MOTIVATION = "embedding"
ANNOTATION_TYPE = "Annotation"
EMBEDDING_VECTOR_TYPE = "EmbeddingVector"
SPECIFIC_RESOURCE_TYPE = "SpecificResource"

VOCABULARY: MappingProxyType[str, str] = MappingProxyType(
    {
        "vector": "Inline vector payload, a JSON array of numbers or a base64 string",
        "vectorReference": "URI of an externally stored vector",
        "vectorEncoding": "Serialization of an inline vector: json-array or base64",
        "model": "Descriptor of the model that produced the vector",
        "dimensions": "Number of elements in the vector",
        "dataType": "Numeric element type of binary vectors",
        "endianness": "Byte order of multi-byte binary elements",
        "type": "Kind of embedding model (e.g. text, image, multimodal)",
        "normalization": "Whether the vector is normalized to unit length",
        "provider": "Organization or service providing the model",
        "maxTokens": "Maximum input length accepted by the model",
        "truncation": "Truncation applied to the input before embedding",
        "name": "Model name",
        "version": "Model version",
    }
)

# Vector encodings
JSON_ARRAY = "json-array"
BASE64 = "base64"
VECTOR_ENCODINGS: frozenset[str] = frozenset({JSON_ARRAY, BASE64})

ENDIANNESS_VALUES: frozenset[str] = frozenset({"little", "big"})

# Recognized data types and their width in bytes. The list is open: other
# values degrade to UnknownDataType.
DATA_TYPE_BYTE_WIDTHS: MappingProxyType[str, int] = MappingProxyType(
    {
        "int8": 1,
        "uint8": 1,
        "int16": 2,
        "uint16": 2,
        "int32": 4,
        "uint32": 4,
        "float32": 4,
        "float64": 8,
    }
)

# Resource types that live on a coordinate space and so carry height/width.
SPATIAL_RESOURCE_TYPES: frozenset[str] = frozenset({"Canvas", "Image"})
NON_SPATIAL_RESOURCE_TYPES: frozenset[str] = frozenset(
    {"Collection", "Manifest", "Range", "Annotation", "AnnotationPage"}
)

# Media types a referenced vector may use without being binary.
TEXT_MEDIA_TYPES: frozenset[str] = frozenset(
    {"application/json", "application/x-ndjson", "text/csv", "text/plain"}
)
