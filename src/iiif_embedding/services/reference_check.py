"""Opt-in verification of externally referenced vectors.

The core validators never touch the network. This service sits on top of an
already validated body and asks the server hosting ``vectorReference``
whether the file exists and whether its headers agree with the description.
Only headers are read; the vector content is never downloaded.
"""

import time

import httpx
from pydantic import BaseModel, ConfigDict, Field

from iiif_embedding.core.base import ReferenceErrorDetails
from iiif_embedding.core.config import DEFAULT_OPTIONS, ValidationOptions
from iiif_embedding.core.errors import ReferenceCheckError
from iiif_embedding.core.logging import get_logger
from iiif_embedding.domain.codec import expected_byte_length
from iiif_embedding.domain.models import (
    DiagnosticCollector,
    EmbeddingAnnotation,
    ErrorKind,
    ExternalReferenceBody,
    ValidationResult,
)
from iiif_embedding.validation.payload import is_binary_media_type
from iiif_embedding.validation.pointer import pointer

logger = get_logger(__name__)


class ReferenceCheck(BaseModel):
    """What the hosting server said about a referenced vector."""

    model_config = ConfigDict(frozen=True)

    reference: str
    status_code: int | None = None
    content_type: str | None = None
    content_length: int | None = None
    latency_ms: float | None = Field(None, description="Time until response headers arrived")


def _essence(media_type: str) -> str:
    return media_type.split(";", 1)[0].strip().lower()


async def _fetch_headers(client: httpx.AsyncClient, url: str) -> httpx.Response:
    response = await client.head(url)
    if response.status_code != 405:
        return response
    # Some servers refuse HEAD; stream a GET and stop after the headers
    async with client.stream("GET", url) as streamed:
        return streamed


async def verify_reference(
    target: ExternalReferenceBody | EmbeddingAnnotation,
    *,
    client: httpx.AsyncClient | None = None,
    options: ValidationOptions | None = None,
) -> ValidationResult[ReferenceCheck]:
    """Check that a referenced vector is reachable and matches its description.

    Args:
        target: A validated reference body, or an annotation carrying one
        client: HTTP client to use; one is created (and closed) when omitted
        options: Validation options (timeout, User-Agent, text media types)

    Returns:
        A result with what the server reported, or the problems found

    Raises:
        ReferenceCheckError: If the body does not use vectorReference
    """
    options = options or DEFAULT_OPTIONS
    body = target.body if isinstance(target, EmbeddingAnnotation) else target
    path = "/body" if isinstance(target, EmbeddingAnnotation) else ""
    if not isinstance(body, ExternalReferenceBody):
        raise ReferenceCheckError(
            f"{type(body).__name__} carries an inline vector; only vectorReference bodies can be verified",
            details=ReferenceErrorDetails(source="reference_check", operation="verify_reference"),
        )

    url = body.vector_reference
    reference_path = pointer(path, "vectorReference")
    collector = DiagnosticCollector()
    owns_client = client is None
    if client is None:
        client = httpx.AsyncClient(
            timeout=options.reference_timeout,
            follow_redirects=True,
            headers={"User-Agent": options.user_agent},
        )

    started = time.perf_counter()
    try:
        response = await _fetch_headers(client, url)
    except httpx.HTTPError as e:
        logger.warning("Vector reference unreachable", reference=url, error=str(e))
        collector.error(ErrorKind.REFERENCE_UNREACHABLE, reference_path, f"could not reach {url}: {e!s}")
        return collector.result(lambda: None)
    finally:
        if owns_client:
            await client.aclose()
    latency_ms = (time.perf_counter() - started) * 1000

    content_type = response.headers.get("content-type")
    raw_length = response.headers.get("content-length")
    content_length = int(raw_length) if raw_length and raw_length.isdigit() else None

    if not response.is_success:
        collector.error(
            ErrorKind.REFERENCE_UNREACHABLE,
            reference_path,
            f"{url} answered with HTTP {response.status_code}",
        )

    if content_type and _essence(content_type) != _essence(body.format):
        collector.warning(
            ErrorKind.FORMAT_MISMATCH,
            pointer(path, "format"),
            f"format is {body.format} but the server reports {content_type}",
        )

    dimensions = body.model.dimensions
    data_type = body.model.data_type
    if (
        response.is_success
        and content_length is not None
        and "content-encoding" not in response.headers
        and is_binary_media_type(body.format, options)
        and dimensions is not None
        and data_type is not None
    ):
        expected = expected_byte_length(dimensions, data_type)
        if expected is not None and content_length != expected:
            collector.error(
                ErrorKind.BYTE_LENGTH_MISMATCH,
                reference_path,
                f"referenced file is {content_length} bytes but {dimensions} x {data_type} requires {expected} bytes",
            )

    logger.info(
        "Verified vector reference",
        reference=url,
        status_code=response.status_code,
        latency_ms=round(latency_ms, 1),
        errors=sum(d.is_error for d in collector),
    )
    return collector.result(
        lambda: ReferenceCheck(
            reference=url,
            status_code=response.status_code,
            content_type=content_type,
            content_length=content_length,
            latency_ms=latency_ms,
        )
    )
