"""The @context ordering rule.

Contexts are not resolved; only the position of the two well-known URIs in
a document's top-level @context is looked at.
"""

from typing import Any

from iiif_embedding.domain.models import Diagnostic, DiagnosticCollector, ErrorKind
from iiif_embedding.domain.vocabulary import EXTENSION_CONTEXT, PRESENTATION_CONTEXT

from .pointer import pointer


def check_context_order(context: Any, *, path: str = "/@context") -> list[Diagnostic]:
    """Check that the extension context is listed before the Presentation context.

    Args:
        context: The raw top-level ``@context`` value
        path: JSON Pointer of the ``@context`` property

    Returns:
        Diagnostics; empty when the ordering rule holds
    """
    collector = DiagnosticCollector()
    entries = context if isinstance(context, list) else [context]

    def position(uri: str) -> int | None:
        for index, entry in enumerate(entries):
            if entry == uri:
                return index
        return None

    extension = position(EXTENSION_CONTEXT)
    presentation = position(PRESENTATION_CONTEXT)
    if extension is None:
        collector.warning(
            ErrorKind.CONTEXT_ORDER,
            path,
            f"@context does not list the embedding extension context {EXTENSION_CONTEXT}",
        )
    elif presentation is not None and extension > presentation:
        entry_path = pointer(path, extension) if isinstance(context, list) else path
        collector.error(
            ErrorKind.CONTEXT_ORDER,
            entry_path,
            "the embedding extension context must be listed before the Presentation context",
        )
    return list(collector)


def is_context_ordered(context: Any) -> bool:
    """True when ``context`` lists the extension context ahead of any Presentation context."""
    return not check_context_order(context)
