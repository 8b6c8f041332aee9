# src/oregonchem_api/domain/interfaces/gateways/document_renderer.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""Document Renderer Protocol.

Synopsis:
    Produces the PDF quotation after persistence. Best effort from the
    pipeline's point of view: a failure is recorded in the pipeline outcome
    and never reaches the HTTP caller.

Layer:
    domain/interfaces/gateways
"""

from __future__ import annotations

from typing import Protocol

from oregonchem_api.domain.entities.quote import Quote


class DocumentRenderer(Protocol):
    """Produce a PDF quotation for a persisted quote."""

    async def render(self, quote: Quote) -> bytes:
        """Return the PDF bytes.

        Raises:
            DocumentRenderError: If the document cannot be produced.
        """
        ...
