# src/oregonchem_api/adapters/gateways/pdf_quote_renderer.py
# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""
PDF Quote Renderer (reportlab)

Purpose:
    Draw the one-document quotation that accompanies the company
    notification. The layout is a single top-down pass on an A4 canvas:

        logo -> company block -> title -> metadata -> client block
        -> line-item table -> observations (only when present)

    Coordinates are tracked from the top of the page and converted to
    reportlab's bottom-origin space by ``_Cursor.rl``. Every call builds its
    own canvas and buffer; the renderer instance holds configuration only.

Layer: adapters/gateways
"""

from __future__ import annotations

import asyncio
import io
from datetime import datetime, timedelta, timezone
from typing import Final

from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfgen import canvas

from oregonchem_api.application.services.company import CompanyIdentity
from oregonchem_api.domain.entities.quote import Quote
from oregonchem_api.domain.exceptions.quotes import DocumentRenderError
from oregonchem_api.domain.interfaces.gateways.logo_provider import LogoAsset, LogoProvider
from oregonchem_api.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)

PAGE_W, PAGE_H = A4
MARGIN: Final[float] = 50
TEXT_W: Final[float] = PAGE_W - 2 * MARGIN
OBSERVATIONS_BREAK_AT: Final[float] = PAGE_H - 150
ROW_STEP: Final[float] = 25
CELL_W: Final[float] = 140
COLUMNS: Final[tuple[tuple[str, float], ...]] = (
    ("Producto", 50),
    ("Presentación", 200),
    ("Cantidad", 350),
    ("Frecuencia", 450),
)

LIMA_TZ: Final = timezone(timedelta(hours=-5), name="America/Lima")

INK = "#2c3e50"
MUTED = "#7f8c8d"
ACCENT = "#e74c3c"


def format_lima(moment: datetime) -> tuple[str, str]:
    """Return ``(dd/mm/yyyy, HH:MM:SS)`` for ``moment`` in Lima time."""
    local = moment.astimezone(LIMA_TZ)
    return local.strftime("%d/%m/%Y"), local.strftime("%H:%M:%S")


def observation_lines(text: str, *, font: str, size: float, width: float) -> list[str]:
    """Split observations on embedded newlines, then wrap each line to ``width``.

    Blank lines are kept so paragraph breaks survive.
    """
    out: list[str] = []
    for raw in text.splitlines():
        if not raw.strip():
            out.append("")
            continue
        out.extend(simpleSplit(raw, font, size, width))
    return out


class _Cursor:
    """Top-down drawing cursor over a reportlab canvas."""

    def __init__(self, c: canvas.Canvas) -> None:
        self.c = c
        self.y = MARGIN

    @staticmethod
    def rl(top_y: float) -> float:
        return PAGE_H - top_y

    def text(
        self,
        txt: str,
        *,
        x: float = MARGIN,
        y: float | None = None,
        font: str = "Helvetica",
        size: float = 12,
        color: str = INK,
        advance: float | None = None,
    ) -> None:
        top = self.y if y is None else y
        self.c.setFont(font, size)
        self.c.setFillColor(color)
        self.c.drawString(x, self.rl(top + size), txt)
        if y is None:
            self.y = top + (advance if advance is not None else size * 1.4)

    def centered(self, txt: str, *, font: str, size: float, color: str) -> None:
        self.c.setFont(font, size)
        self.c.setFillColor(color)
        self.c.drawCentredString(PAGE_W / 2, self.rl(self.y + size), txt)
        self.y += size * 1.6

    def gap(self, amount: float = 14) -> None:
        self.y += amount

    def new_page(self) -> None:
        self.c.showPage()
        self.y = MARGIN


class PdfQuoteRenderer:
    """Render a :class:`Quote` as an A4 PDF.

    Args:
        company: Identity block printed in the header.
        logo_provider: Optional logo source; the header is drawn without an
            image when nothing resolves.
    """

    def __init__(
        self,
        company: CompanyIdentity,
        logo_provider: LogoProvider | None = None,
    ) -> None:
        self._company = company
        self._logo_provider = logo_provider

    async def render(self, quote: Quote) -> bytes:
        logo = await self._logo_provider.resolve() if self._logo_provider else None
        try:
            pdf = await asyncio.to_thread(self._draw, quote, logo)
        except Exception as exc:
            raise DocumentRenderError(
                "No se pudo generar el PDF de la cotización",
                details={"quote_id": str(quote.id), "error": str(exc)},
            ) from exc
        logger.info(
            "quote_pdf_rendered",
            extra={"extra": {"quote_id": str(quote.id), "bytes": len(pdf)}},
        )
        return pdf

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def _draw(self, quote: Quote, logo: LogoAsset | None) -> bytes:
        buf = io.BytesIO()
        c = canvas.Canvas(buf, pagesize=A4)
        c.setTitle(f"Cotización {quote.id}")
        c.setAuthor(self._company.name)
        cur = _Cursor(c)

        self._draw_header(cur, logo)
        self._draw_metadata(cur, quote)
        self._draw_client(cur, quote)
        self._draw_items(cur, quote)
        if quote.observations.strip():
            self._draw_observations(cur, quote.observations)

        c.showPage()
        c.save()
        return buf.getvalue()

    def _draw_header(self, cur: _Cursor, logo: LogoAsset | None) -> None:
        if logo is not None:
            try:
                img = ImageReader(io.BytesIO(logo.content))
                iw, ih = img.getSize()
                scale = min(80 / iw, 80 / ih)
                dw, dh = iw * scale, ih * scale
                cur.c.drawImage(
                    img, MARGIN, cur.rl(MARGIN + dh), width=dw, height=dh, mask="auto"
                )
            except Exception as exc:
                logger.warning(
                    "quote_pdf_logo_skipped",
                    extra={"extra": {"origin": logo.origin, "error": str(exc)}},
                )

        company = self._company
        cur.text(company.name, y=140, size=16)
        cur.text(company.address, y=160, size=10, color=MUTED)
        cur.text(f"Tel: {company.phone}", y=175, size=10, color=MUTED)
        cur.text(f"Email: {company.email}", y=190, size=10, color=MUTED)
        cur.y = 230
        cur.centered("COTIZACIÓN", font="Helvetica-Bold", size=20, color=ACCENT)
        cur.gap()

    @staticmethod
    def _draw_metadata(cur: _Cursor, quote: Quote) -> None:
        date_s, time_s = format_lima(quote.created_at)
        cur.text(f"Número: {quote.id}")
        cur.text(f"Fecha: {date_s}")
        cur.text(f"Hora: {time_s}")
        cur.gap()

    @staticmethod
    def _draw_client(cur: _Cursor, quote: Quote) -> None:
        cur.text("INFORMACIÓN DEL CLIENTE", font="Helvetica-Bold", size=14, color=ACCENT)
        cur.gap(6)
        cur.text(f"Tipo de Cliente: {quote.client_type.label}")
        cur.text(f"Nombre: {quote.client_name}")
        cur.text(f"DNI: {quote.dni}")
        cur.text(f"Email: {quote.email}")
        cur.text(f"Teléfono: {quote.phone}")
        if quote.company_name:
            cur.text(f"Razón Social: {quote.company_name}")
        if quote.ruc:
            cur.text(f"RUC: {quote.ruc}")
        methods = quote.contact_preferences.labels()
        if methods:
            cur.text(f"Método de contacto preferido: {', '.join(methods)}")
        cur.gap()

    @staticmethod
    def _draw_items(cur: _Cursor, quote: Quote) -> None:
        cur.text("PRODUCTOS SOLICITADOS", font="Helvetica-Bold", size=14, color=ACCENT)
        cur.gap(6)

        start = cur.y
        for label, x in COLUMNS:
            cur.text(label, x=x, y=start, font="Helvetica-Bold", size=12)

        y = start + 20
        for item in quote.products:
            if y > PAGE_H - MARGIN - ROW_STEP:
                cur.new_page()
                y = cur.y
            cells = (
                item.product_name or "N/A",
                item.presentation_label or "N/A",
                str(item.quantity),
                item.frequency.label,
            )
            for value, (_, x) in zip(cells, COLUMNS, strict=True):
                for n, line in enumerate(simpleSplit(value, "Helvetica", 10, CELL_W)):
                    cur.text(line, x=x, y=y + n * 11, size=10)
            y += ROW_STEP
        cur.y = y

    @staticmethod
    def _draw_observations(cur: _Cursor, observations: str) -> None:
        cur.gap(20)
        if cur.y > OBSERVATIONS_BREAK_AT:
            cur.new_page()
        cur.text("OBSERVACIONES", font="Helvetica-Bold", size=14, color=ACCENT)
        cur.gap(6)
        for line in observation_lines(observations, font="Helvetica", size=10, width=TEXT_W):
            if cur.y > PAGE_H - MARGIN:
                cur.new_page()
            cur.text(line, size=10, advance=13)
