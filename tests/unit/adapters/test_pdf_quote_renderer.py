from __future__ import annotations

import io
from datetime import UTC, datetime

import pytest
from fakes import build_quote
from pypdf import PdfReader

from oregonchem_api.adapters.gateways.pdf_quote_renderer import (
    PdfQuoteRenderer,
    format_lima,
    observation_lines,
)
from oregonchem_api.application.services.company import CompanyIdentity
from oregonchem_api.domain.entities.quote import QuoteLineItem
from oregonchem_api.domain.enums.quotes import PurchaseFrequency
from oregonchem_api.domain.exceptions.quotes import DocumentRenderError
from oregonchem_api.domain.interfaces.gateways.logo_provider import LogoAsset


class _StaticLogo:
    def __init__(self, asset: LogoAsset | None) -> None:
        self.asset = asset

    async def resolve(self) -> LogoAsset | None:
        return self.asset


def _text(pdf: bytes) -> str:
    reader = PdfReader(io.BytesIO(pdf))
    return "\n".join(page.extract_text() for page in reader.pages)


def test_format_lima_shifts_to_utc_minus_five() -> None:
    assert format_lima(datetime(2025, 3, 14, 3, 5, 9, tzinfo=UTC)) == ("13/03/2025", "22:05:09")


def test_observation_lines_keep_breaks_and_wrap() -> None:
    long_line = "palabra " * 40
    lines = observation_lines(
        f"Primera\n\n{long_line}", font="Helvetica", size=10, width=200
    )

    assert lines[0] == "Primera"
    assert lines[1] == ""
    assert len(lines) > 3


@pytest.mark.asyncio
async def test_render_includes_each_observation_line() -> None:
    quote = build_quote(observations="Entrega en Callao.\nHorario de tarde.")

    pdf = await PdfQuoteRenderer(CompanyIdentity()).render(quote)

    assert pdf.startswith(b"%PDF")
    text = _text(pdf)
    assert "OBSERVACIONES" in text
    assert "Entrega en Callao." in text
    assert "Horario de tarde." in text
    assert str(quote.id) in text


@pytest.mark.asyncio
async def test_render_omits_observations_section_when_blank() -> None:
    pdf = await PdfQuoteRenderer(CompanyIdentity()).render(build_quote(observations="   "))
    assert "OBSERVACIONES" not in _text(pdf)


@pytest.mark.asyncio
async def test_unreadable_logo_is_skipped() -> None:
    logo = LogoAsset(content=b"\x89PNG\r\n\x1a\nbroken", mime_type="image/png", origin="local")

    pdf = await PdfQuoteRenderer(CompanyIdentity(), _StaticLogo(logo)).render(build_quote())

    assert pdf.startswith(b"%PDF")


@pytest.mark.asyncio
async def test_drawing_failure_raises_render_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def _boom(*_args: object) -> None:
        raise RuntimeError("canvas exploded")

    monkeypatch.setattr(PdfQuoteRenderer, "_draw_items", staticmethod(_boom))

    with pytest.raises(DocumentRenderError) as excinfo:
        await PdfQuoteRenderer(CompanyIdentity()).render(build_quote())

    assert "canvas exploded" in excinfo.value.details["error"]


def _items(count: int) -> tuple[QuoteLineItem, ...]:
    return tuple(
        QuoteLineItem(
            product_id=f"prod-{n}",
            product_name=f"Reactivo {n:02d}",
            quantity=n,
            frequency=PurchaseFrequency.MONTHLY,
        )
        for n in range(1, count + 1)
    )


def _pages(pdf: bytes) -> list[str]:
    return [page.extract_text() for page in PdfReader(io.BytesIO(pdf)).pages]


@pytest.mark.asyncio
async def test_long_item_table_continues_on_next_page() -> None:
    quote = build_quote(products=_items(25), observations="Entrega parcial.")

    pages = _pages(await PdfQuoteRenderer(CompanyIdentity()).render(quote))

    assert len(pages) >= 2
    assert "Reactivo 01" in pages[0]
    assert "Reactivo 25" not in pages[0]
    assert "Reactivo 25" in pages[-1]
    assert "OBSERVACIONES" in pages[-1]
    assert "Entrega parcial." in pages[-1]


@pytest.mark.asyncio
async def test_observations_moved_to_new_page_near_bottom() -> None:
    # Eight rows still fit on the first page but leave the cursor past the
    # observations threshold.
    quote = build_quote(products=_items(8), observations="Horario de mañana.")

    pages = _pages(await PdfQuoteRenderer(CompanyIdentity()).render(quote))

    assert len(pages) == 2
    assert "Reactivo 08" in pages[0]
    assert "OBSERVACIONES" not in pages[0]
    assert "OBSERVACIONES" in pages[1]
    assert "Reactivo" not in pages[1]
