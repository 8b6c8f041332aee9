from __future__ import annotations

from oregonchem_api.adapters.gateways.smtp_mail_transport import (
    PLAIN_TEXT_FALLBACK,
    build_message,
)
from oregonchem_api.domain.interfaces.gateways.mail_transport import (
    MailAttachment,
    OutboundMail,
)


def _mail(**overrides: object) -> OutboundMail:
    fields: dict[str, object] = {
        "sender": "no-reply@qi.pe",
        "sender_name": "Química Industrial Perú",
        "to": "ana@example.pe",
        "subject": "Confirmación de Cotización",
        "html": "<p>Hola</p>",
    }
    fields.update(overrides)
    return OutboundMail(**fields)  # type: ignore[arg-type]


def test_headers_and_alternatives() -> None:
    msg = build_message(_mail(reply_to="ventas@qi.pe"))

    assert msg["To"] == "ana@example.pe"
    assert msg["Reply-To"] == "ventas@qi.pe"
    assert "no-reply@qi.pe" in msg["From"]
    assert msg["Message-ID"].endswith("@qi.pe>")
    assert msg.get_body(("plain",)).get_content().strip() == PLAIN_TEXT_FALLBACK
    assert "<p>Hola</p>" in msg.get_body(("html",)).get_content()


def test_no_reply_to_header_by_default() -> None:
    assert build_message(_mail())["Reply-To"] is None


def test_pdf_attached_and_logo_inline() -> None:
    logo = MailAttachment(
        filename="logo.png",
        content=b"\x89PNG\r\n\x1a\n",
        mime_type="image/png",
        content_id="logo-abc@oregonchem",
    )
    pdf = MailAttachment(filename="cotizacion-1.pdf", content=b"%PDF-1.4", mime_type="application/pdf")

    msg = build_message(_mail(attachments=(logo, pdf)))

    attachments = list(msg.iter_attachments())
    assert [a.get_filename() for a in attachments] == ["cotizacion-1.pdf"]
    assert attachments[0].get_content() == b"%PDF-1.4"

    inline = [p for p in msg.walk() if p.get("Content-ID") == "<logo-abc@oregonchem>"]
    assert len(inline) == 1
    assert inline[0].get_content_disposition() == "inline"
    assert inline[0].get_content_type() == "image/png"
