from __future__ import annotations

import io


class UnsupportedDocumentTypeError(ValueError):
    pass


def extract_text(data: bytes, mime_type: str | None) -> str:
    """
    Extract plain text from an uploaded document.

    Supported:
    - application/pdf (via `pypdf`)
    - text/* (decoded as UTF-8, undecodable bytes dropped)

    Anything else raises UnsupportedDocumentTypeError.
    """
    mime = (mime_type or "").split(";", 1)[0].strip().lower()

    if mime == "application/pdf":
        return _extract_pdf(data)

    if mime.startswith("text/"):
        return _decode_best_effort(data)

    raise UnsupportedDocumentTypeError(
        f"Unsupported file type: {mime_type}. Only PDF and text-based files are supported."
    )


def _decode_best_effort(raw: bytes) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return raw.decode("utf-8", errors="ignore")


def _extract_pdf(data: bytes) -> str:
    from pypdf import PdfReader
    from pypdf.errors import PdfReadError

    try:
        reader = PdfReader(io.BytesIO(data))
        parts: list[str] = []
        for page in reader.pages:
            txt = page.extract_text() or ""
            if txt.strip():
                parts.append(txt)
    except PdfReadError as e:
        raise UnsupportedDocumentTypeError(f"Could not read PDF: {e}") from e
    return "\n\n".join(parts).strip()
