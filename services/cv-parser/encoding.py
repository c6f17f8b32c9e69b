"""PDF to data URL encoding for inline file attachments."""

import base64

PDF_MEDIA_TYPE = "application/pdf"


def pdf_to_data_url(data: bytes) -> str:
    """Encode raw document bytes as a base64 ``data:`` URL.

    Total over all byte sequences. Empty input yields an empty payload,
    which callers must treat as an unusable document.
    """
    payload = base64.b64encode(data).decode()
    return f"data:{PDF_MEDIA_TYPE};base64,{payload}"


def data_url_payload(data_url: str) -> str:
    """Return the base64 payload that follows the comma in a data URL."""
    _, _, payload = data_url.partition(",")
    return payload


def is_document_usable(data_url: str) -> bool:
    return bool(data_url_payload(data_url))
