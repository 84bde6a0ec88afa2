import io

import pdfplumber


class TextLayerError(Exception):
    """Raised when the embedded text layer of a PDF cannot be read."""


class PdfTextLayerReader:
    """Reads the embedded text layer of a PDF using pdfplumber."""

    def read(self, pdf_bytes: bytes) -> str:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
            return "\n".join(pages).strip()
        except Exception as exc:
            raise TextLayerError(f"pdfplumber extraction failed: {exc}") from exc
