"""Readers that turn uploaded resume files into plain text."""

import asyncio
import io
import logging
import zipfile
import xml.etree.ElementTree as ET
from enum import Enum
from pathlib import Path
from typing import Optional

from exceptions import UnextractableDocumentError, UnsupportedFileTypeError
from services.extraction.ocr import OCREngine, TesseractOCR
from services.extraction.pages import DEFAULT_OCR_RESOLUTION, extract_pdf_text


logger = logging.getLogger(__name__)


class FileType(Enum):
    """Supported upload types."""
    PDF = "pdf"
    DOCX = "docx"
    TXT = "txt"


ALLOWED_EXTENSIONS = {".pdf", ".docx", ".txt"}


def detect_file_type(filename: str) -> Optional[FileType]:
    """Detect file type from extension.

    Args:
        filename: Name of the uploaded file

    Returns:
        FileType enum or None if unsupported
    """
    ext = Path(filename or "").suffix.lower()

    if ext == ".pdf":
        return FileType.PDF
    elif ext == ".docx":
        return FileType.DOCX
    elif ext == ".txt":
        return FileType.TXT

    return None


def extract_text_from_docx(content: bytes) -> str:
    """Extract text from a DOCX file.

    Parses the DOCX (which is a ZIP) and extracts text from word/document.xml,
    one line per paragraph.

    Returns:
        Extracted text or empty string if the archive is not a DOCX
    """
    buffer = io.BytesIO(content)
    if not zipfile.is_zipfile(buffer):
        logger.warning("Upload is not a valid DOCX (zip) file")
        return ""

    with zipfile.ZipFile(buffer) as z:
        if "word/document.xml" not in z.namelist():
            logger.warning("DOCX missing word/document.xml")
            return ""
        xml_content = z.read("word/document.xml")

    try:
        tree = ET.fromstring(xml_content)
    except ET.ParseError as e:
        logger.error(f"Failed to parse DOCX XML: {e}")
        return ""

    # WordprocessingML namespace
    ns = {"w": "http://schemas.openxmlformats.org/wordprocessingml/2006/main"}
    paragraphs = []
    for paragraph in tree.iter(f"{{{ns['w']}}}p"):
        runs = [t.text for t in paragraph.findall(".//w:t", ns) if t.text]
        if runs:
            paragraphs.append("".join(runs))
    return "\n".join(paragraphs)


def extract_text_from_txt(content: bytes) -> str:
    """Decode a plain text upload, falling back to latin-1."""
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError:
        return content.decode("latin-1")


def extract_text_from_unknown(filename: str, content: bytes) -> str:
    """Read a file of unrecognized type as raw UTF-8 text.

    Binary content (undecodable or containing NUL bytes) is rejected.
    """
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError:
        text = None
    if text is None or "\x00" in text:
        raise UnsupportedFileTypeError(
            f"Invalid file type. Allowed: {', '.join(sorted(ALLOWED_EXTENSIONS))} or plain text",
            details={"filename": filename},
        )
    return text


async def extract_text(
    filename: str,
    content: bytes,
    ocr: Optional[OCREngine] = None,
    resolution: int = DEFAULT_OCR_RESOLUTION,
) -> str:
    """Extract the text of an uploaded document.

    PDF pages are read from their text layer, with OCR for pages that have
    none. PDF decoding and OCR run in a worker thread. Files of any other
    unrecognized type are read as raw text.

    Args:
        filename: Original file name (used to detect the type).
        content: Raw file bytes.
        ocr: OCR engine for image-only pages (Tesseract by default).
        resolution: Raster resolution for OCR, in dpi.

    Returns:
        The document text, never blank.

    Raises:
        UnsupportedFileTypeError: If a file of unknown type is not UTF-8 text.
        UnextractableDocumentError: If no text could be recovered.
    """
    file_type = detect_file_type(filename)
    if file_type is None:
        text = extract_text_from_unknown(filename, content)
    elif file_type == FileType.PDF:
        engine = ocr if ocr is not None else TesseractOCR()
        text = await asyncio.to_thread(extract_pdf_text, content, engine, resolution, filename)
    elif file_type == FileType.DOCX:
        text = extract_text_from_docx(content)
    else:
        text = extract_text_from_txt(content)

    if not text.strip():
        logger.warning(f"No text recovered from {filename}")
        raise UnextractableDocumentError(filename)

    return text
