"""Document text extraction.

Components:
    - pages: lazy per-page PDF text with OCR fallback
    - ocr: OCR engine protocol and the Tesseract implementation
    - readers: file type detection and the ``extract_text`` entry point

Usage:
    from services.extraction import extract_text, iter_page_texts

    text = await extract_text("resume.pdf", content)
    for page in iter_page_texts(content, ocr=TesseractOCR()):
        print(page.page_number, page.source)
"""

from .ocr import OCREngine, TesseractOCR
from .pages import PageText, iter_page_texts, extract_pdf_text, text_layer
from .readers import (
    FileType,
    ALLOWED_EXTENSIONS,
    detect_file_type,
    extract_text,
    extract_text_from_docx,
    extract_text_from_txt,
    extract_text_from_unknown,
)

__all__ = [
    "OCREngine",
    "TesseractOCR",
    "PageText",
    "iter_page_texts",
    "extract_pdf_text",
    "text_layer",
    "FileType",
    "ALLOWED_EXTENSIONS",
    "detect_file_type",
    "extract_text",
    "extract_text_from_docx",
    "extract_text_from_txt",
    "extract_text_from_unknown",
]
