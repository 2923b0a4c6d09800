"""Optical character recognition for pages without a text layer."""

from typing import Protocol

from PIL import Image


class OCREngine(Protocol):
    """Anything that turns a page image into text."""

    def recognize(self, image: Image.Image) -> str:
        ...


class TesseractOCR:
    """OCR through the Tesseract binary (via pytesseract)."""

    def __init__(self, lang: str = "eng", config: str = "--psm 3"):
        self.lang = lang
        self.config = config

    def recognize(self, image: Image.Image) -> str:
        import pytesseract

        return pytesseract.image_to_string(image.convert("L"), lang=self.lang, config=self.config)
