import logging
import re
import unicodedata
from dataclasses import dataclass
from io import BytesIO
from urllib.parse import quote

from exceptions import InputValidationError, PreviewRequiredError
from services.export.rasterizer import SurfaceRasterizer


logger = logging.getLogger(__name__)

A4_WIDTH_MM = 210.0
DEFAULT_FILENAME = "resume"
WATERMARK_TEXT = "Created with Resumize (Free Plan)"

_UNSAFE_FILENAME_CHARS = re.compile(r"[^\w\-. ]+")


@dataclass(frozen=True)
class ExportedPdf:
    filename: str
    content: bytes
    page_width_mm: float
    page_height_mm: float


def pdf_filename(display_name: str) -> str:
    """File name derived from the user's display name, or ``resume.pdf``."""
    name = _UNSAFE_FILENAME_CHARS.sub("_", (display_name or "").strip())
    name = re.sub(r"\s+", "_", name).strip("._")
    return f"{name or DEFAULT_FILENAME}.pdf"


def content_disposition(filename: str) -> str:
    """``attachment`` header value safe for latin-1 header encoding.

    Names outside ASCII get an ASCII ``filename`` fallback plus the RFC 5987
    ``filename*`` form carrying the UTF-8 name.
    """
    if filename.isascii():
        return f'attachment; filename="{filename}"'
    ascii_name = unicodedata.normalize("NFKD", filename).encode("ascii", "ignore").decode("ascii")
    fallback = pdf_filename(ascii_name.removesuffix(".pdf"))
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"


def build_pdf(png: bytes, watermark: bool = False) -> tuple[bytes, float, float]:
    """Embed a bitmap as one full-bleed image on an A4-wide page.

    The page height follows the bitmap's aspect ratio; tall content is not
    split across pages.

    Returns:
        Tuple of (pdf_bytes, page_width_mm, page_height_mm).
    """
    try:
        from reportlab.lib.units import mm
        from reportlab.lib.utils import ImageReader
        from reportlab.pdfgen import canvas
    except ImportError:
        raise ImportError(
            "reportlab is required for PDF export. "
            "Install it with: pip install reportlab"
        )

    image = ImageReader(BytesIO(png))
    px_width, px_height = image.getSize()
    if not px_width or not px_height:
        raise InputValidationError("preview", "The preview is empty. Please preview your resume again.")

    page_width = A4_WIDTH_MM * mm
    page_height = page_width * px_height / px_width

    buffer = BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=(page_width, page_height))
    pdf.setTitle("Resume")
    pdf.drawImage(image, 0, 0, width=page_width, height=page_height)
    if watermark:
        _draw_watermark(pdf, page_width, page_height)
    pdf.showPage()
    pdf.save()

    pdf_bytes = buffer.getvalue()
    buffer.close()

    return pdf_bytes, A4_WIDTH_MM, page_height / mm


def _draw_watermark(pdf, page_width: float, page_height: float) -> None:
    """Diagonal translucent text across the middle of the page."""
    from reportlab.lib import colors

    pdf.saveState()
    pdf.setFillColor(colors.grey, alpha=0.25)
    pdf.setFont("Helvetica-Bold", 28)
    pdf.translate(page_width / 2, page_height / 2)
    pdf.rotate(35)
    pdf.drawCentredString(0, 0, WATERMARK_TEXT)
    pdf.restoreState()


async def export_to_pdf(
    rendered_html: str | None,
    display_name: str,
    rasterizer: SurfaceRasterizer,
    scale: int = 2,
    watermark: bool = False,
) -> ExportedPdf:
    """Export a rendered preview as a downloadable PDF.

    Args:
        rendered_html: The substituted template from the last preview.
        display_name: Name used for the download file.
        rasterizer: Renders the HTML to a PNG bitmap.
        scale: Supersampling factor (at least 2).
        watermark: Stamp the free-plan watermark.

    Raises:
        PreviewRequiredError: If no preview has been rendered yet; nothing
            is rasterized in that case.
    """
    if not rendered_html or not rendered_html.strip():
        raise PreviewRequiredError()

    png = await rasterizer.rasterize(rendered_html, max(2, scale))
    content, width_mm, height_mm = build_pdf(png, watermark=watermark)
    filename = pdf_filename(display_name)
    logger.info(f"Exported {filename} ({width_mm:.0f}x{height_mm:.0f} mm, {len(content)} bytes)")

    return ExportedPdf(
        filename=filename,
        content=content,
        page_width_mm=width_mm,
        page_height_mm=height_mm,
    )
