from services.export.pdf_exporter import (
    ExportedPdf,
    build_pdf,
    content_disposition,
    export_to_pdf,
    pdf_filename,
)
from services.export.rasterizer import PlaywrightRasterizer, SurfaceRasterizer

__all__ = [
    "ExportedPdf",
    "build_pdf",
    "content_disposition",
    "export_to_pdf",
    "pdf_filename",
    "PlaywrightRasterizer",
    "SurfaceRasterizer",
]
