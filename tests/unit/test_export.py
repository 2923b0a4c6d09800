"""Unit tests for PDF export."""

import io

import pdfplumber
import pytest

from exceptions import PreviewRequiredError
from services.export.pdf_exporter import (
    A4_WIDTH_MM,
    build_pdf,
    content_disposition,
    export_to_pdf,
    pdf_filename,
)


@pytest.mark.unit
@pytest.mark.parametrize("html", [None, "", "   \n"])
async def test_export_without_preview_refuses_and_does_not_rasterize(fake_rasterizer, html):
    with pytest.raises(PreviewRequiredError) as exc:
        await export_to_pdf(html, "Asha Rao", fake_rasterizer)

    assert exc.value.message == "Please preview your resume before downloading."
    assert fake_rasterizer.calls == []


@pytest.mark.unit
async def test_export_produces_single_a4_wide_page(fake_rasterizer):
    exported = await export_to_pdf("<h1>Asha</h1>", "Asha Rao", fake_rasterizer, scale=2)

    assert exported.content.startswith(b"%PDF")
    assert exported.filename == "Asha_Rao.pdf"
    assert exported.page_width_mm == A4_WIDTH_MM
    # 200x400 px bitmap -> height is twice the width
    assert exported.page_height_mm == pytest.approx(2 * A4_WIDTH_MM)
    assert fake_rasterizer.calls == [("<h1>Asha</h1>", 2)]

    with pdfplumber.open(io.BytesIO(exported.content)) as pdf:
        assert len(pdf.pages) == 1
        assert pdf.pages[0].height == pytest.approx(2 * pdf.pages[0].width)


@pytest.mark.unit
async def test_export_enforces_minimum_supersampling(fake_rasterizer):
    await export_to_pdf("<p>x</p>", "", fake_rasterizer, scale=1)

    assert fake_rasterizer.calls[0][1] == 2


@pytest.mark.unit
async def test_watermark_only_when_requested(fake_rasterizer):
    png = await fake_rasterizer.rasterize("<p>x</p>", 2)
    plain, _, _ = build_pdf(png, watermark=False)
    marked, _, _ = build_pdf(png, watermark=True)

    with pdfplumber.open(io.BytesIO(marked)) as pdf:
        assert pdf.pages[0].chars
    with pdfplumber.open(io.BytesIO(plain)) as pdf:
        assert pdf.pages[0].chars == []


@pytest.mark.unit
@pytest.mark.parametrize("name, expected", [
    ("Asha Rao", "Asha_Rao.pdf"),
    ("  ", "resume.pdf"),
    (None, "resume.pdf"),
    ("../../etc/passwd", "etc_passwd.pdf"),
    ("José <Dev>", "José__Dev.pdf"),
])
def test_pdf_filename(name, expected):
    assert pdf_filename(name) == expected


@pytest.mark.unit
@pytest.mark.parametrize("filename, expected", [
    ("Asha_Rao.pdf", 'attachment; filename="Asha_Rao.pdf"'),
    ("张伟.pdf", "attachment; filename=\"resume.pdf\"; filename*=UTF-8''%E5%BC%A0%E4%BC%9F.pdf"),
    ("José__Dev.pdf", "attachment; filename=\"Jose__Dev.pdf\"; filename*=UTF-8''Jos%C3%A9__Dev.pdf"),
])
def test_content_disposition_is_latin1_safe(filename, expected):
    header = content_disposition(filename)

    assert header == expected
    header.encode("latin-1")
