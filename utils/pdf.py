"""
HTML-to-PDF export.
Renders a Jinja template and converts it with xhtml2pdf into a download.
Page size (letter, portrait) and 1in margins come from the @page rule in
templates/pdf/base_pdf.html.
"""

import io

from flask import Response, render_template
from xhtml2pdf import pisa


class PdfRenderError(Exception):
    """Raised when the HTML could not be converted to PDF."""


def html_to_pdf(html: str) -> bytes:
    """
    Convert an HTML document to PDF bytes.

    Args:
        html: Complete HTML document

    Returns:
        PDF file content

    Raises:
        PdfRenderError: If xhtml2pdf reports errors
    """
    output = io.BytesIO()
    result = pisa.CreatePDF(src=html, dest=output, encoding='utf-8')
    if result.err:
        raise PdfRenderError(f'xhtml2pdf reported {result.err} error(s)')
    return output.getvalue()


def render_pdf(template_name: str, filename: str, **context) -> Response:
    """
    Render a template to PDF and return it as an attachment.

    Args:
        template_name: Jinja template path
        filename: Download filename
        **context: Template context

    Returns:
        Response: PDF download response
    """
    html = render_template(template_name, **context)
    pdf_bytes = html_to_pdf(html)
    return Response(
        pdf_bytes,
        mimetype='application/pdf',
        headers={
            'Content-Disposition': f'attachment; filename={filename}'
        }
    )
