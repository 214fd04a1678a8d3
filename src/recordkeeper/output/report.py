"""HTML report rendering (word-processor compatible).

This module is renderer-only. Selection and ordering of records happen in
api/query_api.py; api/export.py decides filenames and encoding.
"""

from datetime import datetime
from html import escape
from typing import List, Sequence

from ..records.formatting import display_date
from ..records.record_models import Record
from ..utils.time import format_locale_date

DEFAULT_REPORT_TITLE = "Records Management Report"
DEFAULT_REPORT_SUBTITLE = "Records Management System"
DEFAULT_REPORT_FOOTER = "This document was generated automatically by the records management system."

REPORT_COLUMNS = ["Name", "TaxId", "RegistrationCode", "Date", "Status", "ContactInfo"]

REPORT_STYLE = """\
    body { font-family: 'Arial', sans-serif; }
    .header { text-align: center; margin-bottom: 20px; }
    .title { font-size: 24pt; font-weight: bold; color: #1e40af; margin-bottom: 5px; }
    .subtitle { font-size: 12pt; color: #64748b; }
    table { width: 100%; border-collapse: collapse; margin-top: 20px; }
    th { background-color: #2563eb; color: #ffffff; padding: 12px; text-align: left; font-size: 10pt; text-transform: uppercase; }
    td { border: 1px solid #e2e8f0; padding: 10px; font-size: 9pt; vertical-align: middle; }
    .footer { margin-top: 30px; font-size: 8pt; color: #94a3b8; text-align: right; }"""


def _cell(value: str, style: str | None = None) -> str:
    style_attr = f' style="{style}"' if style else ""
    return f"<td{style_attr}>{escape(value)}</td>"


def _render_row(record: Record) -> List[str]:
    return [
        "      <tr>",
        "        " + _cell(record.full_name, "font-weight: bold;"),
        "        " + _cell(record.tax_id),
        "        " + _cell(record.registration_code, "color: #2563eb;"),
        "        " + _cell(display_date(record.registration_date)),
        "        " + _cell(record.status),
        "        " + _cell(record.contact_info),
        "      </tr>",
    ]


def render_report_html(
    records: Sequence[Record],
    generated_at: datetime,
    title: str = DEFAULT_REPORT_TITLE,
    subtitle: str = DEFAULT_REPORT_SUBTITLE,
    footer: str = DEFAULT_REPORT_FOOTER,
) -> str:
    """
    Render records as a styled HTML document with Office namespaces.
    
    Args:
        records: Records in display order (already filtered and sorted)
        generated_at: Timestamp shown in the title block
        title: Report title
        subtitle: System name appended to the generation line
        footer: Footer note
        
    Returns:
        HTML document text. All record fields are HTML-escaped.
    """
    lines = [
        "<html xmlns:o='urn:schemas-microsoft-com:office:office' "
        "xmlns:w='urn:schemas-microsoft-com:office:word' "
        "xmlns='http://www.w3.org/TR/REC-html40'>",
        "<head>",
        "  <meta charset='utf-8'>",
        f"  <title>{escape(title)}</title>",
        "  <style>",
        REPORT_STYLE,
        "  </style>",
        "</head>",
        "<body>",
        '  <div class="header">',
        f'    <div class="title">{escape(title)}</div>',
        f'    <div class="subtitle">Generated on {format_locale_date(generated_at)} - {escape(subtitle)}</div>',
        "  </div>",
        "  <table>",
        "    <thead>",
        "      <tr>",
    ]
    lines.extend(f"        <th>{column}</th>" for column in REPORT_COLUMNS)
    lines.extend([
        "      </tr>",
        "    </thead>",
        "    <tbody>",
    ])
    for record in records:
        lines.extend(_render_row(record))
    lines.extend([
        "    </tbody>",
        "  </table>",
        f'  <div class="footer">{escape(footer)}</div>',
        "</body>",
        "</html>",
    ])
    return "\n".join(lines) + "\n"
