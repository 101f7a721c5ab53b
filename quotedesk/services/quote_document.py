from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import jinja2

from quotedesk.models.customer import Customer
from quotedesk.models.quote import Quote
from quotedesk.models.quote_approval import QuoteApproval
from quotedesk.services.approval_message import format_quote_number
from quotedesk.services.totals import document_totals, normalize_items
from quotedesk.web.jinja_filters import FILTERS

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


def split_item_description(description: str) -> tuple[str, str]:
    """Catalog lines are stored as "SKU - name"; ad-hoc lines have no SKU."""
    parts = description.split(" - ")
    if len(parts) >= 2:
        sku = parts[0].strip()
        name = " - ".join(parts[1:]).strip()
        return sku or "-", name or "-"
    return "-", description or "-"


class QuoteDocumentRenderer:
    """Renders a stored quote to HTML (review page, printable document) and PDF."""

    def __init__(self, templates_dir: Path = TEMPLATES_DIR, company_name: str = ""):
        self.templates_dir = Path(templates_dir)
        self.company_name = company_name
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(self.templates_dir)),
            autoescape=True,
        )
        self.jinja_env.filters.update(FILTERS)

    def prepare_context(
        self,
        quote: Quote,
        *,
        customer: Optional[Customer] = None,
        approval: Optional[QuoteApproval] = None,
        is_admin: bool = False,
    ) -> Dict[str, Any]:
        items = normalize_items(quote.items)
        totals = document_totals(items, quote.total)

        lines = []
        for no, item in enumerate(items, start=1):
            sku, name = split_item_description(item.description)
            lines.append(
                {
                    "no": no,
                    "sku": sku,
                    "description": name,
                    "qty": item.qty,
                    "price": item.price,
                    "amount": item.amount,
                }
            )

        return {
            "company_name": self.company_name,
            "quote": quote,
            "quote_number": format_quote_number(quote.id),
            "customer": customer,
            "lines": lines,
            "totals": totals,
            "approval": approval,
            "approval_status": approval.status if approval else "none",
            "is_admin": is_admin,
        }

    def render_html(self, template_name: str, context: Dict[str, Any]) -> str:
        template = self.jinja_env.get_template(template_name)
        return template.render(**context)

    def render_pdf(self, html_content: str) -> bytes:
        """
        Convert document HTML to PDF bytes.

        WeasyPrint needs Pango at import time, so it is loaded on first use.
        """
        try:
            from weasyprint import CSS, HTML
            from weasyprint.text.fonts import FontConfiguration
        except (ImportError, OSError) as e:
            raise RuntimeError(f"PDF generation unavailable: {e}") from e

        font_config = FontConfiguration()
        css = CSS(
            string="""
                @page { size: A4; margin: 1.5cm; }
                .no-print { display: none; }
                table.lines { page-break-inside: auto; }
                table.lines tr { page-break-inside: avoid; }
            """,
            font_config=font_config,
        )
        return HTML(string=html_content, base_url=str(self.templates_dir)).write_pdf(
            stylesheets=[css], font_config=font_config
        )
