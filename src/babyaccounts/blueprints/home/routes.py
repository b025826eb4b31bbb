"""Home routes."""

from __future__ import annotations

from flask import render_template, url_for

from ...models.reference import ENTITY_KINDS
from . import bp


def _cards() -> list[dict[str, str]]:
    cards = [
        {
            "title": "Transactions",
            "add_href": url_for("transactions.new_transaction"),
            "view_href": url_for("transactions.list_transactions"),
        }
    ]
    for kind in ENTITY_KINDS:
        cards.append(
            {
                "title": kind.label,
                "add_href": url_for(f"{kind.key}.new_entity"),
                "view_href": url_for(f"{kind.key}.list_entities"),
            }
        )
    cards.append(
        {
            "title": "Reports",
            "add_href": "",
            "view_href": url_for("reports.report"),
        }
    )
    return cards


@bp.get("/")
def landing_page():
    """Render the console landing page with one card per area."""

    return render_template("home/index.html", cards=_cards())
