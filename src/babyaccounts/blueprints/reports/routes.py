"""Transaction report routes."""

from __future__ import annotations

from flask import current_app, jsonify, render_template, request

from ...extensions import transaction_repository
from ...infra.api import BackendError
from ...models.transaction import FILTER_FIELDS
from ...services.reports import ReportSnapshot, build_report, load_report_snapshot
from . import bp


def _prefers_json_response() -> bool:
    accepts = request.accept_mimetypes
    return request.is_json or accepts["application/json"] > accepts["text/html"]


def _selection_from_args() -> dict[str, str]:
    return {name: request.args.get(name, "") for name in FILTER_FIELDS}


@bp.get("/")
def report():
    """Render the filterable transaction report with credit/debit totals."""

    error: str | None = None
    try:
        snapshot = load_report_snapshot(transaction_repository())
    except BackendError:
        current_app.logger.error("Failed to load transactions for report", exc_info=True)
        error = "Failed to load transactions"
        snapshot = ReportSnapshot()

    view = build_report(snapshot, _selection_from_args())
    current_app.logger.debug(
        "Report built",
        extra={"filters": view.selection, "rows": len(view.transactions)},
    )

    if _prefers_json_response():
        payload = view.to_dict()
        payload["error"] = error
        return jsonify(payload), (200 if error is None else 502)

    return render_template(
        "reports/index.html",
        view=view,
        filter_fields=FILTER_FIELDS,
        error=error,
    )
