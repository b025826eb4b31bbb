"""Transaction routes."""

from __future__ import annotations

from flask import current_app, flash, redirect, render_template, request, url_for
from werkzeug.exceptions import NotFound

from ...extensions import reference_repository, transaction_repository
from ...infra.api import BackendError, BackendResponseError, RecordNotFound
from ...models.reference import ReferenceEntity
from ...models.transaction import DR_OR_CR_CHOICES, GST_CHOICES
from ...services.reports import running_balance
from . import bp
from .forms import REFERENCE_FIELDS, TransactionForm


def _load_options() -> dict[str, list[ReferenceEntity]]:
    """Fetch the select options for the five reference fields."""

    try:
        return {name: reference_repository(name).list_all() for name in REFERENCE_FIELDS}
    except BackendError:
        current_app.logger.warning("Failed to load transaction form options", exc_info=True)
        flash("Failed to load form options.", "danger")
        return {name: [] for name in REFERENCE_FIELDS}


def _render_form(
    form: TransactionForm,
    options: dict[str, list[ReferenceEntity]],
    *,
    transaction_id: int | None = None,
    status: int = 200,
):
    if transaction_id is None:
        action = url_for("transactions.create_transaction")
    else:
        action = url_for("transactions.update_transaction", transaction_id=transaction_id)
    return (
        render_template(
            "transactions/form.html",
            form=form,
            values=form.raw_data,
            options=options,
            reference_fields=REFERENCE_FIELDS,
            dr_or_cr_choices=DR_OR_CR_CHOICES,
            gst_choices=GST_CHOICES,
            form_action=action,
            list_url=url_for("transactions.list_transactions"),
            is_edit=transaction_id is not None,
            transaction_id=transaction_id,
        ),
        status,
    )


def _flash_backend_error(action: str, exc: BackendError) -> int:
    """Flash a save failure and return the status code to re-render with."""

    if isinstance(exc, BackendResponseError) and exc.status_code == 400:
        flash(exc.user_message(), "danger")
        return 400
    flash(f"Failed to {action} transaction: {exc.user_message()}", "danger")
    return 502


@bp.get("/")
def list_transactions():
    """Display transactions with a running Dr/Cr balance."""

    error: str | None = None
    try:
        transactions = transaction_repository().list_all()
    except BackendError:
        current_app.logger.warning("Failed to load transactions", exc_info=True)
        error = "Failed to load transactions"
        transactions = []

    rows = running_balance(transactions)
    total = rows[-1][1] if rows else 0
    return render_template(
        "transactions/index.html",
        rows=rows,
        total_amount=total,
        error=error,
    )


@bp.get("/new")
def new_transaction():
    """Render the form for a new transaction."""

    return _render_form(TransactionForm.blank(), _load_options())


@bp.post("/new")
def create_transaction():
    """Validate the submission and create the transaction."""

    form = TransactionForm.from_mapping(request.form)
    if not form.validate():
        return _render_form(form, _load_options(), status=400)

    try:
        transaction_repository().create(form.to_payload())
    except BackendError as exc:
        current_app.logger.warning("Failed to create transaction", exc_info=True)
        status = _flash_backend_error("create", exc)
        return _render_form(form, _load_options(), status=status)

    flash("Transaction created successfully.", "success")
    return redirect(url_for("transactions.list_transactions"))


@bp.get("/<int:transaction_id>/edit")
def edit_transaction(transaction_id: int):
    """Render the edit form for an existing transaction."""

    try:
        record = transaction_repository().get_record(transaction_id)
    except RecordNotFound as exc:
        raise NotFound(f"Transaction {transaction_id} was not found") from exc
    except BackendError:
        current_app.logger.warning("Failed to load transaction %s", transaction_id, exc_info=True)
        flash("Failed to load transaction.", "danger")
        return redirect(url_for("transactions.list_transactions"))

    options = _load_options()
    form = TransactionForm.from_record(record, options)
    for notice in form.notices:
        flash(notice, "warning")
    return _render_form(form, options, transaction_id=transaction_id)


@bp.post("/<int:transaction_id>/edit")
def update_transaction(transaction_id: int):
    """Validate the submission and replace the transaction."""

    form = TransactionForm.from_mapping(request.form)
    if not form.validate():
        return _render_form(form, _load_options(), transaction_id=transaction_id, status=400)

    try:
        transaction_repository().update(transaction_id, form.to_payload())
    except RecordNotFound as exc:
        raise NotFound(f"Transaction {transaction_id} was not found") from exc
    except BackendError as exc:
        current_app.logger.warning("Failed to update transaction %s", transaction_id, exc_info=True)
        status = _flash_backend_error("update", exc)
        return _render_form(form, _load_options(), transaction_id=transaction_id, status=status)

    flash("Transaction updated successfully.", "success")
    return redirect(url_for("transactions.list_transactions"))


@bp.post("/<int:transaction_id>/delete")
def delete_transaction(transaction_id: int):
    """Delete a transaction and return to the list."""

    try:
        transaction_repository().delete(transaction_id)
    except RecordNotFound:
        flash("Transaction could not be found.", "warning")
    except BackendError as exc:
        current_app.logger.warning("Failed to delete transaction %s", transaction_id, exc_info=True)
        flash(f"Failed to delete transaction: {exc.user_message()}", "danger")
    else:
        flash("Transaction deleted.", "success")
    return redirect(url_for("transactions.list_transactions"))
