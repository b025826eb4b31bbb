"""Reference entity routes."""

from __future__ import annotations

from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for
from werkzeug.exceptions import NotFound

from ...extensions import reference_repository
from ...infra.api import BackendError, BackendResponseError, RecordNotFound
from ...models.reference import EntityKind
from .forms import NameForm


def _failure_status(exc: BackendError) -> int:
    if isinstance(exc, BackendResponseError) and exc.status_code == 400:
        return 400
    return 502


def register_routes(bp: Blueprint, kind: EntityKind) -> None:
    """Attach the CRUD views for ``kind`` to ``bp``."""

    def render_form(form: NameForm, *, entity_id: int | None = None, status: int = 200):
        if entity_id is None:
            action = url_for(f"{kind.key}.create_entity")
        else:
            action = url_for(f"{kind.key}.update_entity", entity_id=entity_id)
        return (
            render_template(
                "reference/form.html",
                kind=kind,
                form=form,
                form_action=action,
                list_url=url_for(f"{kind.key}.list_entities"),
                is_edit=entity_id is not None,
                entity_id=entity_id,
            ),
            status,
        )

    @bp.get("/")
    def list_entities():
        """Display every record of this kind."""

        error: str | None = None
        try:
            entities = reference_repository(kind.key).list_all()
        except BackendError as exc:
            current_app.logger.warning("Failed to load %s", kind.collection, exc_info=True)
            error = f"Failed to load {kind.plural_label.lower()}: {exc.user_message()}"
            entities = []

        return render_template(
            "reference/index.html",
            kind=kind,
            entities=entities,
            error=error,
        )

    @bp.get("/new")
    def new_entity():
        """Render a blank form."""

        return render_form(NameForm())

    @bp.post("/new")
    def create_entity():
        """Validate the submitted name and create the record."""

        form = NameForm.from_mapping(request.form)
        if not form.validate():
            return render_form(form, status=400)

        try:
            reference_repository(kind.key).create(form.name)
        except BackendError as exc:
            current_app.logger.warning("Failed to create %s", kind.key, exc_info=True)
            flash(f"Failed to create {kind.label.lower()}: {exc.user_message()}", "danger")
            return render_form(form, status=_failure_status(exc))

        flash(f"{kind.label} \"{form.name}\" created.", "success")
        return redirect(url_for(f"{kind.key}.list_entities"))

    @bp.get("/<int:entity_id>/edit")
    def edit_entity(entity_id: int):
        """Render the edit form populated from the backend."""

        try:
            entity = reference_repository(kind.key).get_by_id(entity_id)
        except RecordNotFound as exc:
            raise NotFound(f"{kind.label} {entity_id} was not found") from exc
        except BackendError as exc:
            current_app.logger.warning("Failed to load %s %s", kind.key, entity_id, exc_info=True)
            flash(f"Failed to load {kind.label.lower()}: {exc.user_message()}", "danger")
            return redirect(url_for(f"{kind.key}.list_entities"))

        return render_form(NameForm(name=entity.name), entity_id=entity_id)

    @bp.post("/<int:entity_id>/edit")
    def update_entity(entity_id: int):
        """Validate the submitted name and rename the record."""

        form = NameForm.from_mapping(request.form)
        if not form.validate():
            return render_form(form, entity_id=entity_id, status=400)

        try:
            reference_repository(kind.key).update(entity_id, form.name)
        except RecordNotFound as exc:
            raise NotFound(f"{kind.label} {entity_id} was not found") from exc
        except BackendError as exc:
            current_app.logger.warning("Failed to update %s %s", kind.key, entity_id, exc_info=True)
            flash(f"Failed to update {kind.label.lower()}: {exc.user_message()}", "danger")
            return render_form(form, entity_id=entity_id, status=_failure_status(exc))

        flash(f"{kind.label} updated successfully.", "success")
        return redirect(url_for(f"{kind.key}.list_entities"))

    @bp.post("/<int:entity_id>/delete")
    def delete_entity(entity_id: int):
        """Delete the record and return to the list."""

        try:
            reference_repository(kind.key).delete(entity_id)
        except RecordNotFound:
            flash(f"{kind.label} could not be found.", "warning")
        except BackendError as exc:
            current_app.logger.warning("Failed to delete %s %s", kind.key, entity_id, exc_info=True)
            flash(f"Failed to delete {kind.label.lower()}: {exc.user_message()}", "danger")
        else:
            flash(f"{kind.label} deleted.", "success")
        return redirect(url_for(f"{kind.key}.list_entities"))
