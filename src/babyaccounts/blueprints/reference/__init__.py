"""Reference entity blueprints (business, ledger, head, mode, type).

The five screens are identical apart from the collection they manage, so one
blueprint is stamped out per :class:`EntityKind`.
"""

from __future__ import annotations

from flask import Blueprint

from ...models.reference import ENTITY_KINDS, EntityKind


def create_blueprint(kind: EntityKind) -> Blueprint:
    """Build the list/add/edit/delete blueprint for one entity kind."""

    from .routes import register_routes

    bp = Blueprint(
        kind.key,
        __name__,
        url_prefix=f"/{kind.key}",
        template_folder="../../templates",
    )
    register_routes(bp, kind)
    return bp


blueprints = [create_blueprint(kind) for kind in ENTITY_KINDS]

__all__ = ["blueprints", "create_blueprint"]
