from __future__ import annotations

import pytest

from babyaccounts.infra.api import BackendUnavailable
from babyaccounts.models.reference import BUSINESS, ENTITY_KINDS, HEAD, MODE

from .conftest import validation_error


@pytest.mark.parametrize("kind", ENTITY_KINDS, ids=lambda kind: kind.key)
def test_list_page_for_every_kind(client, backend, kind):
    backend.seed(kind.collection, name=f"First {kind.label}")

    response = client.get(f"/{kind.key}/")
    assert response.status_code == 200

    body = response.get_data(as_text=True)
    assert f"{kind.label} List" in body
    assert f"First {kind.label}" in body
    assert f'/{kind.key}/1/edit' in body
    assert f'/{kind.key}/1/delete' in body


@pytest.mark.parametrize("kind", ENTITY_KINDS, ids=lambda kind: kind.key)
def test_empty_list_for_every_kind(client, kind):
    body = client.get(f"/{kind.key}/").get_data(as_text=True)

    assert f"No {kind.plural_label.lower()} found." in body


@pytest.mark.parametrize("kind", ENTITY_KINDS, ids=lambda kind: kind.key)
def test_create_trims_name_and_redirects(client, backend, kind):
    response = client.post(f"/{kind.key}/new", data={"name": "  Acme  "})

    assert response.status_code == 302
    assert response.headers["Location"].endswith(f"/{kind.key}/")
    assert backend.calls[-1] == ("POST", kind.collection, {"name": "Acme"})
    assert [record["name"] for record in backend.records[kind.collection].values()] == ["Acme"]


def test_create_flashes_success_after_redirect(client):
    response = client.post("/business/new", data={"name": "Bakery"}, follow_redirects=True)

    body = response.get_data(as_text=True)
    assert response.status_code == 200
    assert "Business &#34;Bakery&#34; created." in body
    assert "Bakery" in body


def test_new_form_renders_blank(client):
    response = client.get("/ledger/new")

    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert "Add New Ledger" in body
    assert 'action="/ledger/new"' in body


@pytest.mark.parametrize("name", ["", "   "])
def test_create_requires_a_name(client, backend, name):
    response = client.post("/mode/new", data={"name": name})

    assert response.status_code == 400
    assert "Name is required." in response.get_data(as_text=True)
    assert not any(call[0] == "POST" for call in backend.calls)


def test_create_rejects_overlong_name(client, backend):
    response = client.post("/mode/new", data={"name": "x" * 101})

    assert response.status_code == 400
    assert "Name must be 100 characters or fewer." in response.get_data(as_text=True)
    assert backend.records.get(MODE.collection, {}) == {}


def test_create_surfaces_backend_validation_message(client, backend):
    backend.fail(
        "POST",
        BUSINESS.collection,
        validation_error(name=["business with this name already exists."]),
    )

    response = client.post("/business/new", data={"name": "Bakery"})

    assert response.status_code == 400
    body = response.get_data(as_text=True)
    assert "name: business with this name already exists." in body
    assert 'value="Bakery"' in body


def test_create_with_backend_down_keeps_input(client, backend):
    backend.fail("POST", HEAD.collection, BackendUnavailable("refused"))

    response = client.post("/head/new", data={"name": "Sugar"})

    assert response.status_code == 502
    body = response.get_data(as_text=True)
    assert "Failed to create head" in body
    assert 'value="Sugar"' in body


def test_edit_form_is_prefilled(client, seeded_backend):
    response = client.get("/head/2/edit")

    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert "Edit Head #2" in body
    assert 'value="Cakes"' in body
    assert 'action="/head/2/edit"' in body


def test_edit_missing_record_is_404(client, seeded_backend):
    assert client.get("/head/99/edit").status_code == 404


def test_edit_with_backend_down_redirects_to_list(client, backend):
    backend.fail("GET", HEAD.collection, BackendUnavailable("refused"))

    response = client.get("/head/1/edit")

    assert response.status_code == 302
    assert response.headers["Location"].endswith("/head/")


def test_update_renames_record(client, seeded_backend):
    response = client.post("/mode/1/edit", data={"name": "Card"}, follow_redirects=True)

    assert response.status_code == 200
    assert "Mode updated successfully." in response.get_data(as_text=True)
    assert seeded_backend.records[MODE.collection][1] == {"id": 1, "name": "Card"}


def test_update_validation_error_stays_on_form(client, seeded_backend):
    response = client.post("/mode/1/edit", data={"name": ""})

    assert response.status_code == 400
    assert "Edit Mode #1" in response.get_data(as_text=True)
    assert seeded_backend.records[MODE.collection][1]["name"] == "UPI"


def test_update_missing_record_is_404(client, seeded_backend):
    assert client.post("/mode/42/edit", data={"name": "Card"}).status_code == 404


def test_delete_removes_record(client, seeded_backend):
    response = client.post("/business/2/delete", follow_redirects=True)

    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert "Business deleted." in body
    assert 2 not in seeded_backend.records[BUSINESS.collection]
    assert "Catering" not in body


def test_delete_missing_record_warns(client, seeded_backend):
    response = client.post("/business/77/delete", follow_redirects=True)

    assert "Business could not be found." in response.get_data(as_text=True)
    assert len(seeded_backend.records[BUSINESS.collection]) == 2


def test_delete_is_post_only(client, seeded_backend):
    assert client.get("/business/1/delete").status_code == 405


def test_list_backend_failure_shows_error(client, backend):
    backend.fail("GET", BUSINESS.collection, BackendUnavailable("refused"))

    response = client.get("/business/")

    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert "Failed to load businesses: The accounts service is unavailable." in body
    assert "No businesses found." in body
