"""Form Routes — HTTP contract of the form definition endpoints.

Invariants:
    - POST /forms returns 201 with the stored definition
    - Validation failures return 400 with a precise reason code
    - Slug conflicts return 409 with reason slug-conflict
    - GET /forms lists newest-first with response counts
    - GET /forms/{slug} returns 404 for unknown slugs
    - Storage failures return 503 without driver details in the body
"""

import logging
from datetime import datetime, timezone

from formcraft.infrastructure.database import DatabaseSessionManager, get_db
import formcraft.infrastructure.database as db_module
from formcraft.main import app
from formcraft.models.form import Form
from formcraft.models.form_field import FormField
from formcraft.models.form_response import FormResponse

FEEDBACK_FORM = {
    "title": "Customer Feedback!!!",
    "fields": [
        {"label": "Email", "type": "EMAIL", "required": True, "order": 5},
        {"label": "Rating", "type": "RADIO", "required": True, "order": 5,
         "options": ["1", "2", "", "3"]},
        {"label": "Comments", "type": "TEXTAREA", "required": False, "order": 0},
    ],
}


async def test_create_form_returns_201(client):
    res = await client.post("/api/v1/forms", json=FEEDBACK_FORM)

    assert res.status_code == 201
    body = res.json()
    assert body["slug"] == "customer-feedback"
    assert body["title"] == "Customer Feedback!!!"
    assert body["id"]
    assert [f["order"] for f in body["fields"]] == [0, 1, 2]
    assert [f["label"] for f in body["fields"]] == ["Email", "Rating", "Comments"]
    assert body["fields"][1]["options"] == ["1", "2", "", "3"]
    assert body["fields"][0]["options"] is None


async def test_create_form_with_explicit_slug(client):
    res = await client.post(
        "/api/v1/forms", json={**FEEDBACK_FORM, "slug": "Feedback 2026"},
    )
    assert res.status_code == 201
    assert res.json()["slug"] == "feedback-2026"


async def test_create_form_missing_title(client):
    res = await client.post(
        "/api/v1/forms", json={"title": "   ", "fields": FEEDBACK_FORM["fields"]},
    )
    assert res.status_code == 400
    assert res.json()["error"]["reason"] == "missing-title"


async def test_create_form_missing_fields(client):
    res = await client.post("/api/v1/forms", json={"title": "Empty"})
    assert res.status_code == 400
    assert res.json()["error"]["reason"] == "missing-fields"


async def test_create_form_invalid_field_type(client):
    res = await client.post(
        "/api/v1/forms",
        json={"title": "Bad", "fields": [{"label": "When", "type": "DATE"}]},
    )
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["reason"] == "invalid-field-type"
    assert error["context"]["field_index"] == 0


async def test_create_form_unslugifiable_title(client):
    res = await client.post(
        "/api/v1/forms",
        json={"title": "数字", "fields": [{"label": "x", "type": "TEXT"}]},
    )
    assert res.status_code == 400
    assert res.json()["error"]["reason"] == "unslugifiable-title"


async def test_create_form_null_title(client):
    res = await client.post(
        "/api/v1/forms", json={"title": None, "fields": [{"type": "TEXT"}]},
    )
    assert res.status_code == 400
    assert res.json()["error"]["reason"] == "missing-title"


async def test_create_form_null_fields(client):
    res = await client.post(
        "/api/v1/forms", json={"title": "Null Fields", "fields": None},
    )
    assert res.status_code == 400
    assert res.json()["error"]["reason"] == "missing-fields"


async def test_create_form_field_without_type(client):
    res = await client.post(
        "/api/v1/forms",
        json={"title": "No Type", "fields": [{"label": "What"}]},
    )
    assert res.status_code == 400
    assert res.json()["error"]["reason"] == "invalid-field-type"


async def test_create_form_null_field_type(client):
    res = await client.post(
        "/api/v1/forms",
        json={"title": "Null Type", "fields": [{"type": "TEXT"}, {"type": None}]},
    )
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["reason"] == "invalid-field-type"
    assert error["context"]["field_index"] == 1


async def test_create_form_numeric_field_type(client):
    res = await client.post(
        "/api/v1/forms", json={"title": "Numeric Type", "fields": [{"type": 7}]},
    )
    assert res.status_code == 400
    assert res.json()["error"]["reason"] == "invalid-field-type"


async def test_create_form_malformed_body(client):
    res = await client.post(
        "/api/v1/forms", json={"title": "T", "fields": "not-a-list"},
    )
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["details"]


async def test_duplicate_slug_returns_409(client):
    first = await client.post("/api/v1/forms", json=FEEDBACK_FORM)
    second = await client.post(
        "/api/v1/forms",
        json={"title": "customer feedback", "fields": [{"type": "TEXT"}]},
    )

    assert first.status_code == 201
    assert second.status_code == 409
    assert second.json()["error"]["reason"] == "slug-conflict"

    still_there = await client.get("/api/v1/forms/customer-feedback")
    assert still_there.status_code == 200
    assert still_there.json()["id"] == first.json()["id"]


async def test_get_form_by_slug(client):
    await client.post("/api/v1/forms", json=FEEDBACK_FORM)

    res = await client.get("/api/v1/forms/customer-feedback")

    assert res.status_code == 200
    body = res.json()
    assert [f["type"] for f in body["fields"]] == ["EMAIL", "RADIO", "TEXTAREA"]
    assert body["fields"][1]["options"] == ["1", "2", "", "3"]


async def test_get_unknown_slug_returns_404(client):
    res = await client.get("/api/v1/forms/never-created")
    assert res.status_code == 404
    error = res.json()["error"]
    assert error["code"] == "RESOURCE_NOT_FOUND"
    assert error["context"]["form_slug"] == "never-created"


async def test_get_non_canonical_slug_returns_404(client):
    await client.post("/api/v1/forms", json=FEEDBACK_FORM)

    res = await client.get("/api/v1/forms/Customer-Feedback")

    assert res.status_code == 404
    assert res.json()["error"]["reason"] == "not-found"


async def test_list_forms_empty(client):
    res = await client.get("/api/v1/forms")
    assert res.status_code == 200
    assert res.json() == {"forms": []}


async def test_list_forms_newest_first_with_counts(client, test_db):
    older = Form(
        title="Older", slug="older",
        created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
        fields=[FormField(label="A", type="TEXT", order=0)],
    )
    newer = Form(
        title="Newer", slug="newer",
        created_at=datetime(2026, 3, 1, tzinfo=timezone.utc),
        fields=[FormField(label="B", type="CHECKBOX", order=0, options=["x"])],
    )
    test_db.add_all([older, newer])
    await test_db.flush()
    test_db.add(FormResponse(form_id=newer.id, answers={"B": ["x"]}))
    await test_db.commit()

    res = await client.get("/api/v1/forms")

    forms = res.json()["forms"]
    assert [f["slug"] for f in forms] == ["newer", "older"]
    assert [f["response_count"] for f in forms] == [1, 0]
    assert forms[0]["fields"][0]["options"] == ["x"]


async def test_storage_failure_returns_503(client, monkeypatch, caplog):
    # Database without tables: every query fails in the driver
    empty = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    app.dependency_overrides.pop(get_db)
    monkeypatch.setattr(db_module, "db_manager", empty)

    with caplog.at_level(logging.ERROR, logger="formcraft.api.error_handlers"):
        res = await client.get("/api/v1/forms")
    await empty.dispose()

    assert res.status_code == 503
    error = res.json()["error"]
    assert error["code"] == "STORAGE_ERROR"
    assert error["reason"] == "storage-unavailable"
    assert "no such table" not in res.text.lower()
    assert any(r.levelno == logging.ERROR and r.exc_info for r in caplog.records)


async def test_health_liveness(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_health_readiness_with_database(client):
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"
