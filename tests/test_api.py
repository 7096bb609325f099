"""HTTP tests for the routing API."""

from datetime import datetime, timedelta, timezone
from urllib.parse import quote


def _parse(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["checks"]["rules_source"] == "built-in"


def test_correlation_id_is_echoed(client):
    response = client.get("/health", headers={"X-Correlation-ID": "abc-123"})

    assert response.headers["X-Correlation-ID"] == "abc-123"
    assert "X-Response-Time" in response.headers


# ========== Classification ==========

def test_classify_critical_text(client):
    response = client.post("/routing/classify", json={"text": "there was a fire in the studio"})

    assert response.status_code == 200
    body = response.json()
    assert body["priority"] == "critical"
    assert body["category"] == "Customer Service"
    assert body["requires_class_details"] is True
    assert body["routing"]["primary"] == "Client Success"


def test_classify_empty_text_uses_defaults(client):
    response = client.post("/routing/classify", json={"text": ""})

    assert response.status_code == 200
    assert response.json()["priority"] == "medium"
    assert response.json()["category"] == "Customer Service"


def test_analyze_with_escalation(client):
    response = client.post("/routing/analyze", json={
        "description": "Someone took my bag from the locker",
        "subcategory": "Theft",
        "created_at": "2026-03-08T09:00:00Z",
    })

    assert response.status_code == 200
    body = response.json()
    assert body["priority"] == "critical"
    assert body["department"] == "Security"
    assert body["escalation_rule"]["subcategory"] == "Theft"
    assert body["tags"] == ["support", "critical", "escalated"]
    assert body["draft"]["requires_class_details"] is True
    assert _parse(body["sla_due_at"]) == datetime(2026, 3, 8, 11, 0, tzinfo=timezone.utc)


def test_analyze_blank_description_is_rejected(client):
    response = client.post("/routing/analyze", json={"description": "   "})

    assert response.status_code == 422


# ========== Drafts ==========

DRAFT = {
    "title": "Trainer Delayed for Scheduled Session",
    "description": "the trainer was late",
    "category": "Customer Service",
    "priority": "medium",
    "department": "Client Success",
    "requires_class_details": True,
}


def test_draft_without_class_name_is_rejected(client):
    response = client.post("/routing/drafts/validate", json=DRAFT)

    assert response.status_code == 422
    assert response.json()["detail"].startswith("Class details required")


def test_draft_with_class_name_is_accepted(client):
    response = client.post(
        "/routing/drafts/validate", json={**DRAFT, "class_name": "Spin 6pm"}
    )

    assert response.status_code == 200
    assert response.json()["class_name"] == "Spin 6pm"


# ========== Lookups ==========

def test_escalation_rule_lookup(client):
    response = client.get("/routing/escalation-rules/Theft")

    assert response.status_code == 200
    assert response.json() == {
        "subcategory": "Theft",
        "escalate_to": "Security",
        "priority": "critical",
        "immediate": True,
        "notify_level": "management",
    }


def test_escalation_rule_with_slash(client):
    response = client.get("/routing/escalation-rules/Fire/Emergency")

    assert response.status_code == 200
    assert response.json()["escalate_to"] == "Management"


def test_unknown_escalation_rule_is_404(client):
    response = client.get("/routing/escalation-rules/Nope")

    assert response.status_code == 404
    assert response.json()["detail"] == "Escalation rule with id 'Nope' not found"


def test_department_routing_lookup(client):
    response = client.get(f"/routing/departments/{quote('Booking & Technology')}")

    assert response.status_code == 200
    assert response.json()["primary"] == "IT/Tech Support"


def test_unknown_department_uses_fallback(client):
    unknown = client.get("/routing/departments/Nonexistent").json()
    fallback = client.get("/routing/departments/Miscellaneous").json()

    assert unknown == fallback


# ========== SLA ==========

def test_sla_rules(client):
    rules = client.get("/routing/sla-rules").json()["rules"]

    assert list(rules) == ["critical", "high", "medium", "low"]
    assert rules["high"]["resolution_hours"] == 8


def test_sla_deadline(client):
    response = client.post("/routing/sla/deadline", json={
        "priority": "high",
        "created_at": "2026-03-08T09:00:00Z",
    })

    assert response.status_code == 200
    assert _parse(response.json()["due_at"]) == datetime(2026, 3, 8, 17, 0, tzinfo=timezone.utc)


def test_sla_deadline_unknown_priority(client):
    response = client.post("/routing/sla/deadline", json={"priority": "urgent"})

    assert response.status_code == 422
    assert "urgent" in response.json()["detail"]


def test_sla_status_breached(client):
    due_at = datetime.now(timezone.utc) - timedelta(hours=1)
    response = client.post("/routing/sla/status", json={
        "priority": "low",
        "due_at": due_at.isoformat(),
    })

    assert response.status_code == 200
    body = response.json()
    assert body["state"] == "breached"
    assert body["is_breached"] is True
    assert body["is_nearing"] is False
    assert body["remaining_seconds"] == 0


def test_sla_status_met(client):
    due_at = datetime.now(timezone.utc) - timedelta(hours=1)
    response = client.post("/routing/sla/status", json={
        "priority": "low",
        "due_at": due_at.isoformat(),
        "resolved_at": (due_at - timedelta(hours=2)).isoformat(),
    })

    assert response.json()["state"] == "met"
