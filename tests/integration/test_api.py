"""Integration tests for API endpoints"""

import uuid
import pytest
from fastapi.testclient import TestClient

pytestmark = pytest.mark.integration


def register(client: TestClient, **overrides) -> dict:
    body = {"name": "Ama Serwaa", "platform": "youtube", "handle": "@amaserwaa"}
    body.update(overrides)
    response = client.post("/v1/influencers", json=body)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def registry(client: TestClient) -> list[dict]:
    """A(120k, compliant), B(80k, pending), C(no revenue, non-compliant)"""
    return [
        register(client, name="Ama Serwaa", handle="amaserwaa", estimated_annual_revenue=120000,
                 compliance_status="compliant", region="Greater Accra", compliance_score=30),
        register(client, name="Kofi Boateng", platform="tiktok", handle="kofib",
                 estimated_annual_revenue=80000, region="Ashanti", compliance_score=75),
        register(client, name="Esi Owusu", handle="esi", compliance_status="non-compliant"),
    ]


def test_health_endpoint(client: TestClient):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient, registry):
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "influencer_mutation_total" in response.text


def test_request_id_header(client: TestClient):
    response = client.get("/health")
    assert response.headers["X-Request-ID"]


def test_create_influencer_applies_defaults(client: TestClient):
    data = register(client, estimated_monthly_revenue=10000)

    assert data["handle"] == "amaserwaa"
    assert data["estimated_annual_revenue"] == 120000
    assert data["tax_liability"] == 30000
    assert data["compliance_status"] == "pending"
    assert data["last_data_refresh"] is not None


def test_create_influencer_missing_required_field(client: TestClient):
    response = client.post("/v1/influencers", json={"name": "No Handle", "platform": "youtube"})
    assert response.status_code == 422


def test_create_influencer_invalid_region(client: TestClient):
    response = client.post(
        "/v1/influencers",
        json={"name": "Ama", "platform": "youtube", "handle": "ama", "region": "Lagos"},
    )
    assert response.status_code == 422


def test_create_influencer_rejects_handle_of_only_at_signs(client: TestClient):
    response = client.post(
        "/v1/influencers",
        json={"name": "Esi", "platform": "youtube", "handle": "@"},
    )

    assert response.status_code == 422
    assert client.get("/v1/influencers").json() == []


def test_update_influencer_rejects_handle_of_only_at_signs(client: TestClient, registry):
    influencer_id = registry[0]["id"]

    response = client.patch(f"/v1/influencers/{influencer_id}", json={"handle": "@@"})

    assert response.status_code == 422
    assert client.get(f"/v1/influencers/{influencer_id}").json()["handle"] == "amaserwaa"


def test_get_influencer(client: TestClient, registry):
    influencer_id = registry[0]["id"]

    response = client.get(f"/v1/influencers/{influencer_id}")

    assert response.status_code == 200
    assert response.json()["name"] == "Ama Serwaa"


def test_get_influencer_not_found(client: TestClient):
    response = client.get(f"/v1/influencers/{uuid.uuid4()}")
    assert response.status_code == 404


def test_list_influencers_with_filters(client: TestClient, registry):
    assert len(client.get("/v1/influencers").json()) == 3
    assert [i["name"] for i in client.get("/v1/influencers?platform=tiktok").json()] == ["Kofi Boateng"]
    assert [i["name"] for i in client.get("/v1/influencers?compliance_status=compliant").json()] == ["Ama Serwaa"]
    assert [i["name"] for i in client.get("/v1/influencers?region=Ashanti").json()] == ["Kofi Boateng"]


def test_search_influencers(client: TestClient, registry):
    assert [i["name"] for i in client.get("/v1/influencers/search?q=KOFI").json()] == ["Kofi Boateng"]
    assert [i["name"] for i in client.get("/v1/influencers/search?q=esi").json()] == ["Esi Owusu"]
    assert len(client.get("/v1/influencers/search?q=").json()) == 3


def test_search_treats_wildcards_literally(client: TestClient, registry):
    register(client, name="Yaw Mensah", handle="yaw_gh")

    assert client.get("/v1/influencers/search", params={"q": "%"}).json() == []
    assert [i["name"] for i in client.get("/v1/influencers/search", params={"q": "_"}).json()] == ["Yaw Mensah"]
    assert [i["name"] for i in client.get("/v1/influencers/search", params={"q": "w_g"}).json()] == ["Yaw Mensah"]
    assert client.get("/v1/influencers/search", params={"q": "a_s"}).json() == []


def test_update_influencer_only_changes_supplied_fields(client: TestClient, registry):
    influencer_id = registry[0]["id"]

    response = client.patch(
        f"/v1/influencers/{influencer_id}",
        json={"compliance_status": "under-review", "region": None},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["compliance_status"] == "under-review"
    assert data["region"] == "Greater Accra"
    assert data["estimated_annual_revenue"] == 120000


def test_update_influencer_not_found(client: TestClient):
    response = client.patch(f"/v1/influencers/{uuid.uuid4()}", json={"name": "Ghost"})
    assert response.status_code == 404


def test_delete_influencer(client: TestClient, registry):
    influencer_id = registry[2]["id"]

    response = client.delete(f"/v1/influencers/{influencer_id}")
    assert response.status_code == 204

    assert client.get(f"/v1/influencers/{influencer_id}").status_code == 404
    assert client.delete(f"/v1/influencers/{influencer_id}").status_code == 404


def test_influencer_stats(client: TestClient, registry):
    data = client.get("/v1/influencers/stats").json()

    assert data["total_influencers"] == 3
    assert data["total_estimated_revenue"] == 200000
    assert data["total_estimated_tax"] == 50000
    assert data["compliance_rate"] == 33
    assert data["pending_assessments"] == 1
    assert data["youtube_count"] == 2
    assert data["tiktok_count"] == 1


def test_dashboard_metrics(client: TestClient, registry):
    influencer_id = registry[0]["id"]
    for status in ("pending", "approved", "disputed", "disputed"):
        response = client.post(
            "/v1/assessments",
            json={
                "influencer_id": influencer_id,
                "assessment_period_start": "2025-01-01T00:00:00Z",
                "assessment_period_end": "2025-12-31T00:00:00Z",
                "taxable_income": 120000,
                "tax_rate": 0.25,
                "status": status,
            },
        )
        assert response.status_code == 201

    data = client.get("/v1/analytics/dashboard").json()

    assert data["total_influencers"] == 3
    assert data["total_estimated_revenue"] == 200000
    assert data["total_tax_liability"] == 50000
    assert data["compliance_rate"] == 33
    assert data["pending_assessments"] == 1
    assert data["approved_assessments"] == 1
    assert data["disputed_assessments"] == 2


def test_dashboard_metrics_empty(client: TestClient):
    data = client.get("/v1/analytics/dashboard").json()

    assert data["total_influencers"] == 0
    assert data["compliance_rate"] == 0


def test_platform_distribution(client: TestClient):
    register(client)

    data = client.get("/v1/analytics/platform-distribution").json()

    assert data == [
        {"name": "YouTube", "value": 1, "color": "#FF0000"},
        {"name": "TikTok", "value": 0, "color": "#00F2EA"},
    ]


def test_regional_distribution(client: TestClient, registry):
    data = client.get("/v1/analytics/regional-distribution").json()

    assert {d["name"]: d["value"] for d in data} == {"Greater Accra": 1, "Ashanti": 1, "Unknown": 1}


def test_compliance_breakdown(client: TestClient, registry):
    data = client.get("/v1/analytics/compliance-breakdown").json()

    assert data == [
        {"status": "compliant", "count": 1},
        {"status": "non-compliant", "count": 1},
        {"status": "pending", "count": 1},
        {"status": "under-review", "count": 0},
    ]


def test_top_influencers(client: TestClient, registry):
    data = client.get("/v1/analytics/top-influencers").json()

    assert [i["name"] for i in data] == ["Ama Serwaa", "Kofi Boateng", "Esi Owusu"]


def test_revenue_by_month_is_empty(client: TestClient, registry):
    response = client.get("/v1/analytics/revenue-by-month")

    assert response.status_code == 200
    assert response.json() == []


def test_risk_assessment(client: TestClient, registry):
    data = client.get("/v1/analytics/risk-assessment").json()

    assert [(r["influencer"]["name"], r["score"], r["risk"]) for r in data] == [
        ("Ama Serwaa", 30, "High"),
        ("Kofi Boateng", 75, "Low"),
        ("Esi Owusu", 50, "Medium"),
    ]


def test_assessment_lifecycle(client: TestClient, registry):
    influencer_id = registry[1]["id"]

    created = client.post(
        "/v1/assessments",
        json={
            "influencer_id": influencer_id,
            "assessment_period_start": "2025-01-01T00:00:00Z",
            "assessment_period_end": "2025-12-31T00:00:00Z",
            "taxable_income": 80000,
            "tax_rate": 0.25,
        },
        headers={"X-User-Id": "officer-7"},
    )
    assert created.status_code == 201
    assessment = created.json()
    assert assessment["tax_amount"] == 20000
    assert assessment["status"] == "draft"
    assert assessment["assessed_by"] == "officer-7"

    updated = client.patch(f"/v1/assessments/{assessment['id']}", json={"status": "approved"})
    assert updated.status_code == 200
    assert updated.json()["status"] == "approved"

    listed = client.get(f"/v1/assessments?influencer_id={influencer_id}").json()
    assert [a["status"] for a in listed] == ["approved"]
    assert client.get("/v1/assessments?status=draft").json() == []


def test_assessment_for_unknown_influencer(client: TestClient):
    response = client.post(
        "/v1/assessments",
        json={
            "influencer_id": str(uuid.uuid4()),
            "assessment_period_start": "2025-01-01T00:00:00Z",
            "assessment_period_end": "2025-12-31T00:00:00Z",
            "taxable_income": 1000,
            "tax_rate": 0.25,
        },
    )
    assert response.status_code == 404


def test_mutations_are_audited(client: TestClient):
    created = client.post(
        "/v1/influencers",
        json={"name": "Ama", "platform": "youtube", "handle": "ama"},
        headers={"X-User-Id": "u-1", "X-User-Name": "Officer Adjei"},
    ).json()
    client.patch(f"/v1/influencers/{created['id']}", json={"compliance_status": "compliant"})

    recent = client.get("/v1/audit-logs").json()
    assert [e["action"] for e in recent] == ["updated_influencer", "created_influencer"]
    assert recent[1]["user_name"] == "Officer Adjei"

    by_entity = client.get(f"/v1/audit-logs/entity/influencer?entity_id={created['id']}").json()
    assert len(by_entity) == 2


def test_audit_log_append_and_limit(client: TestClient):
    for n in range(3):
        response = client.post(
            "/v1/audit-logs",
            json={"action": f"viewed_report_{n}", "entity_type": "report"},
        )
        assert response.status_code == 201
        assert response.json()["timestamp"]

    recent = client.get("/v1/audit-logs?limit=2").json()
    assert [e["action"] for e in recent] == ["viewed_report_2", "viewed_report_1"]


def test_download_report(client: TestClient, registry):
    response = client.get("/v1/reports/tax-summary")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "gra-tax-summary-" in response.headers["content-disposition"]
    assert "Total Registered Influencers: 3" in response.text


def test_download_unknown_report(client: TestClient):
    assert client.get("/v1/reports/payroll").status_code == 422


def test_risk_assessment_lists_top_six_earners(client: TestClient):
    for n in range(8):
        register(client, name=f"Creator {n}", handle=f"creator{n}", estimated_annual_revenue=(n + 1) * 10000)

    data = client.get("/v1/analytics/risk-assessment").json()

    assert len(data) == 6
    assert data[0]["influencer"]["name"] == "Creator 7"
    assert len(client.get("/v1/analytics/top-influencers").json()) == 8
