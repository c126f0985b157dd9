import asyncio

from health_analyzer.domains import DOMAINS
from health_analyzer.models.db_models import DentalAnalysis, HealthAnalysis, HealthcareProvider
from health_analyzer.services import analysis_service
from health_analyzer.services.analysis_service import HealthAnalysisService
from health_analyzer.utils.errors import PersistenceFailure
from health_analyzer.utils.vision_analyzer import VisionResult

from conftest import IMAGE_B64, FakeVisionAnalyzer

MEAL_TEXT = """Food Items:
- Grilled chicken
- Brown rice

Calories: about 520 kcal
Protein: 38g

Recommendations:
- Add a side of vegetables
"""


def test_missing_image_is_rejected_without_calling_model(client, vision):
    response = client.post("/api/dental-check", json={})

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Missing required field: image"}
    assert vision.calls == []


def test_empty_image_is_rejected(client, vision):
    response = client.post("/api/skin-tracker", json={"image": ""})

    assert response.status_code == 400
    assert response.json()["error"] == "Missing required field: image"
    assert vision.calls == []


def test_invalid_base64_is_rejected(client, vision):
    response = client.post("/api/posture-check", json={"image": "***not-base64***"})

    assert response.status_code == 400
    assert response.json()["error"].startswith("Invalid image data")
    assert vision.calls == []


def test_invalid_json_body(client):
    response = client.post(
        "/api/poop-health", content=b"{not json", headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Invalid JSON body"}


def test_get_on_analysis_route_is_method_not_allowed(client):
    response = client.get("/api/dental-check")

    assert response.status_code == 405
    assert response.json() == {"success": False, "error": "Method not allowed"}


def test_dental_success_without_user_is_not_stored(client, vision, db_session):
    response = client.post("/api/dental-check", json={"image": IMAGE_B64})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    data = body["data"]
    assert len(data["concerns"]) == 4
    assert len(data["recommendations"]) == 4
    assert data["hygieneScore"] == 6
    assert data["dentistRecommended"] is True
    assert data["created_at"]
    assert "id" not in data
    assert db_session.query(HealthAnalysis).count() == 0

    image, prompt = vision.calls[0]
    assert image == IMAGE_B64
    assert prompt == DOMAINS["dental"].prompt


def test_success_with_user_is_stored(client, db_session):
    response = client.post("/api/dental-check", json={"image": IMAGE_B64, "userId": "user-42"})

    data = response.json()["data"]
    assert response.status_code == 200
    stored = db_session.get(HealthAnalysis, data["id"])
    assert stored.user_id == "user-42"
    assert stored.analysis_type == "dental"
    assert db_session.get(DentalAnalysis, data["id"]).oral_hygiene_score == 6


def test_soft_failure_returns_400_and_stores_nothing(client, vision, db_session):
    vision.result = VisionResult(text="I'm unable to analyze this image, it is too blurry.", success=False)

    response = client.post("/api/skin-tracker", json={"image": IMAGE_B64, "userId": "user-1"})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"].startswith("Unable to analyze the skin image")
    assert "too blurry" in body["error"]
    assert db_session.query(HealthAnalysis).count() == 0


def test_hard_failure_returns_500(client, vision):
    vision.result = VisionResult(text="timeout", success=False, error="timeout")

    response = client.post("/api/nutri-snap", json={"image": IMAGE_B64})

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Error analyzing food image"}


def test_nutrition_payload_shape(client, vision):
    vision.result = VisionResult(text=MEAL_TEXT, success=True)

    data = client.post("/api/nutri-snap", json={"image": IMAGE_B64}).json()["data"]

    assert data["foodItems"] == ["Grilled chicken", "Brown rice"]
    assert data["nutrients"] == {"calories": 520, "protein": 38, "vitamins": {}}
    assert data["recommendations"] == ["Add a side of vegetables"]
    assert "healthScore" not in data


def test_stool_payload(client, vision):
    vision.result = VisionResult(text="Bristol stool type is 7. Hydration appears low.", success=True)

    data = client.post("/api/poop-health", json={"image": IMAGE_B64}).json()["data"]

    assert data["bristolType"] == 7
    assert data["doctorRecommended"] is True
    assert data["hydrationLevel"] == "low"
    assert data["abnormalities"] == []


def test_provider_lookup(client, vision, db_session):
    vision.result = VisionResult(text=MEAL_TEXT, success=True)
    db_session.add_all([
        HealthcareProvider(name="Green Plate Nutrition", specialty="nutritionist"),
        HealthcareProvider(name="Bright Smiles", specialty="dentist"),
    ])
    db_session.commit()

    response = client.post("/api/nutri-snap", json={
        "image": IMAGE_B64,
        "findProviders": True,
        "location": {"latitude": 51.5, "longitude": -0.12},
    })

    providers = response.json()["data"]["nearbyProviders"]
    assert [p["name"] for p in providers] == ["Green Plate Nutrition"]
    assert providers[0]["specialty"] == "nutritionist"


def test_no_provider_lookup_without_location(client, vision):
    vision.result = VisionResult(text=MEAL_TEXT, success=True)

    data = client.post("/api/nutri-snap", json={"image": IMAGE_B64, "findProviders": True}).json()["data"]

    assert "nearbyProviders" not in data


def test_persistence_failure_still_succeeds(client, monkeypatch):
    def failing_store(*args, **kwargs):
        raise PersistenceFailure("database is down")

    monkeypatch.setattr(analysis_service, "store_analysis_results", failing_store)

    response = client.post("/api/dental-check", json={"image": IMAGE_B64, "userId": "user-1"})

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert "id" not in response.json()["data"]


def test_service_reports_side_effect_outcomes(db_session, monkeypatch):
    def failing_store(*args, **kwargs):
        raise PersistenceFailure("database is down")

    monkeypatch.setattr(analysis_service, "store_analysis_results", failing_store)
    service = HealthAnalysisService(DOMAINS["dental"], FakeVisionAnalyzer(), db_session)

    outcome = asyncio.run(service.handle({"image": IMAGE_B64, "userId": "user-1"}))

    assert outcome.success
    assert outcome.persistence.attempted
    assert outcome.persistence.error == "database is down"
    assert outcome.provider_lookup.attempted is False


def test_history_endpoints(client, db_session):
    analysis_id = client.post(
        "/api/dental-check", json={"image": IMAGE_B64, "userId": "user-7"}
    ).json()["data"]["id"]

    response = client.get(f"/api/analyses/{analysis_id}")
    assert response.status_code == 200
    stored = response.json()["data"]
    assert stored["analysis_type"] == "dental"
    assert stored["details"]["oral_hygiene_score"] == 6

    listed = client.get("/api/analyses", params={"userId": "user-7"}).json()["data"]
    assert [row["id"] for row in listed] == [analysis_id]
    assert client.get("/api/analyses", params={"userId": "user-7", "analysisType": "skin"}).json()["data"] == []


def test_history_errors(client):
    missing = client.get("/api/analyses/does-not-exist")
    assert missing.status_code == 404
    assert missing.json()["success"] is False

    unknown = client.get("/api/analyses", params={"userId": "u", "analysisType": "teeth"})
    assert unknown.status_code == 400

    no_user = client.get("/api/analyses")
    assert no_user.status_code == 400


def test_health_endpoints(client):
    assert client.get("/api/health").json()["status"] == "healthy"
    assert client.get("/").status_code == 200
