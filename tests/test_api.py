"""Tests for the HTTP API."""

from datetime import timedelta

from fastapi.testclient import TestClient

from meal_diary.api.app import create_app
from tests.conftest import TODAY, make_profile

_PROFILE = make_profile().model_dump(mode="json", by_alias=True)


def _onboard(client: TestClient) -> None:
    assert client.post("/login", json={"username": "001", "password": "001"}).is_success
    assert client.post("/onboarding/next").json()["view"] == "ONBOARDING_PHASE_2"
    response = client.post("/onboarding/complete", json=_PROFILE)
    assert response.json()["view"] == "DASHBOARD"


def test_health(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_login_rejects_wrong_password(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/login", json={"username": "001", "password": "123"})

    assert response.status_code == 401
    assert response.json()["error"] == "LoginRejected"


def test_first_login_routes_to_onboarding(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/login", json={"username": "001", "password": "001"})

    assert response.status_code == 200
    assert response.json()["view"] == "ONBOARDING_PHASE_1"


def test_submit_meal_flow(container, assistant) -> None:
    with TestClient(create_app(container)) as client:
        _onboard(client)

        day = client.get(f"/days/{TODAY.isoformat()}").json()
        assert day["isToday"] is True
        assert day["mealType"] == "lunch"
        assert day["log"]["meals"] == []

        response = client.post(
            f"/days/{TODAY.isoformat()}/meals", json={"description": "番茄炒蛋"}
        )
        assert response.status_code == 201
        entry = response.json()
        assert entry["type"] == "lunch"
        assert entry["nutrition"]["calories"] == 220
        assert entry["isRecommended"] is False

        state = client.get("/state").json()
        assert state["currentDate"] == TODAY.isoformat()
        assert len(state["logs"][TODAY.isoformat()]["meals"]) == 1

    report = container.diary_service.report_for(TODAY)
    assert report is not None
    assert report.text == assistant.text
    assert len(assistant.calls_of("text")) == 1


def test_submit_before_onboarding_conflicts(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        f"/days/{TODAY.isoformat()}/meals", json={"description": "番茄炒蛋"}
    )

    assert response.status_code == 409
    assert response.json()["error"] == "ProfileMissing"


def test_unavailable_analysis_keeps_input(container) -> None:
    container.diary_service.resolver.client = None
    with TestClient(create_app(container)) as client:
        _onboard(client)

        response = client.post(
            f"/days/{TODAY.isoformat()}/meals", json={"description": "牛油果吐司"}
        )
        assert response.status_code == 503
        assert response.json()["description"] == "牛油果吐司"

        day = client.get(f"/days/{TODAY.isoformat()}").json()
        assert day["pendingInputs"] == {"lunch": "牛油果吐司"}

        response = client.post(
            f"/days/{TODAY.isoformat()}/meals", json={"allowUnanalyzed": True}
        )
        assert response.status_code == 201
        assert response.json()["nutrition"] is None


def test_failed_analysis_returns_bad_gateway(container, assistant) -> None:
    assistant.error = RuntimeError("boom")
    with TestClient(create_app(container)) as client:
        _onboard(client)

        response = client.post(
            f"/days/{TODAY.isoformat()}/meals", json={"description": "牛油果吐司"}
        )

    assert response.status_code == 502
    assert response.json()["error"] == "AnalysisFailed"


def test_empty_description_is_rejected(container) -> None:
    client = TestClient(create_app(container))
    _onboard(client)

    response = client.post(
        f"/days/{TODAY.isoformat()}/meals", json={"description": "   "}
    )

    assert response.status_code == 400


def test_day_updates(container) -> None:
    client = TestClient(create_app(container))
    _onboard(client)
    path = f"/days/{TODAY.isoformat()}"

    assert client.put(f"{path}/mood", json={"mood": "happy"}).json()["mood"] == "happy"
    assert client.put(f"{path}/water", json={"cups": 5}).json()["waterIntake"] == 5
    assert client.put(f"{path}/weight", json={"weight": 50.5}).json()["weight"] == 50.5
    assert client.put(f"{path}/weight", json={"weight": 0}).status_code == 422
    assert client.put(f"{path}/water", json={"cups": -1}).status_code == 422

    state = client.get("/state").json()
    assert state["user"]["weight"] == 50.5

    trends = client.get("/trends").json()
    assert trends == [
        {
            "date": TODAY.isoformat(),
            "mood": "happy",
            "health": 0.0,
            "weight": 50.5,
        }
    ]


def test_meal_type_and_recipe_search(container) -> None:
    client = TestClient(create_app(container))

    assert client.get("/meal-type").json() == {"mealType": "lunch", "label": "午餐"}

    results = client.get("/recipes/search", params={"q": "鸡"}).json()
    assert [item["name"] for item in results] == ["番茄炒蛋", "水煮鸡胸肉", "宫保鸡丁"]
    assert client.get("/recipes/search", params={"q": ""}).json() == []


def test_calendar_marks_days_with_meals(container) -> None:
    with TestClient(create_app(container)) as client:
        _onboard(client)
        client.post(f"/days/{TODAY.isoformat()}/meals", json={"description": "米饭"})

        week = client.get(f"/calendar/{TODAY.isoformat()}").json()

    assert [cell["dayName"] for cell in week][:2] == ["周一", "周二"]
    today_cell = next(cell for cell in week if cell["isToday"])
    assert today_cell["date"] == TODAY.isoformat()
    assert today_cell["hasMeals"] is True
    assert sum(cell["hasMeals"] for cell in week) == 1


def test_recommendations_and_accept(container, assistant) -> None:
    assistant.json_payload = {
        "recommendations": [
            {
                "name": "燕麦牛奶粥",
                "reason": "暖胃",
                "nutritionHighlights": "低脂",
                "tags": ["早餐"],
            }
        ]
    }
    with TestClient(create_app(container)) as client:
        _onboard(client)

        response = client.post("/recommendations/breakfast")
        assert response.status_code == 200
        assert response.json()[0]["name"] == "燕麦牛奶粥"

        accepted = client.post(
            "/recommendations/breakfast/accept", json={"name": "燕麦牛奶粥"}
        )
        assert accepted.json() == {"pendingInput": "燕麦牛奶粥"}

        entry = client.post(
            f"/days/{TODAY.isoformat()}/meals", json={"mealType": "breakfast"}
        ).json()

    assert entry["description"] == "燕麦牛奶粥"
    assert entry["isRecommended"] is True


def test_report_without_meals_is_empty(container) -> None:
    client = TestClient(create_app(container))

    response = client.get(f"/days/{TODAY.isoformat()}/report")

    assert response.json() == {
        "date": TODAY.isoformat(),
        "text": None,
        "pending": False,
    }


def test_meal_after_other_date_requests_one_report(container, assistant) -> None:
    today = TODAY.isoformat()
    with TestClient(create_app(container)) as client:
        _onboard(client)
        client.post(f"/days/{today}/meals", json={"description": "番茄炒蛋"})
        client.get(f"/days/{(TODAY - timedelta(days=1)).isoformat()}")

        response = client.post(
            f"/days/{today}/meals", json={"description": "米饭 (一碗)"}
        )
        assert response.status_code == 201

    assert len(assistant.calls_of("text")) == 2
    assert container.diary_service.report_for(TODAY).text == assistant.text
