"""Tests for HTTP endpoints."""

from dataclasses import replace
from datetime import date
from uuid import uuid4

from fastapi.testclient import TestClient

from nutrition_impact.api.app import create_app
from nutrition_impact.domain.foods import FoodLogEntry
from nutrition_impact.domain.users import GoalBook
from tests.conftest import AUTH_HEADERS, USER_ID, make_food_item, make_goal

PROFILE_BODY = {
    "birth_date": "1990-01-01",
    "gender": "male",
    "height_cm": 180,
    "current_weight_kg": 80,
    "activity_level_factor": 1.5,
}
GOAL_BODY = {
    "primary_goals": ["maintenance"],
    "activity_level": "moderately_active",
    "target_weight_kg": 78,
    "current_weight_kg": 80,
}
FOOD_ITEM_BODY = {
    "name": "Banana",
    "serving_quantity": 120,
    "serving_unit": "piece",
    "serving_weight_grams": 120,
    "nutrients": {"calories": 89, "carbohydrate": 23, "fiber": 2.6},
    "expiration_hours": 120,
}


def _client(container) -> TestClient:
    return TestClient(create_app(container))


def test_health_endpoint(container) -> None:
    response = _client(container).get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_requests_without_token_are_rejected(container) -> None:
    client = _client(container)

    missing = client.get("/users/me")
    unknown = client.get("/users/me", headers={"Authorization": "Bearer nope"})

    assert missing.status_code == 401
    assert missing.json() == {"error": {"message": "Unauthorized", "status_code": 401}}
    assert unknown.status_code == 401


def test_profile_and_goal_flow(container) -> None:
    client = _client(container)

    early_goal = client.post("/users/me/goals", json=GOAL_BODY, headers=AUTH_HEADERS)
    profile = client.put(
        "/users/me/health-profile", json=PROFILE_BODY, headers=AUTH_HEADERS
    )
    created = client.post("/users/me/goals", json=GOAL_BODY, headers=AUTH_HEADERS)

    assert early_goal.status_code == 400
    assert "incomplete" in early_goal.json()["error"]["message"]
    assert profile.status_code == 200
    assert profile.json()["health_profile"]["gender"] == "male"
    assert created.status_code == 201
    body = created.json()
    assert body["current_goal_index"] == 0
    assert body["goals"][0]["targets"]["calories"] > 0
    assert body["goals"][0]["primary_goals"] == ["maintenance"]

    updated = client.patch(
        "/users/me/goals/0", json={"allergies": ["peanut"]}, headers=AUTH_HEADERS
    )
    assert updated.json()["goals"][0]["allergies"] == ["peanut"]

    missing = client.put("/users/me/goals/current/5", headers=AUTH_HEADERS)
    assert missing.status_code == 404

    deleted = client.delete("/users/me/goals/0", headers=AUTH_HEADERS)
    assert deleted.json() == {"goals": [], "current_goal_index": None}


def test_invalid_profile_is_rejected(container) -> None:
    response = _client(container).put(
        "/users/me/health-profile",
        json={**PROFILE_BODY, "height_cm": -1},
        headers=AUTH_HEADERS,
    )

    assert response.status_code == 422


def test_food_item_inventory_and_expiration(container) -> None:
    client = _client(container)
    inventory = client.post(
        "/inventories", json={"name": "Fridge"}, headers=AUTH_HEADERS
    ).json()["inventory"]

    created = client.post(
        "/food-items",
        json={**FOOD_ITEM_BODY, "inventory_id": inventory["id"]},
        headers=AUTH_HEADERS,
    )
    expiration = client.get(
        f"/inventories/{inventory['id']}/expiration", headers=AUTH_HEADERS
    )

    assert created.status_code == 201
    food_item = created.json()["food_item"]
    assert created.json()["inventory"]["food_item_ids"] == [food_item["id"]]
    assert expiration.status_code == 200
    assert expiration.json()["summary"]["healthy_count"] == 1


def test_food_item_rejects_unknown_inventory(container, catalog_repository) -> None:
    response = _client(container).post(
        "/food-items",
        json={**FOOD_ITEM_BODY, "inventory_id": str(uuid4())},
        headers=AUTH_HEADERS,
    )

    assert response.status_code == 404
    assert catalog_repository.items == {}


def test_food_log_and_single_day(container, user_repository, catalog_repository):
    item = catalog_repository.add(make_food_item())
    user = user_repository.users[USER_ID]
    user_repository.add(replace(user, goal_book=GoalBook().append(make_goal())))
    client = _client(container)

    logged = client.post(
        "/users/me/food-logs",
        json={
            "date": "2024-01-01",
            "time": "08:00",
            "food_item_id": str(item.id),
            "quantity": 1,
        },
        headers=AUTH_HEADERS,
    )
    report = client.get(
        "/analytics/single-day", params={"day": "2024-01-01"}, headers=AUTH_HEADERS
    )

    assert logged.status_code == 201
    assert report.status_code == 200
    assert report.json()["percentages"]["calories"] == 10.0


def test_weekly_and_monthly_endpoints(container, user_repository, catalog_repository):
    item = catalog_repository.add(make_food_item())
    user = user_repository.users[USER_ID]
    user_repository.add(
        replace(user, food_logs=(FoodLogEntry(date(2024, 1, 2), "09:00", item.id, 1),))
    )
    client = _client(container)

    weekly = client.post(
        "/analytics/weekly",
        json={"start_date": "2024-01-01", "include_suggestions": True},
        headers=AUTH_HEADERS,
    )
    monthly = client.post(
        "/analytics/monthly", json={"year": 2024, "month": 1}, headers=AUTH_HEADERS
    )
    bad_month = client.post(
        "/analytics/monthly", json={"year": 2024, "month": 13}, headers=AUTH_HEADERS
    )

    assert weekly.status_code == 200
    assert weekly.json()["goal"] is None
    assert weekly.json()["daily"][1]["day_of_week"] == "Tuesday"
    assert weekly.json()["ai_suggestions"] == "Eat more vegetables."
    assert len(monthly.json()["daily"]) == 31
    assert bad_month.status_code == 422


def test_sdg_impact_without_goal(container) -> None:
    response = _client(container).post(
        "/analytics/sdg-impact", json={"start_date": "2024-01-01"}, headers=AUTH_HEADERS
    )

    assert response.status_code == 400
    assert response.json()["error"]["status_code"] == 400


def test_sdg_impact_with_goal(container, user_repository) -> None:
    user = user_repository.users[USER_ID]
    user_repository.add(replace(user, goal_book=GoalBook().append(make_goal())))

    response = _client(container).post(
        "/analytics/sdg-impact", json={"start_date": "2024-01-01"}, headers=AUTH_HEADERS
    )

    assert response.status_code == 200
    body = response.json()
    assert body["components"]["waste_score"] == 21.0
    assert 1 <= body["score"] <= 100
    assert body["inventory"]["total_items"] == 0


def test_meal_plan_and_chat(container, user_repository) -> None:
    user = user_repository.users[USER_ID]
    user_repository.add(replace(user, goal_book=GoalBook().append(make_goal())))
    client = _client(container)

    plan = client.post(
        "/assistant/meal-plan", json={"days": 3}, headers=AUTH_HEADERS
    )
    chat = client.post(
        "/assistant/chat", json={"message": "Hi"}, headers=AUTH_HEADERS
    )

    assert plan.status_code == 200
    assert plan.json()["meal_plan"]["days"][0]["day"] == 1
    assert chat.json()["reply"] == "Eat more vegetables."
    assert [turn["role"] for turn in chat.json()["history"]] == ["user", "assistant"]


def test_meal_plan_failure_is_bad_gateway(container, user_repository, text_client):
    user = user_repository.users[USER_ID]
    user_repository.add(replace(user, goal_book=GoalBook().append(make_goal())))
    text_client.error = RuntimeError("boom")

    response = _client(container).post(
        "/assistant/meal-plan", json={"days": 3}, headers=AUTH_HEADERS
    )

    assert response.status_code == 502


def test_unexpected_errors_are_hidden(container, monkeypatch) -> None:
    def explode(*_args, **_kwargs):
        raise RuntimeError("database password leaked")

    monkeypatch.setattr(container.user_service, "get_user", explode)
    client = TestClient(create_app(container), raise_server_exceptions=False)

    response = client.get("/users/me", headers=AUTH_HEADERS)

    assert response.status_code == 500
    assert response.json() == {
        "error": {"message": "Internal server error", "status_code": 500}
    }


def test_rename_caller(container, user_repository) -> None:
    client = _client(container)

    renamed = client.patch(
        "/users/me", json={"full_name": "Ada Lovelace"}, headers=AUTH_HEADERS
    )
    blank = client.patch("/users/me", json={"full_name": ""}, headers=AUTH_HEADERS)

    assert renamed.status_code == 200
    assert renamed.json() == {"id": str(USER_ID), "full_name": "Ada Lovelace"}
    assert user_repository.users[USER_ID].full_name == "Ada Lovelace"
    assert blank.status_code == 422


def test_future_birth_date_is_rejected(container, user_repository) -> None:
    response = _client(container).put(
        "/users/me/health-profile",
        json={**PROFILE_BODY, "birth_date": "2999-01-01"},
        headers=AUTH_HEADERS,
    )

    assert response.status_code == 422
    assert user_repository.users[USER_ID].health_profile is None


def test_report_dates_past_the_calendar_are_rejected(container) -> None:
    client = _client(container)

    monthly = client.post(
        "/analytics/monthly", json={"year": 10000, "month": 1}, headers=AUTH_HEADERS
    )
    weekly = client.post(
        "/analytics/weekly",
        json={"start_date": "9999-12-30", "include_suggestions": False},
        headers=AUTH_HEADERS,
    )
    impact = client.post(
        "/analytics/sdg-impact", json={"start_date": "9999-12-26"}, headers=AUTH_HEADERS
    )
    last_week = client.post(
        "/analytics/weekly",
        json={"start_date": "9999-12-25", "include_suggestions": False},
        headers=AUTH_HEADERS,
    )

    assert monthly.status_code == 422
    assert weekly.status_code == 422
    assert impact.status_code == 422
    assert last_week.status_code == 200
    assert last_week.json()["end"] == "9999-12-31"


def test_update_food_item(container, catalog_repository) -> None:
    client = _client(container)
    created = client.post(
        "/food-items", json=FOOD_ITEM_BODY, headers=AUTH_HEADERS
    ).json()["food_item"]
    foreign = catalog_repository.add(make_food_item(created_by=uuid4()))

    updated = client.patch(
        f"/food-items/{created['id']}",
        json={"name": "Plantain", "nutrients": {"calories": 122}, "tags": ["fruit"]},
        headers=AUTH_HEADERS,
    )
    negative = client.patch(
        f"/food-items/{created['id']}",
        json={"nutrients": {"sodium": -1}},
        headers=AUTH_HEADERS,
    )
    not_owner = client.patch(
        f"/food-items/{foreign.id}", json={"name": "Mine"}, headers=AUTH_HEADERS
    )

    assert updated.status_code == 200
    food_item = updated.json()["food_item"]
    assert food_item["name"] == "Plantain"
    assert food_item["nutrients"]["calories"] == 122
    assert food_item["nutrients"]["carbohydrate"] == 23
    assert food_item["tags"] == ["fruit"]
    assert negative.status_code == 422
    assert not_owner.status_code == 404


def test_resources_flow(container, user_repository, catalog_repository) -> None:
    item = catalog_repository.add(make_food_item(tags=frozenset({"fiber"})))
    user = user_repository.users[USER_ID]
    user_repository.add(
        replace(user, food_logs=(FoodLogEntry(date(2024, 1, 2), "09:00", item.id, 1),))
    )
    client = _client(container)

    video_without_url = client.post(
        "/resources",
        json={"title": "Oats 101", "content": "Watch", "type": "video"},
        headers=AUTH_HEADERS,
    )
    created = client.post(
        "/resources",
        json={
            "title": "Oats 101",
            "content": "Oats are rich in fiber.",
            "type": "article",
            "tags": ["fiber"],
        },
        headers=AUTH_HEADERS,
    )
    resource_id = created.json()["resource"]["id"]
    listing = client.get(
        "/resources", params={"type": "article", "tag": "fiber"}, headers=AUTH_HEADERS
    )
    recommendations = client.get("/resources/recommendations", headers=AUTH_HEADERS)
    patched = client.patch(
        f"/resources/{resource_id}", json={"title": "Oats 102"}, headers=AUTH_HEADERS
    )
    deleted = client.delete(f"/resources/{resource_id}", headers=AUTH_HEADERS)
    missing = client.get(f"/resources/{resource_id}", headers=AUTH_HEADERS)

    assert video_without_url.status_code == 400
    assert created.status_code == 201
    assert listing.json()["pagination"] == {
        "page": 1,
        "limit": 10,
        "total": 1,
        "total_pages": 1,
    }
    assert recommendations.json()["based_on_tags"] == ["fiber"]
    assert recommendations.json()["count"] == 1
    assert patched.json()["resource"]["title"] == "Oats 102"
    assert deleted.status_code == 200
    assert missing.status_code == 404
