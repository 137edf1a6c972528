from datetime import timedelta

from spendwise.models import Achievement
from spendwise.services.metrics import goal_progress
from spendwise.services.periods import today


def make_goal(client, **overrides):
    payload = {"name": "Laptop", "targetAmount": 1000}
    payload.update(overrides)
    response = client.post("/api/goals", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_contributions_complete_goal_once(client, db):
    goal = make_goal(client)

    response = client.post(f"/api/goals/{goal['id']}/contribute", json={"amount": 600, "note": "bonus"})
    data = response.json()
    assert data["isCompleted"] is False
    assert data["goal"]["current_amount"] == 600
    assert data["goal"]["progress"] == 60
    assert data["contribution"] == {"amount": 600, "note": "bonus"}

    data = client.post(f"/api/goals/{goal['id']}/contribute", json={"amount": 400}).json()
    assert data["isCompleted"] is True
    completed_at = data["goal"]["completed_at"]
    assert completed_at is not None

    # Further money keeps the original completion
    data = client.post(f"/api/goals/{goal['id']}/contribute", json={"amount": 100}).json()
    assert data["goal"]["completed_at"] == completed_at
    assert data["goal"]["current_amount"] == 1100

    assert db.query(Achievement).filter(Achievement.badge_id == "goal_getter").count() == 1


def test_contribution_requires_positive_amount(client):
    goal = make_goal(client)

    for body in ({}, {"amount": 0}, {"amount": -5}):
        response = client.post(f"/api/goals/{goal['id']}/contribute", json=body)
        assert response.status_code == 400
        assert response.json() == {"error": "Valid amount is required"}


def test_contribution_history_newest_first(client):
    goal = make_goal(client)
    client.post(f"/api/goals/{goal['id']}/contribute", json={"amount": 10, "note": "first"})
    client.post(f"/api/goals/{goal['id']}/contribute", json={"amount": 20, "note": "second"})

    rows = client.get(f"/api/goals/{goal['id']}/contributions").json()
    assert [r["note"] for r in rows] == ["second", "first"]


def test_goals_order_by_priority(client):
    make_goal(client, name="Later", priority=5)
    make_goal(client, name="Now", priority=1)

    assert [g["name"] for g in client.get("/api/goals").json()] == ["Now", "Later"]


def test_linked_account_must_be_owned(client, other_client, make_account):
    account = make_account()
    response = other_client.post("/api/goals", json={"name": "x", "targetAmount": 10, "linkedAccountId": account["id"]})
    assert response.status_code == 404

    goal = make_goal(client, linkedAccountId=account["id"])
    assert goal["linked_account"]["name"] == "Wallet"


def test_update_and_delete_goal(client):
    goal = make_goal(client, targetDate=(today() + timedelta(days=30)).isoformat())

    data = client.patch(f"/api/goals/{goal['id']}", json={"targetDate": None}).json()
    assert data["target_date"] is None
    assert data["estimatedCompletion"] is None

    assert client.delete(f"/api/goals/{goal['id']}").status_code == 204
    assert client.get("/api/goals").json() == []


def test_goal_progress_estimates():
    day = today()
    progress = goal_progress(250, 1000, day + timedelta(days=10), day)
    assert progress["progress"] == 25
    assert progress["estimatedCompletion"] == {"daysRemaining": 10, "dailyRequired": 75}

    due_today = goal_progress(250, 1000, day, day)
    assert due_today["estimatedCompletion"]["dailyRequired"] == 750

    assert goal_progress(0, 1000, None, day)["estimatedCompletion"] is None


def test_non_finite_contribution_is_rejected(client):
    goal = make_goal(client)

    for raw in (b'{"amount": NaN}', b'{"amount": Infinity}'):
        response = client.post(
            f"/api/goals/{goal['id']}/contribute",
            content=raw,
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["error"].startswith("amount:")

    assert client.get("/api/goals").json()[0]["current_amount"] == 0


def test_raised_target_keeps_completion(client):
    goal = make_goal(client, targetAmount=100)
    data = client.post(f"/api/goals/{goal['id']}/contribute", json={"amount": 100}).json()
    assert data["isCompleted"] is True
    assert data["goal"]["isCompleted"] is True

    data = client.patch(f"/api/goals/{goal['id']}", json={"targetAmount": 500}).json()
    assert data["is_completed"] is True
    assert data["isCompleted"] is True
    assert data["progress"] == 20


def test_goal_progress_respects_stored_completion():
    assert goal_progress(100, 500, None, today(), is_completed=True)["isCompleted"] is True
    assert goal_progress(100, 500, None, today())["isCompleted"] is False
