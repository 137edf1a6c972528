from datetime import timedelta

from spendwise.models import Achievement
from spendwise.services.periods import today


def make_debt(client, **overrides):
    payload = {"personName": "Budi", "amount": 1000}
    payload.update(overrides)
    response = client.post("/api/debts", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_keeps_sign_and_original_magnitude(client):
    debt = make_debt(client, amount=-500)
    assert debt["amount"] == -500
    assert debt["original_amount"] == 500
    assert debt["paidPercentage"] == 0


def test_zero_amount_is_rejected(client):
    response = client.post("/api/debts", json={"personName": "Budi", "amount": 0})
    assert response.status_code == 400
    assert response.json() == {"error": "Amount cannot be zero"}


def test_partial_payment_shrinks_magnitude(client):
    debt = make_debt(client, amount=-1000)

    data = client.post(f"/api/debts/{debt['id']}/pay", json={"amount": 300, "note": "cash"}).json()
    assert data["debt"]["amount"] == -700
    assert data["debt"]["paidPercentage"] == 30
    assert data["isSettled"] is False
    assert data["payment"] == {"amount": 300, "note": "cash"}


def test_overpayment_settles_at_zero(client, db):
    debt = make_debt(client, amount=1000)

    data = client.post(f"/api/debts/{debt['id']}/pay", json={"amount": 1500}).json()
    assert data["debt"]["amount"] == 0
    assert data["debt"]["is_settled"] is True
    assert data["debt"]["settled_at"] is not None
    assert data["isSettled"] is True
    assert db.query(Achievement).filter(Achievement.badge_id == "debt_free").count() == 1


def test_debt_free_waits_for_last_debt(client, db):
    first = make_debt(client, amount=100)
    second = make_debt(client, amount=-200)

    client.post(f"/api/debts/{first['id']}/pay", json={"amount": 100})
    assert db.query(Achievement).count() == 0

    client.patch(f"/api/debts/{second['id']}/settle")
    assert db.query(Achievement).filter(Achievement.badge_id == "debt_free").count() == 1


def test_paying_settled_debt_is_rejected(client):
    debt = make_debt(client)
    client.patch(f"/api/debts/{debt['id']}/settle")

    response = client.post(f"/api/debts/{debt['id']}/pay", json={"amount": 10})
    assert response.status_code == 400
    assert response.json() == {"error": "Debt is already settled"}


def test_payment_requires_positive_amount(client):
    debt = make_debt(client)
    response = client.post(f"/api/debts/{debt['id']}/pay", json={"amount": -1})
    assert response.status_code == 400
    assert response.json() == {"error": "Valid payment amount is required"}


def test_list_orders_and_summarises(client):
    day = today()
    make_debt(client, personName="Late", amount=300, dueDate=(day - timedelta(days=2)).isoformat())
    make_debt(client, personName="Owed", amount=-100)
    settled = make_debt(client, personName="Done", amount=50)
    client.patch(f"/api/debts/{settled['id']}/settle")

    data = client.get("/api/debts").json()
    assert [d["person_name"] for d in data["debts"]] == ["Late", "Owed", "Done"]
    assert data["debts"][0]["isOverdue"] is True
    assert data["summary"] == {
        "theyOweYou": 300,
        "youOweThem": 100,
        "netBalance": 200,
        "activeCount": 2,
        "overdueCount": 1,
    }


def test_payment_history_and_delete(client):
    debt = make_debt(client)
    client.post(f"/api/debts/{debt['id']}/pay", json={"amount": 100, "note": "one"})
    client.post(f"/api/debts/{debt['id']}/pay", json={"amount": 200, "note": "two"})

    payments = client.get(f"/api/debts/{debt['id']}/payments").json()
    assert [p["note"] for p in payments] == ["two", "one"]

    assert client.delete(f"/api/debts/{debt['id']}").status_code == 204
    assert client.get(f"/api/debts/{debt['id']}/payments").status_code == 404


def test_non_finite_amounts_are_rejected(client):
    debt = make_debt(client)
    headers = {"Content-Type": "application/json"}

    for raw in (b'{"amount": NaN}', b'{"amount": Infinity}'):
        response = client.post(f"/api/debts/{debt['id']}/pay", content=raw, headers=headers)
        assert response.status_code == 400

    response = client.post("/api/debts", content=b'{"personName": "Budi", "amount": NaN}', headers=headers)
    assert response.status_code == 400
    assert response.json()["error"].startswith("amount:")

    assert [d["amount"] for d in client.get("/api/debts").json()["debts"]] == [1000]


def test_settling_twice_keeps_first_settlement_time(client):
    debt = make_debt(client)

    first = client.patch(f"/api/debts/{debt['id']}/settle").json()
    second = client.patch(f"/api/debts/{debt['id']}/settle").json()

    assert second["is_settled"] is True
    assert second["settled_at"] == first["settled_at"]
