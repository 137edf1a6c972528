from spendwise.models import Transaction


def test_create_asset_account(client):
    response = client.post("/api/accounts", json={"name": "BCA", "type": "bank", "initialBalance": 5000})
    assert response.status_code == 201
    data = response.json()
    assert data["balance"] == 5000
    assert data["is_asset"] is True
    assert data["icon"] == "💳"


def test_liability_balance_is_stored_negative(client):
    response = client.post(
        "/api/accounts",
        json={"name": "Visa", "type": "credit_card", "initialBalance": 2000, "isAsset": False},
    )
    data = response.json()
    assert data["balance"] == -2000
    assert data["initial_balance"] == 2000


def test_list_accounts_summary(client, make_account):
    make_account(name="Cash", initialBalance=1000)
    make_account(name="Card", type="credit_card", initialBalance=300, isAsset=False)

    data = client.get("/api/accounts").json()
    assert [a["name"] for a in data["accounts"]] == ["Cash", "Card"]
    assert data["summary"] == {
        "totalAssets": 1000,
        "totalLiabilities": 300,
        "netWorth": 700,
        "accountCount": 2,
    }


def test_accounts_are_scoped_to_owner(client, other_client, make_account):
    account = make_account()

    assert other_client.get("/api/accounts").json()["accounts"] == []
    response = other_client.patch(f"/api/accounts/{account['id']}", json={"name": "Mine now"})
    assert response.status_code == 404
    assert response.json() == {"error": "Account not found"}


def test_update_applies_only_provided_fields(client, make_account):
    account = make_account(institution="Bank Jago")

    response = client.patch(f"/api/accounts/{account['id']}", json={"name": "Daily"})
    data = response.json()
    assert data["name"] == "Daily"
    assert data["institution"] == "Bank Jago"


def test_delete_is_soft(client, make_account):
    account = make_account()

    assert client.delete(f"/api/accounts/{account['id']}").status_code == 204
    assert client.get("/api/accounts").json()["accounts"] == []


def test_adjust_balance_records_correction(client, db, make_account):
    account = make_account(initialBalance=1000)

    response = client.patch(
        f"/api/accounts/{account['id']}/adjust-balance",
        json={"newBalance": 1250, "reason": "Found cash"},
    )
    assert response.status_code == 200
    assert response.json()["balance"] == 1250

    rows = db.query(Transaction).filter(Transaction.account_id == account["id"]).all()
    assert len(rows) == 1
    assert rows[0].type == "income"
    assert rows[0].amount == 250
    assert rows[0].description == "Found cash"
    assert rows[0].category_id is None


def test_adjust_balance_down_is_an_expense(client, db, make_account):
    account = make_account(initialBalance=1000)

    client.patch(f"/api/accounts/{account['id']}/adjust-balance", json={"newBalance": 400})

    row = db.query(Transaction).filter(Transaction.account_id == account["id"]).one()
    assert row.type == "expense"
    assert row.amount == 600
    assert row.description == "Balance adjustment"


def test_adjust_balance_without_difference_records_nothing(client, db, make_account):
    account = make_account(initialBalance=1000)

    client.patch(f"/api/accounts/{account['id']}/adjust-balance", json={"newBalance": 1000})

    assert db.query(Transaction).count() == 0


def test_invalid_account_type_is_rejected(client):
    response = client.post("/api/accounts", json={"name": "Gold", "type": "gold"})
    assert response.status_code == 400
    assert response.json()["error"].startswith("type:")
