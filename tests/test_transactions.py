from datetime import timedelta

from spendwise.models import Budget, UserStats
from spendwise.services.periods import today


def balance_of(client, account_id):
    accounts = client.get("/api/accounts").json()["accounts"]
    return next(a["balance"] for a in accounts if a["id"] == account_id)


def test_income_and_expense_move_balance(client, make_account, make_transaction):
    account = make_account(initialBalance=1000)

    created = make_transaction(account["id"], type="income", amount=500)
    assert created["newBalance"] == 1500

    created = make_transaction(account["id"], type="expense", amount=200)
    assert created["newBalance"] == 1300
    assert created["transaction"]["account"]["name"] == "Wallet"


def test_transfer_moves_money_between_accounts(client, make_account, make_transaction):
    source = make_account(name="Bank", initialBalance=1000)
    target = make_account(name="Cash", initialBalance=0)

    created = make_transaction(source["id"], type="transfer", amount=300, toAccountId=target["id"])

    assert created["newBalance"] == 700
    assert balance_of(client, target["id"]) == 300
    assert created["transaction"]["to_account"]["name"] == "Cash"


def test_transfer_requires_distinct_destination(client, make_account):
    account = make_account()
    payload = {"accountId": account["id"], "amount": 10, "type": "transfer", "txnDate": today().isoformat()}

    response = client.post("/api/transactions", json=payload)
    assert response.status_code == 400
    assert response.json() == {"error": "Destination account is required for transfers"}

    payload["toAccountId"] = account["id"]
    response = client.post("/api/transactions", json=payload)
    assert response.json() == {"error": "Destination account must differ from source account"}


def test_validation_messages_are_joined(client):
    response = client.post("/api/transactions", json={"amount": 0, "type": "expense", "txnDate": "2024-01-01"})
    assert response.status_code == 400
    message = response.json()["error"]
    assert "accountId: Field required" in message
    assert ", " in message


def test_foreign_account_is_not_found(client, other_client, make_account):
    account = make_account()
    payload = {"accountId": account["id"], "amount": 10, "type": "expense", "txnDate": today().isoformat()}

    response = other_client.post("/api/transactions", json=payload)
    assert response.status_code == 404
    assert response.json() == {"error": "Account not found"}


def test_unknown_category_is_not_found(client, make_account):
    account = make_account()
    payload = {
        "accountId": account["id"],
        "categoryId": 999,
        "amount": 10,
        "type": "expense",
        "txnDate": today().isoformat(),
    }
    assert client.post("/api/transactions", json=payload).status_code == 404


def test_delete_restores_balance_budget_and_stats(client, db, make_account, make_category, make_transaction):
    account = make_account(initialBalance=1000)
    category = make_category()
    client.post("/api/budgets", json={"categoryId": category["id"], "amount": 1000})
    created = make_transaction(account["id"], amount=250, categoryId=category["id"], emotion="😋")

    stats = db.query(UserStats).one()
    assert (stats.xp, stats.total_transactions) == (10, 1)
    assert db.query(Budget).one().spent == 250
    db.expire_all()

    response = client.delete(f"/api/transactions/{created['transaction']['id']}")
    assert response.status_code == 204

    assert balance_of(client, account["id"]) == 1000
    db.expire_all()
    assert db.query(Budget).one().spent == 0
    stats = db.query(UserStats).one()
    assert (stats.xp, stats.total_transactions) == (0, 0)


def test_delete_transfer_restores_both_sides(client, make_account, make_transaction):
    source = make_account(name="Bank", initialBalance=1000)
    target = make_account(name="Cash", initialBalance=50)
    created = make_transaction(source["id"], type="transfer", amount=300, toAccountId=target["id"])

    client.delete(f"/api/transactions/{created['transaction']['id']}")

    assert balance_of(client, source["id"]) == 1000
    assert balance_of(client, target["id"]) == 50


def test_update_amount_applies_delta(client, make_account, make_transaction):
    account = make_account(initialBalance=1000)
    created = make_transaction(account["id"], amount=100)

    response = client.patch(f"/api/transactions/{created['transaction']['id']}", json={"amount": 150})
    assert response.status_code == 200
    assert response.json()["amount"] == 150
    assert balance_of(client, account["id"]) == 850


def test_update_transfer_amount_moves_both_sides(client, make_account, make_transaction):
    source = make_account(name="Bank", initialBalance=1000)
    target = make_account(name="Cash", initialBalance=0)
    created = make_transaction(source["id"], type="transfer", amount=300, toAccountId=target["id"])

    client.patch(f"/api/transactions/{created['transaction']['id']}", json={"amount": 200})

    assert balance_of(client, source["id"]) == 800
    assert balance_of(client, target["id"]) == 200


def test_update_category_moves_budget_spend(client, db, make_account, make_category, make_transaction):
    account = make_account()
    food = make_category(name="Food")
    fun = make_category(name="Fun")
    client.post("/api/budgets", json={"categoryId": food["id"], "amount": 1000})
    client.post("/api/budgets", json={"categoryId": fun["id"], "amount": 1000})
    created = make_transaction(account["id"], amount=100, categoryId=food["id"])

    client.patch(f"/api/transactions/{created['transaction']['id']}", json={"categoryId": fun["id"]})

    spent = {b.category_id: b.spent for b in db.query(Budget).all()}
    assert spent == {food["id"]: 0, fun["id"]: 100}


def test_update_only_touches_provided_fields(client, make_account, make_transaction):
    account = make_account()
    created = make_transaction(account["id"], description="Lunch", emotion="😋")

    response = client.patch(f"/api/transactions/{created['transaction']['id']}", json={"description": "Dinner"})
    data = response.json()
    assert data["description"] == "Dinner"
    assert data["emotion"] == "😋"

    response = client.patch(f"/api/transactions/{created['transaction']['id']}", json={"emotion": None})
    assert response.json()["emotion"] is None


def test_list_filters_and_paginates(client, make_account, make_category, make_transaction):
    account = make_account()
    food = make_category(name="Food")
    day = today()
    make_transaction(account["id"], description="Coffee beans", categoryId=food["id"], txnDate=day.isoformat())
    make_transaction(account["id"], description="Bus", txnDate=(day - timedelta(days=1)).isoformat())
    make_transaction(account["id"], description="Salary", type="income", amount=5000, txnDate=day.isoformat())

    data = client.get("/api/transactions", params={"limit": 2}).json()
    assert data["pagination"] == {"total": 3, "limit": 2, "offset": 0, "hasMore": True}
    assert data["transactions"][-1]["description"] != "Bus"

    data = client.get("/api/transactions", params={"type": "income"}).json()
    assert [t["description"] for t in data["transactions"]] == ["Salary"]

    data = client.get("/api/transactions", params={"search": "coffee"}).json()
    assert data["transactions"][0]["category"]["name"] == "Food"

    data = client.get("/api/transactions", params={"categoryId": food["id"]}).json()
    assert data["pagination"]["total"] == 1


def test_list_by_account_includes_incoming_transfers(client, make_account, make_transaction):
    source = make_account(name="Bank")
    target = make_account(name="Cash")
    make_transaction(source["id"], type="transfer", amount=10, toAccountId=target["id"])

    data = client.get("/api/transactions", params={"accountId": target["id"]}).json()
    assert data["pagination"]["total"] == 1


def test_first_transaction_earns_first_steps(client, make_account, make_transaction):
    account = make_account()
    make_transaction(account["id"])
    make_transaction(account["id"])

    catalogue = client.get("/api/gamification/achievements").json()
    earned = [a["id"] for a in catalogue["achievements"] if a["earned"]]
    assert earned == ["first_steps"]
