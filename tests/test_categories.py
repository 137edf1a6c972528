from spendwise.models import Budget, Category, Transaction
from spendwise.services.categories import DEFAULT_CATEGORIES, create_default_categories


def test_create_and_list_by_name(client, make_category):
    make_category(name="Travel")
    make_category(name="Bills")
    make_category(name="Salary", type="income")

    names = [c["name"] for c in client.get("/api/categories").json()]
    assert names == ["Bills", "Salary", "Travel"]

    incomes = client.get("/api/categories", params={"type": "income"}).json()
    assert [c["name"] for c in incomes] == ["Salary"]


def test_name_is_trimmed(client):
    response = client.post("/api/categories", json={"name": "  Coffee  "})
    assert response.json()["name"] == "Coffee"


def test_duplicate_name_is_case_insensitive(client, make_category):
    make_category(name="Groceries")

    response = client.post("/api/categories", json={"name": "groceries "})
    assert response.status_code == 409
    assert response.json() == {"error": "Category with this name already exists"}


def test_same_name_for_another_owner_is_fine(client, other_client, make_category):
    make_category(name="Groceries")

    response = other_client.post("/api/categories", json={"name": "Groceries"})
    assert response.status_code == 201


def test_rename_onto_existing_name_conflicts(client, make_category):
    make_category(name="Food")
    snacks = make_category(name="Snacks")

    response = client.patch(f"/api/categories/{snacks['id']}", json={"name": "FOOD"})
    assert response.status_code == 409

    # Renaming to its own name in another case is allowed
    response = client.patch(f"/api/categories/{snacks['id']}", json={"name": "SNACKS"})
    assert response.status_code == 200


def test_delete_uncategorizes_transactions_and_drops_budgets(client, db, make_account, make_category, make_transaction):
    account = make_account()
    category = make_category()
    make_transaction(account["id"], categoryId=category["id"])
    client.post("/api/budgets", json={"categoryId": category["id"], "amount": 1000})

    assert client.delete(f"/api/categories/{category['id']}").status_code == 204

    assert db.query(Category).count() == 0
    assert db.query(Budget).count() == 0
    assert db.query(Transaction).one().category_id is None


def test_default_seed_is_idempotent(db):
    assert create_default_categories(db, "seed_user") == len(DEFAULT_CATEGORIES)
    db.commit()
    assert create_default_categories(db, "seed_user") == 0
    assert db.query(Category).filter(Category.user_id == "seed_user").count() == len(DEFAULT_CATEGORIES)
