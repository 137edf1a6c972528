import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy import update
from sqlalchemy.orm import Session

from spendwise.core.security import get_current_user_id
from spendwise.db.session import get_db
from spendwise.models import Budget, Category, Transaction
from spendwise.schemas.category import CategoryCreate, CategoryOut, CategoryUpdate
from spendwise.schemas.common import dump
from spendwise.services.categories import find_by_name

logger = logging.getLogger(__name__)

router = APIRouter()

DUPLICATE_NAME = "Category with this name already exists"


def _owned_category(db: Session, user_id: str, category_id: int) -> Category:
    category = db.query(Category).filter(Category.id == category_id, Category.user_id == user_id).first()
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@router.get("")
def list_categories(
    type: str = Query(None, pattern="^(income|expense|transfer)$"),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    query = db.query(Category).filter(Category.user_id == user_id)
    if type:
        query = query.filter(Category.type == type)
    return [dump(CategoryOut, c) for c in query.order_by(Category.name.asc()).all()]


@router.post("", status_code=201)
def create_category(payload: CategoryCreate, user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    if find_by_name(db, user_id, payload.name):
        raise HTTPException(status_code=409, detail=DUPLICATE_NAME)

    category = Category(user_id=user_id, **payload.model_dump())
    db.add(category)
    db.commit()
    db.refresh(category)
    return dump(CategoryOut, category)


@router.patch("/{category_id}")
def update_category(category_id: int, payload: CategoryUpdate, user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    category = _owned_category(db, user_id, category_id)
    changes = payload.changes()

    if "name" in changes and find_by_name(db, user_id, changes["name"], exclude_id=category.id):
        raise HTTPException(status_code=409, detail=DUPLICATE_NAME)

    for field, value in changes.items():
        setattr(category, field, value)
    db.commit()
    db.refresh(category)
    return dump(CategoryOut, category)


@router.delete("/{category_id}", status_code=204)
def delete_category(category_id: int, user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    category = _owned_category(db, user_id, category_id)

    # Transactions keep their history uncategorized; budgets have no meaning without it
    db.execute(
        update(Transaction)
        .where(Transaction.category_id == category.id)
        .values(category_id=None)
        .execution_options(synchronize_session=False)
    )
    db.query(Budget).filter(Budget.category_id == category.id).delete(synchronize_session=False)
    db.delete(category)
    db.commit()
    logger.info("Category %s deleted for %s", category_id, user_id)
    return Response(status_code=204)
