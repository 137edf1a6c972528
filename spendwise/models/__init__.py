# Importing the models registers every table on Base.metadata
from spendwise.models.account import Account
from spendwise.models.category import Category
from spendwise.models.transaction import Transaction
from spendwise.models.budget import Budget
from spendwise.models.goal import SavingsGoal, GoalContribution
from spendwise.models.debt import Debt, DebtPayment
from spendwise.models.gamification import UserStats, Achievement
from spendwise.models.networth import NetWorthHistory
from spendwise.models.profile import Profile

__all__ = [
    "Account",
    "Category",
    "Transaction",
    "Budget",
    "SavingsGoal",
    "GoalContribution",
    "Debt",
    "DebtPayment",
    "UserStats",
    "Achievement",
    "NetWorthHistory",
    "Profile",
]
