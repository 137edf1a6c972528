"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-17 00:00:00

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "profiles",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("clerk_id", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("full_name", sa.String(), nullable=True),
        sa.Column("avatar_url", sa.String(), nullable=True),
        sa.Column("display_name", sa.String(100), nullable=True),
        sa.Column("bio", sa.String(500), nullable=True),
        sa.Column("currency", sa.String(3), nullable=False),
        sa.Column("theme", sa.String(10), nullable=False),
        sa.Column("accent_color", sa.String(7), nullable=False),
        sa.Column("language", sa.String(5), nullable=False),
        sa.Column("date_format", sa.String(20), nullable=False),
        sa.Column("notification_budget", sa.Boolean(), nullable=False),
        sa.Column("notification_goals", sa.Boolean(), nullable=False),
        sa.Column("notification_achievements", sa.Boolean(), nullable=False),
        sa.Column("privacy_hide_amounts", sa.Boolean(), nullable=False),
        sa.Column("onboarding_completed", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_profiles_clerk_id", "profiles", ["clerk_id"], unique=True)

    op.create_table(
        "accounts",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("icon", sa.String(10), nullable=True),
        sa.Column("color", sa.String(7), nullable=True),
        sa.Column("balance", sa.Float(), nullable=False),
        sa.Column("initial_balance", sa.Float(), nullable=False),
        sa.Column("is_asset", sa.Boolean(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("institution", sa.String(100), nullable=True),
        sa.Column("account_number", sa.String(50), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_accounts_user_id", "accounts", ["user_id"])

    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(60), nullable=False),
        sa.Column("color", sa.String(7), nullable=True),
        sa.Column("icon", sa.String(10), nullable=True),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_categories_id", "categories", ["id"])
    op.create_index("ix_categories_user_id", "categories", ["user_id"])

    op.create_table(
        "transactions",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("account_id", sa.String(36), sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column("to_account_id", sa.String(36), sa.ForeignKey("accounts.id"), nullable=True),
        sa.Column("category_id", sa.Integer(), sa.ForeignKey("categories.id", ondelete="SET NULL"), nullable=True),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column("txn_date", sa.Date(), nullable=False),
        sa.Column("emotion", sa.String(10), nullable=True),
        sa.Column("tags", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )
    for column in ("user_id", "account_id", "to_account_id", "category_id", "txn_date"):
        op.create_index(f"ix_transactions_{column}", "transactions", [column])

    op.create_table(
        "budgets",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("category_id", sa.Integer(), sa.ForeignKey("categories.id", ondelete="CASCADE"), nullable=False),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("period", sa.String(10), nullable=False),
        sa.Column("spent", sa.Float(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("alert_threshold", sa.Float(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_budgets_user_id", "budgets", ["user_id"])
    op.create_index("ix_budgets_category_id", "budgets", ["category_id"])

    op.create_table(
        "savings_goals",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("target_amount", sa.Float(), nullable=False),
        sa.Column("current_amount", sa.Float(), nullable=False),
        sa.Column("target_date", sa.Date(), nullable=True),
        sa.Column("icon", sa.String(10), nullable=True),
        sa.Column("color", sa.String(7), nullable=True),
        sa.Column("priority", sa.Integer(), nullable=False),
        sa.Column("linked_account_id", sa.String(36), sa.ForeignKey("accounts.id"), nullable=True),
        sa.Column("is_completed", sa.Boolean(), nullable=False),
        sa.Column("completed_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_savings_goals_user_id", "savings_goals", ["user_id"])

    op.create_table(
        "goal_contributions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("goal_id", sa.String(36), sa.ForeignKey("savings_goals.id", ondelete="CASCADE"), nullable=False),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("note", sa.String(500), nullable=True),
        sa.Column("contributed_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_goal_contributions_id", "goal_contributions", ["id"])
    op.create_index("ix_goal_contributions_goal_id", "goal_contributions", ["goal_id"])

    op.create_table(
        "debts",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("person_name", sa.String(100), nullable=False),
        sa.Column("person_contact", sa.String(200), nullable=True),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("original_amount", sa.Float(), nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("is_settled", sa.Boolean(), nullable=False),
        sa.Column("settled_at", sa.DateTime(), nullable=True),
        sa.Column("reminder_enabled", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_debts_user_id", "debts", ["user_id"])

    op.create_table(
        "debt_payments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("debt_id", sa.String(36), sa.ForeignKey("debts.id", ondelete="CASCADE"), nullable=False),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("note", sa.String(500), nullable=True),
        sa.Column("paid_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_debt_payments_id", "debt_payments", ["id"])
    op.create_index("ix_debt_payments_debt_id", "debt_payments", ["debt_id"])

    op.create_table(
        "user_stats",
        sa.Column("user_id", sa.String(), primary_key=True),
        sa.Column("level", sa.Integer(), nullable=False),
        sa.Column("xp", sa.Integer(), nullable=False),
        sa.Column("streak", sa.Integer(), nullable=False),
        sa.Column("longest_streak", sa.Integer(), nullable=False),
        sa.Column("last_active", sa.Date(), nullable=True),
        sa.Column("total_transactions", sa.Integer(), nullable=False),
        sa.Column("financial_score", sa.Float(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )

    op.create_table(
        "achievements",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("badge_id", sa.String(50), nullable=False),
        sa.Column("earned_at", sa.DateTime(), nullable=True),
        sa.UniqueConstraint("user_id", "badge_id", name="uq_achievements_user_badge"),
    )
    op.create_index("ix_achievements_id", "achievements", ["id"])
    op.create_index("ix_achievements_user_id", "achievements", ["user_id"])

    op.create_table(
        "net_worth_history",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("snapshot_date", sa.Date(), nullable=False),
        sa.Column("total_assets", sa.Float(), nullable=False),
        sa.Column("total_liabilities", sa.Float(), nullable=False),
        sa.Column("net_worth", sa.Float(), nullable=False),
        sa.Column("cash_and_bank", sa.Float(), nullable=False),
        sa.Column("investments", sa.Float(), nullable=False),
        sa.Column("receivables", sa.Float(), nullable=False),
        sa.Column("credit_cards", sa.Float(), nullable=False),
        sa.Column("loans", sa.Float(), nullable=False),
        sa.Column("payables", sa.Float(), nullable=False),
        sa.Column("total_income", sa.Float(), nullable=False),
        sa.Column("total_expense", sa.Float(), nullable=False),
        sa.Column("savings_rate", sa.Float(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.UniqueConstraint("user_id", "snapshot_date", name="uq_net_worth_user_month"),
    )
    op.create_index("ix_net_worth_history_id", "net_worth_history", ["id"])
    op.create_index("ix_net_worth_history_user_id", "net_worth_history", ["user_id"])


def downgrade() -> None:
    for table in (
        "net_worth_history",
        "achievements",
        "user_stats",
        "debt_payments",
        "debts",
        "goal_contributions",
        "savings_goals",
        "budgets",
        "transactions",
        "categories",
        "accounts",
        "profiles",
    ):
        op.drop_table(table)
