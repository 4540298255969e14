"""Seed an admin, a support agent and default ticket categories.

Safe to run repeatedly: existing users and categories are left untouched.
"""

from __future__ import annotations

import argparse
import logging
import sys
from contextlib import suppress

from quickdesk.db import database, models
from quickdesk.db.repositories import categories as category_repo
from quickdesk.db.repositories import users as user_repo
from quickdesk.utils.role_permissions import ROLE_ADMIN, ROLE_SUPPORT_AGENT
from quickdesk.utils.security import hash_password


logger = logging.getLogger("quickdesk.scripts.seed_demo_data")


# Access SessionLocal dynamically so test fixtures that rebind the
# sessionmaker are respected.
SessionLocal = lambda: database.SessionLocal()

DEFAULT_CATEGORIES = (
    ("General", "General questions and requests", "#3B82F6"),
    ("Technical Support", "Problems with software, hardware or access", "#EF4444"),
    ("Billing", "Invoices, payments and refunds", "#10B981"),
    ("Account", "Sign-in, profile and permission issues", "#F59E0B"),
    ("Feature Request", "Ideas and suggestions for improvements", "#8B5CF6"),
)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed QuickDesk with demo users and categories")
    parser.add_argument("--admin-email", default="admin@quickdesk.local", help="Email of the seeded admin")
    parser.add_argument("--agent-email", default="agent@quickdesk.local", help="Email of the seeded support agent")
    parser.add_argument(
        "--password",
        default="changeme123",
        help="Password for newly created seed users (default: changeme123)",
    )
    parser.add_argument(
        "--skip-categories",
        action="store_true",
        help="Only seed users; leave categories alone",
    )
    return parser.parse_args(argv)


def ensure_user(session, *, name: str, email: str, password: str, role: str) -> tuple[models.User, bool]:
    email = email.strip().lower()
    existing = user_repo.get_user_by_email(session, email)
    if existing is not None:
        return existing, False
    user = user_repo.create_user(
        session,
        name=name,
        email=email,
        password_hash=hash_password(password),
        role=role,
    )
    return user, True


def ensure_categories(session, created_by) -> int:
    created = 0
    for name, description, color in DEFAULT_CATEGORIES:
        if category_repo.get_category_by_name(session, name) is not None:
            continue
        category_repo.create_category(
            session, name=name, description=description, color=color, created_by=created_by
        )
        created += 1
    return created


def seed(admin_email: str, agent_email: str, password: str, skip_categories: bool = False) -> int:
    database.init_sqlite_schema()
    session = SessionLocal()
    try:
        admin, admin_created = ensure_user(
            session, name="QuickDesk Admin", email=admin_email, password=password, role=ROLE_ADMIN
        )
        _, agent_created = ensure_user(
            session, name="Support Agent", email=agent_email, password=password, role=ROLE_SUPPORT_AGENT
        )
        categories_created = 0 if skip_categories else ensure_categories(session, admin.id)

        print(
            f"Seeded admin ({'created' if admin_created else 'existing'}), "
            f"agent ({'created' if agent_created else 'existing'}), "
            f"{categories_created} new categories."
        )
        logger.info(
            "Seed run finished: admin_created=%s agent_created=%s categories_created=%s",
            admin_created, agent_created, categories_created,
        )
        return 0
    finally:
        with suppress(Exception):
            session.close()


def main(argv: list[str] | None = None) -> int:
    if not logging.getLogger().handlers:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    args = parse_args(argv)
    return seed(
        admin_email=args.admin_email,
        agent_email=args.agent_email,
        password=args.password,
        skip_categories=args.skip_categories,
    )


if __name__ == "__main__":  # pragma: no cover - manual execution path
    sys.exit(main())
