"""
Database management commands.
Creates and resets the schema and provisions user accounts from the command line.

    property-desk-manage create-tables
    property-desk-manage drop-tables --confirm
    property-desk-manage reset --confirm
    property-desk-manage create-user --email agent@example.com --name "Ana Agent" --role agent
"""

import argparse
import asyncio
import getpass
import logging
import sys
from typing import Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from property_desk.config import settings
from property_desk.database import engine as default_engine, AsyncSessionLocal, Base
from property_desk.models import User, UserRole
from property_desk.repositories.user import UserRepository

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


class DatabaseManager:
    """Runs schema and account management against one database."""

    def __init__(
        self,
        engine: Optional[AsyncEngine] = None,
        session_factory: Optional[async_sessionmaker] = None
    ):
        self.engine = engine or default_engine
        self.session_factory = session_factory or AsyncSessionLocal

    async def create_tables(self) -> None:
        """Create all tables that do not exist yet."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created successfully")

    def _require_disposable_environment(self, action: str) -> None:
        if not settings.is_development and not settings.is_testing:
            raise RuntimeError(f"Database {action} is only allowed in development or testing")

    async def drop_tables(self) -> None:
        """
        Drop every table.

        Raises:
            RuntimeError: Outside development or testing
        """
        self._require_disposable_environment("drop")

        logger.warning("Dropping all tables - all data will be lost!")
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        logger.info("Database tables dropped")

    async def reset_database(self) -> None:
        """
        Drop and recreate every table.

        Raises:
            RuntimeError: Outside development or testing
        """
        self._require_disposable_environment("reset")

        logger.warning("Resetting database - all data will be lost!")
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database reset completed")

    async def create_user(self, email: str, name: str, password: str, role: UserRole = UserRole.AGENT) -> User:
        """
        Provision a user account.

        Raises:
            ValueError: If the email is invalid or taken, or the password too short
        """
        async with self.session_factory() as session:
            repo = UserRepository(session)
            return await repo.create_user({
                "email": email,
                "name": name,
                "password": password,
                "role": role,
            })

    async def close(self) -> None:
        """Release pooled connections before the event loop closes."""
        await self.engine.dispose()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Property Desk database management")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("create-tables", help="Create database tables")

    drop_parser = subparsers.add_parser("drop-tables", help="Drop all tables (development only)")
    drop_parser.add_argument("--confirm", action="store_true", help="Confirm dropping all tables")

    reset_parser = subparsers.add_parser("reset", help="Drop and recreate all tables (development only)")
    reset_parser.add_argument("--confirm", action="store_true", help="Confirm database reset")

    user_parser = subparsers.add_parser("create-user", help="Create a user account")
    user_parser.add_argument("--email", required=True)
    user_parser.add_argument("--name", required=True)
    user_parser.add_argument(
        "--role",
        choices=[role.value for role in UserRole],
        default=UserRole.AGENT.value
    )
    user_parser.add_argument("--password", help="Prompted for when omitted")

    return parser


async def run_command(args: argparse.Namespace, manager: DatabaseManager) -> int:
    """Execute a parsed command; returns the process exit code."""
    if args.command == "create-tables":
        await manager.create_tables()

    elif args.command == "drop-tables":
        if not args.confirm:
            print("Dropping tables requires --confirm flag")
            return 1
        await manager.drop_tables()

    elif args.command == "reset":
        if not args.confirm:
            print("Database reset requires --confirm flag")
            return 1
        await manager.reset_database()

    elif args.command == "create-user":
        password = args.password or getpass.getpass("Password: ")
        user = await manager.create_user(args.email, args.name, password, UserRole(args.role))
        print(f"Created {user.role.value} {user.email} ({user.id})")

    return 0


async def _run(args: argparse.Namespace) -> int:
    manager = DatabaseManager()
    try:
        return await run_command(args, manager)
    finally:
        await manager.close()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI interface for database management."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        return asyncio.run(_run(args))
    except (ValueError, RuntimeError) as e:
        logger.error(f"Command failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
