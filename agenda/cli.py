"""
Administrative command line.

Usage:
    agenda create-admin --email admin@example.com --name Ada --lastname Lovelace

The password is read from the AGENDA_ADMIN_PASSWORD environment variable or
prompted for interactively.
"""

import argparse
import asyncio
import getpass
import os
import sys
from uuid import UUID

from pydantic import ValidationError

from agenda.core.authorization import Principal
from agenda.database import async_session_maker, engine
from agenda.logger import configure_logging
from agenda.models import Role
from agenda.schemas import UserCreate
from agenda.services import user_service
from agenda.services.errors import ServiceError

# Acts with admin rights when no account exists yet to issue a token.
SYSTEM_PRINCIPAL = Principal(id=UUID(int=0), role=Role.ADMIN)


async def create_admin(email: str, password: str, name: str, lastname: str) -> int:
    user_data = UserCreate(email=email, password=password, name=name, lastname=lastname, role=Role.ADMIN)
    try:
        async with async_session_maker() as session:
            user = await user_service.create_user(session, user_data, SYSTEM_PRINCIPAL)
    except ServiceError as exc:
        print(f"❌ {exc}")
        return 1
    finally:
        await engine.dispose()

    print(f"✅ Created admin {user.email} ({user.id})")
    return 0


def cmd_create_admin(args: argparse.Namespace) -> int:
    password = os.getenv("AGENDA_ADMIN_PASSWORD") or getpass.getpass("Password: ")
    try:
        return asyncio.run(create_admin(args.email, password, args.name, args.lastname))
    except ValidationError as exc:
        print(f"❌ Invalid input:\n{exc}")
        return 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="agenda", description=__doc__.split("\n")[1])
    subparsers = parser.add_subparsers(dest="command", required=True)

    create = subparsers.add_parser("create-admin", help="Create an ADMIN account")
    create.add_argument("--email", required=True)
    create.add_argument("--name", required=True)
    create.add_argument("--lastname", required=True)
    create.set_defaults(func=cmd_create_admin)

    return parser


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
