"""
Create a user (e.g. the first admin) without going through the API. Run from project root:
  python -m kinship.scripts.create_user NAME PASSWORD [role] [--email EMAIL]
Example:
  python -m kinship.scripts.create_user admin your-secure-password Admin
"""
import argparse
import sys

from dotenv import load_dotenv

from kinship.core.config import get_settings
from kinship.core.database import Database
from kinship.core.security import PasswordHasher, TokenService
from kinship.models import Role
from kinship.services.auth import AuthenticationFlow
from kinship.services.errors import ServiceError
from kinship.services.users import UserRepository


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Kinship user.")
    parser.add_argument("name", help="User name (1-255 chars)")
    parser.add_argument("password", help="Password (1-128 chars)")
    parser.add_argument(
        "role",
        nargs="?",
        default=Role.VIEWER.value,
        choices=[role.value for role in Role],
    )
    parser.add_argument("--email", default=None)
    args = parser.parse_args(argv)

    load_dotenv()
    settings = get_settings()
    database = Database(settings.DATABASE_URL)
    db = database.SessionLocal()
    try:
        flow = AuthenticationFlow(
            UserRepository(db),
            PasswordHasher(rounds=settings.BCRYPT_ROUNDS),
            TokenService.from_settings(settings),
        )
        name = args.name.strip()
        flow.register(name, args.password, args.email)
        if args.role != Role.VIEWER.value:
            flow.update_account(name, args.password, email=args.email, role=args.role)
        print(f"Created user '{name}' with role '{args.role}'.")
        return 0
    except ServiceError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
        database.dispose()


if __name__ == "__main__":
    sys.exit(main())
