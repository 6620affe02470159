"""
Create a user with any role (e.g. the first admin). Run from project root:
  python -m pulsevote.scripts.create_user USERNAME PASSWORD EMAIL [role]
Example:
  python -m pulsevote.scripts.create_user admin your-secure-password admin@example.com admin

This is the only way to grant moderator or admin; the API never changes roles.
"""
import argparse
import sys

from dotenv import load_dotenv
from pydantic import ValidationError

from pulsevote.core.config import Settings, get_settings
from pulsevote.core.database import build_engine, build_session_factory
from pulsevote.core.security import hash_password
from pulsevote.models.user import ROLE_VALUES, User
from pulsevote.repositories.users import UserRepository
from pulsevote.schemas.auth import RegisterRequest


def create_user(
    settings: Settings,
    username: str,
    password: str,
    email: str,
    role: str = "user",
) -> tuple[int, str]:
    """Validate and insert one user. Returns (exit_code, message)."""
    if role not in ROLE_VALUES:
        return 1, f"Unknown role '{role}'."
    try:
        body = RegisterRequest(username=username, password=password, email=email)
    except ValidationError as e:
        return 1, "; ".join(str(err.get("msg")) for err in e.errors())

    engine = build_engine(settings)
    db = build_session_factory(engine)()
    try:
        repo = UserRepository(db)
        existing = repo.find_conflict(body.username, body.email)
        if existing:
            return 1, f"User '{existing.username}' already holds that username or email."
        repo.add(
            User(
                username=body.username,
                email=body.email,
                password_hash=hash_password(body.password, rounds=settings.BCRYPT_ROUNDS),
                role=role,
                is_active=True,
                login_attempts=0,
            )
        )
        return 0, f"Created user '{body.username}' with role '{role}'."
    finally:
        db.close()
        engine.dispose()


def main() -> int:
    parser = argparse.ArgumentParser(description="Create a PulseVote user with a chosen role.")
    parser.add_argument("username", help="Username (3-30 chars)")
    parser.add_argument("password", help="Password (6-128 chars)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("role", nargs="?", default="user", choices=list(ROLE_VALUES))
    args = parser.parse_args()

    load_dotenv()
    code, message = create_user(
        get_settings(), args.username, args.password, args.email, args.role
    )
    print(message, file=sys.stderr if code else sys.stdout)
    return code


if __name__ == "__main__":
    sys.exit(main())
