"""
Bootstrap the admin account from the command line.

Creates the key-value table if needed, then runs the same one-shot setup
as ``POST /api/auth/setup``. Fails if an admin already exists.

Usage:
    python scripts/bootstrap_admin.py --username root
    python scripts/bootstrap_admin.py --username root --password secret1

If --password is omitted, it is read interactively.
"""

import argparse
import asyncio
import getpass
import sys
from pathlib import Path

# Add backend directory to path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from navsite.core.database import async_session_maker, close_db, init_db
from navsite.core.exceptions import NavSiteError
from navsite.core.security import get_token_service
from navsite.repositories.credentials import CredentialStore
from navsite.services.auth_service import AuthService
from navsite.services.kv_store import SQLKeyValueStore


async def bootstrap_admin(username: str, password: str) -> int:
    """
    Create the admin account.

    Returns:
        Process exit code (0 on success, 1 on failure)
    """
    await init_db()
    try:
        service = AuthService(
            CredentialStore(SQLKeyValueStore(async_session_maker)),
            get_token_service(),
        )
        await service.setup(username, password)
    except NavSiteError as e:
        print(f"Setup failed: {e.message}", file=sys.stderr)
        return 1
    finally:
        await close_db()

    print(f"Admin account '{username}' created.")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Create the navigation site admin account")
    parser.add_argument("--username", required=True, help="Admin username")
    parser.add_argument("--password", help="Admin password (prompted if omitted)")
    args = parser.parse_args()

    password = args.password or getpass.getpass("Admin password: ")
    return asyncio.run(bootstrap_admin(args.username, password))


if __name__ == "__main__":
    sys.exit(main())
