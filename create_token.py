"""Print an access token for an existing user.

Reads the user store configured through the environment (DATA_DIR,
JWT_SECRET, ...).  Handy for scripting against the API without going
through the login route.

Usage:
    python create_token.py --email admin@gyatt.local --days 365
"""
import argparse
import sys
from datetime import timedelta
from typing import List, Optional

from dotenv import load_dotenv

from gyatt_api.app.core.config import Settings
from gyatt_api.app.core.errors import StoreError
from gyatt_api.app.core.security import create_access_token, token_claims_for
from gyatt_api.app.core.store import USERS, build_store


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Issue an access token for a user.")
    ap.add_argument("--email", required=True, help="Email of an existing user")
    ap.add_argument("--days", type=int, help="Token lifetime in days (default: configured lifetime)")
    args = ap.parse_args(argv)

    settings = Settings()
    try:
        users = build_store(settings).load(USERS)
    except StoreError as exc:
        print(f"[!] Cannot read user store: {exc.message}", file=sys.stderr)
        return 1
    user = next((u for u in users if u.get("email") == args.email), None)
    if user is None:
        print(f"[!] No user found with email: {args.email}", file=sys.stderr)
        return 2

    expires = timedelta(days=args.days) if args.days else None
    print(create_access_token(token_claims_for(user), settings, expires_delta=expires))
    return 0


if __name__ == "__main__":
    load_dotenv()
    sys.exit(main())
