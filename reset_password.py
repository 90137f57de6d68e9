#!/usr/bin/env python3
"""
Reset a user's password in the JSON user store.

This script DOES NOT read or reveal any existing passwords. It simply sets a new bcrypt
hash for the specified user email and stamps ``updatedAt``.

Usage:
    python reset_password.py --data-dir ./database --email admin@gyatt.local --password "NewStrongPass!234"

If --password is omitted, you will be prompted to enter it securely.
"""

import argparse
import getpass
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from gyatt_api.app.core.config import Settings, resolve_path
from gyatt_api.app.core.errors import StoreError
from gyatt_api.app.core.security import hash_password
from gyatt_api.app.core.store import USERS, JSONFileBackend, RecordStore, now_iso


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Reset a user's password (JSON store).")
    ap.add_argument("--data-dir", help="Directory holding users.json (default: DATA_DIR, as the server uses it)")
    ap.add_argument("--email", required=True, help="User email to update")
    ap.add_argument("--password", help="New password. If omitted, you'll be prompted securely.")
    ap.add_argument("--rounds", type=int, default=10, help="bcrypt cost factor (default: 10)")
    args = ap.parse_args(argv)

    data_dir = Path(args.data_dir) if args.data_dir else resolve_path(Settings().data_dir)
    backend = JSONFileBackend(data_dir)
    if not backend.path_for(USERS).exists():
        print(f"[!] User store not found: {backend.path_for(USERS)}", file=sys.stderr)
        return 1

    new_password = args.password or getpass.getpass("Enter NEW password: ")
    if not new_password:
        print("[!] Empty password is not allowed.", file=sys.stderr)
        return 1

    hashed = hash_password(new_password, args.rounds)
    store = RecordStore(backend)
    try:
        with store.transaction(USERS) as users:
            user = next((u for u in users if u.get("email") == args.email), None)
            if user is not None:
                user["password"] = hashed
                user["updatedAt"] = now_iso()
    except StoreError as exc:
        print(f"[!] Cannot update user store: {exc.message}", file=sys.stderr)
        return 1
    if user is None:
        print(f"[!] No user found with email: {args.email}", file=sys.stderr)
        return 2

    print(f"[+] Password updated for user: {args.email}")
    return 0


if __name__ == "__main__":
    load_dotenv()
    sys.exit(main())
