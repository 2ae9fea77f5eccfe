#!/usr/bin/env python3
"""
Issue an access token for an existing user.

Handy for calling authenticated endpoints from curl or Swagger UI
without going through the login endpoint.

Usage:
    python create_token.py --user-id 1 --days 30
"""

import argparse
import sys

from restroom_finder_api.app.core.db import init_db, transaction
from restroom_finder_api.app.core.security import create_user_token
from restroom_finder_api.app.repositories.user_repository import UserRepository


def main() -> None:
    ap = argparse.ArgumentParser(description="Issue a bearer token for a user.")
    ap.add_argument("--user-id", type=int, required=True, help="ID of the user the token is issued for")
    ap.add_argument("--days", type=int, default=1, help="Token lifetime in days (default: 1)")
    args = ap.parse_args()

    init_db()
    with transaction() as conn:
        user = UserRepository(conn).find_by_id(args.user_id)
    if user is None:
        print(f"[!] No user with id {args.user_id}", file=sys.stderr)
        sys.exit(2)

    print(create_user_token(user.id, expires_delta=args.days * 24 * 60 * 60))


if __name__ == "__main__":
    main()
