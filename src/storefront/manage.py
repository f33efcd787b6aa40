"""Storefront database management CLI.

Creates and drops the database schema for the storefront domain. Only SQL
providers (sqlite, postgresql) need this; the default memory provider is a
no-op.

Usage:
    PROTEAN_ENV=production storefront-manage setup-db   # Create all tables
    PROTEAN_ENV=production storefront-manage drop-db    # Drop all tables
    PROTEAN_ENV=production storefront-manage grant-admin owner@example.com
"""

import argparse
import sys


def setup_databases():
    """Create the storefront database schema."""
    from storefront.domain import storefront
    from storefront.utils.db import setup_db

    print("Initializing storefront domain...")
    storefront.init()
    print("Creating storefront database schema...")
    touched = setup_db(storefront)
    if touched:
        print(f"  schema ready on: {', '.join(touched)}")
    else:
        print("  no SQL provider configured, nothing to create.")

    print("Done.")


def drop_databases():
    """Drop the storefront database schema."""
    from storefront.domain import storefront
    from storefront.utils.db import drop_db

    print("Initializing storefront domain...")
    storefront.init()
    print("Dropping storefront database schema...")
    touched = drop_db(storefront)
    if touched:
        print(f"  schema dropped on: {', '.join(touched)}")
    else:
        print("  no SQL provider configured, nothing to drop.")

    print("Done.")


def grant_admin_role(email):
    """Give ``email`` the admin role, registering the account if needed."""
    from storefront.domain import storefront
    from storefront.user.registration import grant_admin

    print("Initializing storefront domain...")
    storefront.init()
    with storefront.domain_context():
        if grant_admin(email):
            print(f"  {email} is now an admin.")
        else:
            print(f"  {email} was already an admin.")

    print("Done.")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Storefront database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    grant_parser = subparsers.add_parser("grant-admin", help="Give an account the admin role")
    grant_parser.add_argument("email", help="Email address of the account")

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_databases()
    elif args.command == "drop-db":
        drop_databases()
    elif args.command == "grant-admin":
        grant_admin_role(args.email)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
