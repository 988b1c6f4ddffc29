"""Storefront Inventory database management CLI.

Creates and drops the inventory schema with the domain's own db utilities.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys


def _initialized_domain():
    from inventory.domain import inventory

    print("Initializing inventory domain...")
    inventory.init()
    return inventory


def setup_database():
    """Create the product, inventory log and alert tables."""
    from inventory.utils.db import setup_db

    domain = _initialized_domain()
    print("Creating inventory database schema...")
    setup_db(domain)
    print("Done.")


def drop_database():
    """Drop every inventory table."""
    from inventory.utils.db import drop_db

    domain = _initialized_domain()
    print("Dropping inventory database schema...")
    drop_db(domain)
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="Storefront Inventory database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
