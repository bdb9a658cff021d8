"""Storefront management CLI.

Creates and drops database schemas for every domain and loads the sample
catalogue. Reuses the shared setup_db/drop_db utilities.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
    python src/manage.py seed       # Load sample products and the default admin
"""

import argparse
import sys

DOMAIN_NAMES = ["identity", "catalogue", "ordering"]


def _domains(names=None):
    from catalogue.domain import catalogue
    from identity.domain import identity
    from ordering.domain import ordering

    all_domains = {
        "identity": identity,
        "catalogue": catalogue,
        "ordering": ordering,
    }
    return {d: all_domains[d] for d in names} if names else all_domains


def setup_databases(domains=None):
    """Create database schemas for the specified (or all) domains."""
    from shared.utils.db import setup_db

    for name, domain in _domains(domains).items():
        print(f"Initializing {name} domain...")
        domain.init()
        print(f"Creating {name} database schema...")
        setup_db(domain)
        print(f"  {name} schema ready.")

    print("Done.")


def drop_databases(domains=None):
    """Drop database schemas for the specified (or all) domains."""
    from shared.utils.db import drop_db

    for name, domain in _domains(domains).items():
        print(f"Initializing {name} domain...")
        domain.init()
        print(f"Dropping {name} database schema...")
        drop_db(domain)
        print(f"  {name} schema dropped.")

    print("Done.")


def seed():
    """Load the sample catalogue and make sure the default admin exists."""
    from catalogue.seed import seed_catalogue
    from identity.user.registration import ensure_default_admin

    domains = _domains(["identity", "catalogue"])
    for domain in domains.values():
        domain.init()

    with domains["catalogue"].domain_context():
        added = seed_catalogue()
    print(f"  {len(added)} products added.")

    with domains["identity"].domain_context():
        admin_id = ensure_default_admin()
    print("  Default admin created." if admin_id else "  Default admin already present.")

    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="Storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    setup_parser = subparsers.add_parser("setup-db", help="Create all database tables")
    setup_parser.add_argument(
        "--domain",
        choices=DOMAIN_NAMES,
        nargs="*",
        help="Specific domain(s) to set up (default: all)",
    )

    drop_parser = subparsers.add_parser("drop-db", help="Drop all database tables")
    drop_parser.add_argument(
        "--domain",
        choices=DOMAIN_NAMES,
        nargs="*",
        help="Specific domain(s) to drop (default: all)",
    )

    subparsers.add_parser("seed", help="Load the sample catalogue and default admin")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_databases(args.domain)
    elif args.command == "drop-db":
        drop_databases(args.domain)
    elif args.command == "seed":
        seed()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
