"""Check a database configuration from the command line.

Reads a connector type and a JSON config file, validates the config and,
unless --validate-only is given, runs the live connection test and lists
tables (and the columns of one table when --table is given).

Usage:
  python3 scripts/check_connection.py postgresql ./pg.json
  python3 scripts/check_connection.py sqlserver ./mssql.json --validate-only
  python3 scripts/check_connection.py databricks ./dbx.json --table default.orders
"""

import argparse
import json
import logging
import sys
from uuid import uuid4

# Ensure compareflow is importable when run from project root
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def main() -> None:
    parser = argparse.ArgumentParser(description="Validate and test a CompareFlow connection config.")
    parser.add_argument("type", help="Connector type, e.g. postgresql, sqlserver, databricks")
    parser.add_argument("config", help="Path to a JSON file holding the connector config")
    parser.add_argument("--validate-only", action="store_true", help="Only parse the config")
    parser.add_argument("--table", default=None, help="List the columns of this table")
    parser.add_argument(
        "--show-connection-string",
        action="store_true",
        help="Print the rendered connection string (includes the password)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    from compareflow.connectors import (
        ConnectorError,
        default_registry,
        register_builtin_connectors,
    )
    from compareflow.models.schema import Connection
    from compareflow.services.connection_service import ConnectionService

    try:
        with open(args.config, encoding="utf-8") as fh:
            raw = json.load(fh)
    except (OSError, json.JSONDecodeError) as exc:
        print(f"Cannot read config file {args.config}: {exc}", file=sys.stderr)
        sys.exit(2)

    register_builtin_connectors()
    service = ConnectionService()
    print(f"Supported connectors: {', '.join(sorted(service.get_supported_connectors()))}")

    try:
        service.validate_connection_config(args.type, raw)
        print(f"Config OK for {args.type}")
        if args.show_connection_string:
            connector = default_registry.get(args.type)
            print(connector.build_connection_string(connector.parse_config(raw)))
        if args.validate_only:
            return

        connection = Connection(name="cli", type=args.type, config=raw, user_id=uuid4())
        service.test_connection(connection)
        print("Connection test successful")

        tables = service.get_tables(connection)
        print(f"\n=== Tables ({len(tables)}) ===")
        for name in tables:
            print(f"  {name}")

        if args.table:
            columns = service.get_columns(connection, args.table)
            print(f"\n=== Columns of {args.table} ({len(columns)}) ===")
            for col in columns:
                nullable = "NULL" if col.nullable else "NOT NULL"
                print(f"  {col.name:<32} {col.data_type:<24} {nullable}")
    except ConnectorError as exc:
        print(f"[{exc.kind.value}] {exc.message}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
