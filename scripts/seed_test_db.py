"""Seed a PostgreSQL test database with a source/target pair of schemas.

Creates two schemas holding the same tables with slightly different data,
the shape a CompareFlow validation points at:
  src  — customers, orders
  tgt  — customers, orders (one customer missing, one order amount changed)

The PostgreSQL integration tests read these tables.

Usage:
  python3 scripts/seed_test_db.py [--host localhost] [--port 5433] \
      [--dbname compareflow_sample] [--user compareflow] [--password compareflow]
"""

import argparse
import sys

import psycopg2
from psycopg2.extensions import connection as PgConnection


# ---------------------------------------------------------------------------
# DDL helpers
# ---------------------------------------------------------------------------

TABLES = """
CREATE TABLE {schema}.customers (
    customer_id   INT PRIMARY KEY,
    email         VARCHAR(255) NOT NULL,
    full_name     VARCHAR(200),
    created_at    TIMESTAMP NOT NULL DEFAULT NOW()
);

CREATE TABLE {schema}.orders (
    order_id      INT PRIMARY KEY,
    customer_id   INT NOT NULL REFERENCES {schema}.customers(customer_id),
    amount        NUMERIC(12, 2) NOT NULL,
    note          TEXT
);
"""

CUSTOMERS = [
    (1, "ada@example.com", "Ada Lovelace"),
    (2, "alan@example.com", "Alan Turing"),
    (3, "grace@example.com", None),
]

ORDERS = [
    (10, 1, "120.00", "first order"),
    (11, 1, "35.50", None),
    (12, 2, "99.99", "gift"),
]


def _load(cur, schema: str, customers: list, orders: list) -> None:
    cur.execute(TABLES.format(schema=schema))
    cur.executemany(
        f"INSERT INTO {schema}.customers (customer_id, email, full_name) VALUES (%s, %s, %s)",
        customers,
    )
    cur.executemany(
        f"INSERT INTO {schema}.orders (order_id, customer_id, amount, note) VALUES (%s, %s, %s, %s)",
        orders,
    )


def run(conn: PgConnection) -> None:
    cur = conn.cursor()

    print("Dropping existing schemas (if any)...")
    for schema in ("src", "tgt"):
        cur.execute(f"DROP SCHEMA IF EXISTS {schema} CASCADE")
        cur.execute(f"CREATE SCHEMA {schema}")
    conn.commit()

    print("Loading src...")
    _load(cur, "src", CUSTOMERS, ORDERS)
    print("Loading tgt...")
    _load(
        cur,
        "tgt",
        CUSTOMERS[:2],
        [ORDERS[0], (11, 1, "36.50", None), ORDERS[2]],
    )
    conn.commit()

    cur.execute("""
        SELECT schemaname, COUNT(*)
        FROM pg_catalog.pg_tables
        WHERE schemaname IN ('src', 'tgt')
        GROUP BY schemaname
        ORDER BY schemaname
    """)
    rows = cur.fetchall()
    cur.close()

    print("\n=== Seed Summary ===")
    for schema, cnt in rows:
        print(f"  {schema}: {cnt} tables")
    print("Done.\n")


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed a PostgreSQL database for CompareFlow tests.")
    parser.add_argument("--host",     default="localhost")
    parser.add_argument("--port",     type=int, default=5433)
    parser.add_argument("--dbname",   default="compareflow_sample")
    parser.add_argument("--user",     default="compareflow")
    parser.add_argument("--password", default="compareflow")
    args = parser.parse_args()

    dsn = f"host={args.host} port={args.port} dbname={args.dbname} user={args.user} password={args.password}"
    print(f"Connecting to PostgreSQL at {args.host}:{args.port}/{args.dbname}...")
    try:
        conn = psycopg2.connect(dsn)
    except Exception as exc:
        print(f"Connection failed: {exc}", file=sys.stderr)
        sys.exit(1)

    try:
        run(conn)
    finally:
        conn.close()


if __name__ == "__main__":
    main()
