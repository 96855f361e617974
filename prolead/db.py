import psycopg2
import psycopg2.extras
from prolead.secrets import DB_SECRET_NAME, get_secret

_connection = None


def get_connection():
    """Return a reusable database connection (connection reuse across Lambda invocations)."""
    global _connection
    if _connection and not _connection.closed:
        return _connection

    creds = get_secret(DB_SECRET_NAME)
    _connection = psycopg2.connect(
        host=creds["host"],
        port=creds["port"],
        user=creds["username"],
        password=creds["password"],
        dbname=creds["dbname"],
    )
    _connection.autocommit = False
    return _connection


def execute_query(query, params: tuple = None):
    """Run a read-only query and return the rows as a list of dicts."""
    conn = get_connection()
    try:
        with conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor) as cur:
            cur.execute(query, params)
            rows = cur.fetchall()
        conn.commit()
        return [dict(row) for row in rows]
    except Exception:
        conn.rollback()
        raise


def execute_write(query, params: tuple = None):
    """Run an INSERT/UPDATE/DELETE ... RETURNING and return the first row, if any."""
    conn = get_connection()
    try:
        with conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor) as cur:
            cur.execute(query, params)
            row = cur.fetchone()
        conn.commit()
        return dict(row) if row else None
    except Exception:
        conn.rollback()
        raise


def execute_transaction(statements):
    """Run several (query, params) statements atomically."""
    conn = get_connection()
    try:
        with conn.cursor() as cur:
            for query, params in statements:
                cur.execute(query, params)
        conn.commit()
    except Exception:
        conn.rollback()
        raise
