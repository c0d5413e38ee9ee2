"""
PostgreSQL repository adapter - Implements AccountRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

Uniqueness and the single verified transition are enforced by the
database rather than by read-then-write checks in Python:

1. **INSERT ... ON CONFLICT (email) DO NOTHING**: create_account never
   overwrites an existing row. rowcount tells the caller whether the
   insert happened.

2. **UPDATE ... WHERE verified = FALSE**: mark_verified applies the
   UNVERIFIED -> VERIFIED transition at most once, even under
   concurrent verification of the same account.
"""

import logging
from pathlib import Path

from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

from mailgate.domain.ports import Account

logger = logging.getLogger(__name__)

_ACCOUNT_COLUMNS = """
    email, name, password_hash, pending_token, verified,
    public_key, private_key, verified_at
"""


class PostgresAccountRepository:
    """
    Implements AccountRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def create_account(self, account: Account) -> bool:
        """
        Insert a new unverified account.

        The PRIMARY KEY on email ensures no race conditions between
        concurrent registrations of the same address.

        Args:
            account: Account with normalized email and hashed password

        Returns:
            True if inserted, False if the email is already registered
        """
        sql = """
            INSERT INTO accounts (email, name, password_hash, pending_token, verified,
                                  public_key, private_key, created_at)
            VALUES (%s, %s, %s, %s, FALSE, %s, %s, NOW())
            ON CONFLICT (email) DO NOTHING
        """

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(
                sql,
                (
                    account.email,
                    account.name,
                    account.password_hash,
                    account.pending_token,
                    account.public_key,
                    account.private_key,
                ),
            )
            conn.commit()
            return cursor.rowcount == 1

    def find_by_email(self, email: str) -> Account | None:
        """
        Fetch an account by normalized email.

        Returns:
            Account, or None if not found
        """
        sql = f"SELECT {_ACCOUNT_COLUMNS} FROM accounts WHERE email = %s"

        with self._pool.connection() as conn, conn.cursor(row_factory=dict_row) as cursor:
            cursor.execute(sql, (email,))
            row = cursor.fetchone()

        if row is None:
            return None
        return Account(**row)

    def mark_verified(self, email: str) -> bool:
        """
        Transition an account from unverified to verified.

        Returns:
            True if this call flipped the flag, False if the account is
            missing or was already verified
        """
        sql = """
            UPDATE accounts
            SET verified = TRUE, verified_at = NOW()
            WHERE email = %s AND verified = FALSE
        """

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(sql, (email,))
            conn.commit()
            return cursor.rowcount == 1


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: mailgate/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning("Migrations directory not found: %s", migrations_dir)
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info("Running %d migration(s)", len(sql_files))

    for sql_file in sql_files:
        logger.info("Executing migration: %s", sql_file.name)
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info("Migration complete: %s", sql_file.name)
        except Exception as e:
            logger.error("Migration failed: %s - %s", sql_file.name, e)
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
