import logging
import os
import sqlite3

from .errors import InvalidArgument, StorageFailure
from .models import EmailEntry

logger = logging.getLogger(__name__)

EMAILS_TABLE = "emails"


class Database:
    """
    Storage access for the ``emails`` table.

    Holds one connection for the lifetime of the process. The connection
    runs in autocommit mode and is shared between request threads, every
    method issues a single statement and leaves consistency to SQLite.
    """

    def __init__(self, path):
        self.path = path
        try:
            self.conn = self.connect(path)
        except (sqlite3.Error, OSError) as e:
            logger.error(f"Error opening database {path}: {e}")
            raise StorageFailure(str(e)) from e

    @staticmethod
    def connect(path):
        db_dir = os.path.dirname(path)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)
        return sqlite3.connect(path, check_same_thread=False, isolation_level=None)

    def close(self):
        self.conn.close()

    def _execute(self, action, query, params=(), fetch=None):
        try:
            cursor = self.conn.execute(query, params)
            if fetch == 'one':
                return cursor.fetchone()
            if fetch == 'all':
                return cursor.fetchall()
            return cursor
        except (sqlite3.Error, OverflowError) as e:
            # OverflowError: integers beyond SQLite's 64-bit range
            logger.error(f"Error {action}: {e}")
            raise StorageFailure(str(e)) from e

    def ensure_schema(self):
        """Create the emails table if it does not exist yet"""
        self._execute("creating emails table", f"""
            CREATE TABLE IF NOT EXISTS {EMAILS_TABLE} (
                id INTEGER PRIMARY KEY,
                email TEXT UNIQUE,
                confirmed_at INTEGER,
                opt_out INTEGER
            )
        """)
        logger.info("Emails table created/verified successfully")

    def ping(self):
        """Round-trip a trivial query, used by the health check"""
        return self._execute("pinging database", "SELECT 1", fetch='one')[0] == 1

    def create_email(self, email):
        """Insert a new subscriber, unconfirmed and opted in"""
        self._execute("creating email", f"""
            INSERT INTO {EMAILS_TABLE} (email, confirmed_at, opt_out)
            VALUES (?, 0, 0)
        """, (email,))

    def get_email(self, email):
        """
        Look up one subscriber by exact email.
        Returns None when no row matches, query errors raise StorageFailure.
        """
        row = self._execute("getting email", f"""
            SELECT id, email, confirmed_at, opt_out
            FROM {EMAILS_TABLE}
            WHERE email = ?
        """, (email,), fetch='one')

        if row is None:
            return None
        return EmailEntry.from_row(row)

    def update_email(self, entry):
        """
        Upsert a subscriber by id. When the email already exists only
        confirmed_at and opt_out are overwritten, the stored id is kept.
        """
        if entry.id is None:
            raise InvalidArgument("Id is required to update an email")
        if entry.confirmed_at is None:
            raise InvalidArgument("ConfirmedAt is required to update an email")

        confirmed_at = int(entry.confirmed_at.timestamp())
        opt_out = int(entry.opt_out)

        self._execute("updating email", f"""
            INSERT INTO {EMAILS_TABLE} (id, email, confirmed_at, opt_out)
            VALUES (?, ?, ?, ?)
            ON CONFLICT(email) DO UPDATE SET
                confirmed_at = ?, opt_out = ?
        """, (entry.id, entry.email, confirmed_at, opt_out, confirmed_at, opt_out))

    def delete_email(self, email):
        """Soft delete: mark the subscriber as opted out, no-op if absent"""
        self._execute("deleting email", f"""
            UPDATE {EMAILS_TABLE}
            SET opt_out = 1
            WHERE email = ?
        """, (email,))

    def get_email_batch(self, page, count):
        """
        One page of subscribers who have not opted out, ordered by id.
        Callers validate page and count, nothing is checked here.
        """
        rows = self._execute("getting email batch", f"""
            SELECT id, email, confirmed_at, opt_out
            FROM {EMAILS_TABLE}
            WHERE opt_out = 0
            ORDER BY id ASC
            LIMIT ? OFFSET ?
        """, (count, (page - 1) * count), fetch='all')

        return [EmailEntry.from_row(row) for row in rows]
