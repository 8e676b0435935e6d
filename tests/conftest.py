"""
Shared fixtures. pytest-flask provides the ``client`` fixture from ``app``.

Install test dependencies with: pip install -e ".[dev]"
"""

import os
import shutil
import tempfile

import pytest

from mailinglist.core.database import Database
from mailinglist.server import create_app


@pytest.fixture
def tmp_db_dir():
    """Create a temporary directory for test databases, cleaned up after."""
    d = tempfile.mkdtemp(prefix="mailinglist-test-")
    yield d
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def db(tmp_db_dir):
    """Fresh database with the emails table in place."""
    database = Database(os.path.join(tmp_db_dir, "list.db"))
    database.ensure_schema()
    yield database
    database.close()


@pytest.fixture
def app(db):
    app = create_app(db, cors_origins=[])
    app.config["TESTING"] = True
    return app
