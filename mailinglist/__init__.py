"""
Mailing List
============

Subscriber registry for a mailing list, served as a JSON API over HTTP
and stored in SQLite.

Usage:
    from mailinglist import Database, create_app

    db = Database('list.db')
    db.ensure_schema()
    app = create_app(db)
"""

__version__ = '0.1.0'

from .core import Config, Database, EmailEntry
from .server import create_app

__all__ = ['Config', 'Database', 'EmailEntry', 'create_app']
