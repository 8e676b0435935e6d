"""
JSON API Module
===============

Subscriber CRUD over HTTP. Request and response bodies are JSON.

Routes (mounted at /email):
- POST /create    -- {Email} -> created record
- GET  /get       -- {Email} -> record or null
- GET  /get_batch -- {Page, Count} -> array of opted-in records
- PUT  /update    -- {Id, Email, ConfirmedAt, OptOut} -> updated record
- POST /delete    -- {Email} -> record after opt-out

Failures answer with {"Err": "<message>"}.

Usage:
    from mailinglist.modules.jsonapi import create_jsonapi_bp

    app.register_blueprint(create_jsonapi_bp(db))
"""

from .routes import create_jsonapi_bp

__all__ = ['create_jsonapi_bp']
