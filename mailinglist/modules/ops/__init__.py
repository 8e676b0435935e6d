"""
Ops Module
==========

Public /health endpoint for uptime monitors (no auth).
Reports whether the subscriber database answers queries.

Usage:
    from mailinglist.modules.ops import create_health_bp

    app.register_blueprint(create_health_bp(db))  # Registers at /health
"""

from .routes import create_health_bp

__all__ = ['create_health_bp']
