"""
Mailing List Modules
====================

HTTP-facing blueprints. Each module exposes a factory that takes the
shared Database handle and returns a fresh Blueprint.
"""
