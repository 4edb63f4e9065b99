"""Middleware for the request chain.

- ``sessions.SessionMiddleware``: signed-cookie sessions
- ``gate.SessionGate``: sends anonymous clients back to the login page
"""
