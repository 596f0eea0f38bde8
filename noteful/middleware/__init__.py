"""
Noteful Backend — Middleware Package
=====================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    - Request ID runs first so the access log line can include it
    - Logging captures response status and duration on the way out

The per-route existence check is not middleware; it is a FastAPI
dependency (noteful.dependencies) because it needs the typed path id and
the request's database session.
"""
