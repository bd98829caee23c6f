# Middleware package init
"""
Catalog Backend - Middleware Package
======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: correlation ID for logging and tracing
    2. Logging: method, path, status and duration, tagged with the request ID
    3. GZip / CORS: applied by FastAPI's built-in middleware

    Responses pass back through the chain in reverse order, so the request
    ID header is attached and the access log sees the final status code.
"""
