# Middleware package init
"""
Cash Card Service — Middleware Package
========================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → Route Handler

    1. Request ID: generate correlation ID for logging and tracing
    2. Logging: log request details with the generated request ID and the
       authenticated username (set by the auth dependency)

Authentication is deliberately not middleware: it is a route dependency so
that /health stays open and handlers receive the principal directly.
"""
