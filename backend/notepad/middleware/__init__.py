# Middleware package init
"""
Notepad Backend — Middleware Package
=====================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Rate Limit] → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Rate Limit FIRST: Reject abusive requests before any processing
    2. Request ID: Generate correlation ID for logging and error bodies
    3. Logging: Log request details with the generated request ID

    Responses travel back through the same chain in reverse, so the request
    ID header and the logged status/duration reflect the final response.
"""
