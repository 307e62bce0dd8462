# Routes package init
"""
Notepad Backend — API Routes Package
=====================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - notepads.py: /notepads CRUD, toggle-archive, search, date filters, stats
    - health.py:   GET /notepads/health (liveness), GET /health (readiness)

Design Principle:
    Routes should be THIN — they handle HTTP concerns only:
    - Extract data from request (path, query params, body)
    - Call the appropriate service
    - Format the response with correct status code

    Business logic belongs in services, not routes.
"""
