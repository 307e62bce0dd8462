# Services package init
"""
Notepad Backend — Services Layer
=================================

What:  Business logic layer sitting between routes (HTTP) and the store (persistence).
Why:   Separation of concerns — routes handle HTTP, services handle note rules.
How:   Services receive the request's database session, apply the rules, and
       return response models. They hold no state of their own.

Service Inventory:
    - NoteService: CRUD, archive toggling, search, date filters, statistics

Why services are separate from routes:
    1. Testability: Services can be unit-tested without HTTP overhead
    2. Reusability: The seeding routine and tests drive the same code paths
    3. Single responsibility: Routes handle HTTP; services handle logic
"""
