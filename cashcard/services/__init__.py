# Services package init
"""
Cash Card Service — Services Layer
====================================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).

Service Inventory:
    - CashCardService: owner-scoped card CRUD, paging and sorting
    - AuthService: HTTP Basic credential verification and role checks
    - UserDirectory (abstract) / InMemoryUserDirectory: credential lookup
    - BcryptPasswordService: password hashing and verification
"""
