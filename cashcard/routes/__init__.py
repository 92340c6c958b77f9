# Routes package init
"""
Cash Card Service — API Routes Package
========================================

Route Inventory:
    - cashcards.py: POST   /cashcards               (create)
                    GET    /cashcards               (paged, sorted list)
                    GET    /cashcards/{id}          (fetch one)
                    PUT    /cashcards/{id}          (replace amount)
                    DELETE /cashcards/{id}          (delete)
    - health.py:    GET    /health                  (service health check)

Routes stay thin: read the request, call the service with the caller's
username, set the status code and headers.
"""
