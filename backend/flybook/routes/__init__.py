"""
FlyBook Backend: API Routes Package
=====================================

Route Inventory:
    - flights.py:  GET/POST /flights, GET/PUT/DELETE /flights/{id}
    - catalog.py:  GET /packages, /destinations, /hotels and /{collection}/{id}
    - health.py:   GET / (banner), GET /health

Routes stay thin: pull data out of the request, call a service, return its
result. Status codes for failures come from the exception handlers in main.py.
"""
