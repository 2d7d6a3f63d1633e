# Routes package init
"""
Restaurants API — API Routes Package
=====================================

Route Inventory:
    - categories.py:  /api/categories           (CRUD)
    - restaurants.py: /api/restaurants          (CRUD + SearchByName, TopRated, ByCategory)
    - login.py:       POST /api/login           (token issuance)
    - health.py:      GET  /health              (service health check)

Routes are thin: they pull parameters out of the request, call a service,
and set status codes and headers. Business rules live in services.
"""
