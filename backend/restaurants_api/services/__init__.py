# Services package init
"""
Restaurants API — Services Layer
=================================

What:  Business logic between routes (HTTP) and the database (persistence).
How:   Services receive the request's AsyncSession, query/modify through the
       ORM, and return Pydantic response models or raise application
       exceptions.

Service Inventory:
    - CategoryService:   CRUD over categories
    - RestaurantService: CRUD + name search, top rated, by category
    - LoginService:      credential check and token issuance
"""
