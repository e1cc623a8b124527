"""
FlyBook Backend: Services Layer
=================================

What:  Business logic between routes (HTTP) and database (persistence).
How:   Services take the request's AsyncSession plus plain arguments and
       return Pydantic response models, raising FlyBookError subclasses on failure.

Service Inventory:
    - FlightService: flight search (filter-and-fetch resolver) and CRUD
    - CatalogService: read-only packages, destinations, hotels
    - identifiers.parse_identifier: UUID validation shared by all keyed operations
"""
