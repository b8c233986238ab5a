"""
Smart Tourism Backend — Services Layer
========================================

What:  Business logic between routes (HTTP) and the database (persistence).
How:   Each service is a module-level singleton whose methods take the
       request's Database as their first argument.

Service Inventory:
    - UserService:       registration, login, profile, preferences
    - SpotService:       spot catalog and database diagnostics
    - ItineraryService:  per-user itinerary upsert and fetch
    - ReviewService:     review submission (drops the spot from the itinerary)
                         and per-spot listing
"""
