"""
Smart Tourism Backend — API Routes Package
============================================

Route Inventory:
    - users.py:        POST /api/register, POST /api/login,
                       GET /api/users/{email}, PUT /api/users/{email}/preferences
    - spots.py:        GET  /api/spots, GET /api/test
    - itineraries.py:  POST /api/itineraries, GET /api/itineraries/{emailId}
    - reviews.py:      POST /api/reviews, GET /api/reviews/{spotId}
    - health.py:       GET  /health

Routes stay thin: read the request, call a service, wrap the result.
"""
