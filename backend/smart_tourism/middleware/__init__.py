"""
Smart Tourism Backend — Middleware Package
============================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    - Request ID first, so every log line of the request carries it
    - Logging captures the final status and duration on the way out
    - CORS answers preflight OPTIONS requests before routing
"""
