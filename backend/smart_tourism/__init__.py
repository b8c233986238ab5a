"""
Smart Tourism Backend — Application Package
=============================================

REST backend for the Smart Tourism web client.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← validation, orchestration
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← documents + API contracts
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← async MongoDB client
    └─────────────────────────────────────┘

    Models describe stored documents (camelCase keys, as the client expects);
    schemas describe request and response bodies.
"""

__version__ = "1.0.0"
