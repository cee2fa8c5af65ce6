"""
Domain Modules.

Each domain contains:
- handlers.py: API route handlers
- service.py: Business logic (search only; timelines and recent reuse it)
"""
