"""
Packages module.

Contains the service package structure:
- shared: Shared types and enums
- analytics: Tinybird pipe catalogue, client and result processing
- api: FastAPI application with domain-driven routers
"""
