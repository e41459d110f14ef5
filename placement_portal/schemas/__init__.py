"""
Schemas module - Request/Response schemas for API endpoints.

Field aliases match the camelCase names stored in MongoDB.
"""
