"""
RecipeShare Backend - Middleware Package
========================================

Middleware chain:
    Request → [Request ID] → [Access Log] → [GZip] → [CORS] → Route Handler

The request ID is assigned first so the access log line and any error
envelope produced further down carry it.
"""
