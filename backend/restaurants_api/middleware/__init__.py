# Middleware package init
"""
Restaurants API — Middleware Package
=====================================

Middleware Chain (request direction):
    Request → [Request ID] → [Access Log] → [GZip] → [CORS] → Route Handler

    - Request ID first, so the access log line and every handler log line
      share the same correlation id
    - Access log measures the full handler duration and final status code
"""
