# Middleware package init
"""
Idea Box API: Middleware Package
================================

Middleware Chain:
    Request → [Request ID] → [Access Log] → [CORS] → Route Handler

    - RequestIDMiddleware: assigns X-Request-ID and stores it in a ContextVar
    - RequestLoggingMiddleware: one access log line per request, tagged with
      the request ID set above
"""
