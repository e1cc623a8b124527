"""
FlyBook Backend: Middleware Package
=====================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    Request ID runs first so every log line (including the access log written
    by the logging middleware) carries the same correlation ID.
"""
