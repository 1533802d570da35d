# Middleware package init
"""
SnippetBoard Backend — Middleware Package
==========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Post Throttle] → [Access Log] → [GZip] → [CORS] → Route

    - Request ID first: every later log line and error body carries the
      correlation id, and unexpected exceptions are answered here as 500s
    - Post Throttle next: excess POSTs are turned away before any work
    - Access Log: status and duration, measured around the rest of the chain
"""
