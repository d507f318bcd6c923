"""
PRESENTATION LAYER - HTTP and WebSocket adapters (FastAPI).

Thin: builds commands/queries, calls handlers, maps results to DTOs. Domain
errors are translated centrally in errors.py.
"""
