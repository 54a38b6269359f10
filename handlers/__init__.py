"""
handlers/ - Presentation Layer
================================
FastAPI routers. Each endpoint parses the request, delegates to the
appropriate Service, and shapes the JSON response through ``row_mapper``.
No business logic lives here; domain errors are turned into HTTP
responses by the exception handlers registered in ``main.py``.
"""
