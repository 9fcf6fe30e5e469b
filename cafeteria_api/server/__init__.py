"""
Cafeteria API Server Package.

This package contains the web server implementation for the cafeteria ordering platform.
It includes the API definition, configuration, service logic and cross-cutting concerns.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    core: Server configuration and constants.
    services: Business logic and request dependencies.
    exception_handlers: Mapping of domain errors to HTTP responses.
    middleware: Request tracing middleware.
"""
