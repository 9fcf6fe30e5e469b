"""Cafeteria API.

This package contains the backend of a cafeteria ordering platform: a
relational-database-backed REST API for customers, sellers and administrators,
plus a small async client for consuming it.

High-level architecture
-----------------------

The codebase follows a conventional three-tier layout:

- **Persistence**: SQLModel entities and async repositories in
  ``cafeteria_api.core.database``.
- **Services**: business rules (cart merging, checkout, order status flow,
  dining table reconciliation) in ``cafeteria_api.server.services``.
- **API**: FastAPI routers under ``cafeteria_api.server.api.v1``.

Core subpackages
----------------

- ``cafeteria_api.core``:

  - Entities, repositories and I/O schemas.
  - Password hashing and JWT helpers.
  - Logging, monitoring and the shared TTL response cache.

- ``cafeteria_api.server``:

  - The FastAPI application, configuration, exception handlers and middleware.

- ``cafeteria_api.client``:

  - ``CafeteriaApiClient``, an httpx-based client with response caching and
    in-flight request de-duplication.

- ``cafeteria_api.tools``:

  - ``arch_lint``, a layer-import checker run as ``cafeteria-arch-lint``.
"""

__version__ = "1.0.0"
