"""Unit tests for centralized database layer.

This package contains comprehensive unit tests for the new centralized
database layer in cafeteria_api/core/database, including:

- Entity model validation tests (SQLModel)
- Repository query tests
- Reference data seeding tests
- Edge case and error handling tests

All tests use in-memory SQLite or mocks to ensure fast execution
without requiring external database services.
"""
