"""
Service layer for the Cafeteria API server.

Services compose the repositories of one request session and enforce the
domain rules. They raise ``cafeteria_api.core.errors`` exceptions, which the
server's exception handlers render as JSON.
"""
