"""
Server-wide constants.

Values that shape the public HTTP surface and are not meant to be
overridden through the environment.
"""

PROJECT_NAME = "Cafeteria API"
API_V1_STR = "/api/v1"
API_VERSION = "1.0.0"
SCHEMA_VERSION = "v1"
