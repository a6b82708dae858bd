"""
Quote API Test Suite
====================

This package contains tests for the Quote API including:
- Unit tests for the catalog, selector, configuration and routes
- Integration tests for concurrent and config-driven serving
- End-to-end tests against a real uvicorn server
"""
