"""
API module for the quote API.
Provides the FastAPI application that serves random quotes as JSON.
"""

__all__ = ['app', 'routes', 'models', 'middleware']
