"""
API module for the quote server.
Provides the FastAPI-based HTTP surface: health check and home page.
"""

__all__ = ['app', 'routes', 'middleware']
