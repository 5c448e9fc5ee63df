"""
Home page module for the quote server.
Quote list storage, hostname lookup and HTML page rendering.
"""

from .quote_store import QuoteStore
from .hostname import resolve_hostname
from .renderer import PageRenderer, encode_page

__all__ = ['QuoteStore', 'resolve_hostname', 'PageRenderer', 'encode_page']
