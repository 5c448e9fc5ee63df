"""
Quote Server Test Suite
=======================

This package contains tests for the Quote Server including:
- Unit tests for the quote store, page renderer, routes and utilities
- Integration tests running the server on a real socket
"""
