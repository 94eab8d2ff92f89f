"""Client package for the Microsoft Graph key-set API.

Provides HTTP client setup and token management:
- ``graph_client``: Shared authenticated request helper and client factory
- ``token_manager``: Bearer token lifecycle management with automatic refresh
"""
