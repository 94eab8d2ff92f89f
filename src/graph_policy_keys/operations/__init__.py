"""Operations against Microsoft Graph trust framework resources.

Modules:
- ``key_sets``: create key sets, upload secrets, and fetch key sets
"""
