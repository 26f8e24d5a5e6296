"""
Gatehouse - Authentication Session Service

Creates, validates and extends user sessions held in a TTL key-value store.

Architecture:
- Each module is self-contained with clear interfaces
- Modules are completely replaceable
- No module knows the internals of another
- All communication through defined interfaces

Modules:
- session: Session lifecycle (create, check, extend)
- storage: TTL key-value persistence abstraction
- api: REST API models
"""

__version__ = "1.0.0"
