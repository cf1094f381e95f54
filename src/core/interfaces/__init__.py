"""Interfaces del Core.

Por qué:
- El SDK (`core.api`) habla con una sesión abstracta (`OpenStackSession`).
- La implementación concreta (Keystone + httpx) queda en `adapters`.
"""
