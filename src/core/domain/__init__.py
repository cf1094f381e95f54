"""Modelos del dominio.

Por qué:
- Modelos de respuesta de cada servicio y el perfil de conexión (Pydantic v2).
- El dominio no conoce HTTP ni la CLI: solo la forma de los recursos.
"""
