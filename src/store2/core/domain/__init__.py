"""Modelos y entidades del dominio.

Por qué:
- Aquí viven los modelos del wire (Pydantic v2): catálogos, productos, jobs,
  disponibilidades y el tri-estado de los updates.
- El dominio no conoce HTTP ni la CLI: solo la forma de los datos de la API.
"""
