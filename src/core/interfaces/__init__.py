"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan adaptadores concretos.
- Los servicios por recurso dependen del contrato, no de `TumblrClient`.
"""
