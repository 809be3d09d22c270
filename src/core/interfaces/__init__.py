"""Interfaces/abstracciones del Core.

Contratos (Protocol) que implementan los adaptadores concretos; el Core
depende de ellos y no de una implementación de almacenamiento en particular.
"""
