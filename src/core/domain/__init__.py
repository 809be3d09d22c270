"""Modelos y entidades del dominio.

Estructuras puras (Pydantic v2) y errores del tracker. El dominio no conoce
la CLI, el reloj del sistema ni el fichero JSON: solo intervalos y estado.
"""
