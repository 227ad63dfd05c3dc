"""
Application use cases: movies, categories, users.

Cada caso de uso devuelve un resultado tipado (payload | error con código
estable); la capa HTTP traduce códigos a status en error_mapping.py.
"""
