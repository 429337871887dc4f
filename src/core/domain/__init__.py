"""Modelos e entidades do domínio.

Por que:
- Aqui vivem as estruturas de dados (Pydantic v2) trocadas com a API.
- O domínio não conhece HTTP nem CLI: só conceitos de filtros e boletins.
"""
