"""
Escala

Volunteer roster for recurring Sunday and Wednesday services: a team list,
a monthly grid of two-person slots and an optimistic sync with a table store.
"""

__version__ = "1.0.0"
