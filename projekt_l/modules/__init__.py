"""
Feature modules for the Projekt L progression engine.

- shared: constants, formulas, domain exceptions, service base class
- progression: XP resolver, derived stats, progression strategies, service
"""
