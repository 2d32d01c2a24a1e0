"""
Projekt L Progression Test Suite
================================

Test Organization
-----------------
- tests/unit/          : Fast unit tests for formulas, resolver, stats, config, logging
- tests/unit/domain/   : Domain model tests (value objects, Character aggregate)

Testing Philosophy
------------------
- Unit tests: Fast, isolated, test progression rules
- Use pytest markers to categorize and selectively run tests
- Follow AAA pattern: Arrange, Act, Assert
"""
