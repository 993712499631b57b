"""
Test Suite for Grant Rebudget

Test Structure:
- unit/: Unit tests mirroring src/ package structure
- integration/: Configuration and CLI tests

Test Data:
All budgets and rates are synthetic.
"""
