"""
Test suite for the bookstore checkout

Contains:
- tests/unit/          : Unit tests for individual modules and the checkout flow
"""
