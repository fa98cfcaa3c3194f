"""
Core domain models, contracts, and error taxonomy.

This module contains the foundational building blocks that are independent
of the catalog file and of the checkout flow.
"""
