"""
Utilities Package

Helper functions used across the catalog:
- formatting.py: Date formatting for display and form echo
"""
