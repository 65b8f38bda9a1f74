"""Meal request domain.

Users with an active membership request catalog meals; admins serve them.
"""
