"""Meal domain.

Catalog meals, upcoming (crowd-voted) meals, likes, ratings and reviews.
"""
