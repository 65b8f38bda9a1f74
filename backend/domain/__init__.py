"""Domain layer for BiteLog.

Entities, value objects, ports and errors of the meal-subscription backend,
decoupled from the HTTP surface and from the document store.
"""
