"""User domain module.

Users are keyed by email. Identity itself is verified by an external provider;
this context only stores profile, role, badge and meal counters.
"""
