"""Routing — path normalization, template compilation, first-match lookup.

Tables are built once during startup (or on reload) and treated as
read-only afterwards.
"""
