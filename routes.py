"""
Unified Routes Module

Collects the route setup functions from the api/ directory so main.py has a
single place to import them from.
"""
from api.routes_countdown import setup_countdown_routes

__all__ = ['setup_countdown_routes']
