"""Routing — pattern compilation and the ordered route registry.

Routes are compiled once at registration and matched in registration
order.
"""
