"""
Services module for business logic separation.

This module contains the in-memory URL registry and the service classes
that sit between it and the API endpoints.
"""
