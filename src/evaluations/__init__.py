"""
Evaluations Module
==================

Bounded context for the rating a user leaves once their ticket is closed.
"""

__version__ = "1.0.0"
