"""
Tickets Module
==============

Bounded context for support tickets filed from the mobile app.

Responsibilities:
- Create tickets with an AI-suggested priority
- List tickets by owner or by assigned technician
- Move tickets through En proceso / Cerrado / Cancelado
"""

__version__ = "1.0.0"
