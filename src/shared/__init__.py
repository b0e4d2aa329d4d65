"""
Shared Kernel Module
====================

Generic infrastructure used by every bounded context (accounts, tickets,
evaluations): logging, metrics export and the HTTP middleware stack.

No ticket, account or evaluation rules belong here.
"""

__version__ = "1.0.0"
