"""
Accounts Module
===============

Bounded context for mobile app users.

Responsibilities:
- Login against bcrypt or legacy plaintext passwords
- Username / password updates from the profile screen
"""

__version__ = "1.0.0"
