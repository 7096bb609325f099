"""
Studio Desk
===========

Support-ticket classification and routing for a fitness studio chain.
"""

__version__ = "1.0.0"
