"""
Shared Kernel Module
====================

Shared infrastructure used by the routing module and the application shell.

DO NOT add classification or routing business logic to the shared kernel.
"""
