# ==== LOGISTICS BACK-OFFICE PACKAGE ==== #

"""
Utility modules for the logistics back-office system.

Provides the tiered financial calculator, pricing policy loading, unique
code generation, field validation and the HTTP client for the peer order
and invoice services.
"""

__version__ = "1.0.0"
