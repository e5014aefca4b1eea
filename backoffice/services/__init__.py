# ==== SERVICES PACKAGE ==== #

"""
Services package for business calculations and helpers.

This package contains the tiered financial calculator, the pricing policy
loader, unique code generation and field validation helpers.
"""
