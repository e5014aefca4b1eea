# ==== BUSINESS LOGIC PACKAGE ==== #

"""
Business logic package for domain rules and policies.

This package contains the pricing policy models, the packaged default
discount and tax policy, and the entity types used for code generation.
"""
