# ==== INTEGRATIONS PACKAGE ==== #

"""
Clients for the sibling services of the back-office system.
"""
