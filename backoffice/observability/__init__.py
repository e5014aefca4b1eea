# ==== OBSERVABILITY PACKAGE ==== #

"""
Logging, tracing and metrics for the back-office utilities.
"""
