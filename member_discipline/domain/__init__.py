"""Domain layer for member discipline.

Pure business logic: member model, penalty state, escalation policy and
permission gate. Nothing here imports from the other layers.
"""
