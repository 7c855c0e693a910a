"""
Bakebox Signals.

Signals:
    execution_logged: A recipe got a new execution log entry
"""

from django.dispatch import Signal

# Recipe baked and journaled
# Sent by Recipe.add_log()
# Args: recipe, log
execution_logged = Signal()

__all__ = ["execution_logged"]
