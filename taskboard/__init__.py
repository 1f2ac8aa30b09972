"""Task board: validation and list reconciliation for a task-management client."""

__version__ = "1.0.0"
