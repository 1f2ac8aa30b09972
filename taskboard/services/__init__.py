"""Services package for the task board."""
