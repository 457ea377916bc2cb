"""Composable Validators: priority-ordered, short-circuiting field validation.

Validation rules are small independent units registered per input-type tag.
Adding a rule means registering a new unit; the orchestrator that runs them
never changes.
"""

__all__ = [
    "__version__",
]

__version__ = "0.1.0"
