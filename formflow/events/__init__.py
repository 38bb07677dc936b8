"""
Formflow Events
===============

Hooks and the host callback surface of a form.
"""

from formflow.events.hooks import Hook, HookHandler, HookPriority
from formflow.events.notifier import ChangeNotifier

__all__ = [
    "Hook",
    "HookHandler",
    "HookPriority",
    "ChangeNotifier",
]
