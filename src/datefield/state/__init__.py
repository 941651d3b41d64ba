"""Section state engine.

Provides:
- FieldState / FieldConfig / FieldInput / FieldContext: immutable data
- reducer: pure operations returning Transition(state, notifications)
- FieldStateEngine: stateful facade delivering notifications to callbacks
- Single-date value managers

Python 3.13+.
"""

from . import reducer
from .engine import FieldStateEngine
from .managers import (
    ActiveDateManager,
    FieldValueManager,
    NewValue,
    SingleDateFieldValueManager,
    SingleDateValueManager,
    ValueManager,
)
from .models import (
    ALL_SECTION_TYPES,
    DATE_SECTION_TYPES,
    TIME_SECTION_TYPES,
    FieldConfig,
    FieldContext,
    FieldInput,
    FieldState,
    Notification,
    SelectedSectionsChanged,
    Transition,
    ValueChanged,
)

__all__ = [
    "ALL_SECTION_TYPES",
    "DATE_SECTION_TYPES",
    "TIME_SECTION_TYPES",
    "ActiveDateManager",
    "FieldConfig",
    "FieldContext",
    "FieldInput",
    "FieldState",
    "FieldStateEngine",
    "FieldValueManager",
    "NewValue",
    "Notification",
    "SelectedSectionsChanged",
    "SingleDateFieldValueManager",
    "SingleDateValueManager",
    "Transition",
    "ValueChanged",
    "ValueManager",
    "reducer",
]
