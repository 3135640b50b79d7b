"""Activity store package.

- schema.py: Table definition
- query.py: Parameterized WHERE clause builder
- context.py: Cancellation/deadline token for operations
- core.py: Main ActivityStore class with connection and transaction management
- activities.py: Create, list and get operations
"""

from slash_activity.store.context import OperationContext
from slash_activity.store.core import ActivityStore
from slash_activity.store.query import WhereClause
from slash_activity.store.schema import SCHEMA_SQL

__all__ = [
    "ActivityStore",
    "OperationContext",
    "SCHEMA_SQL",
    "WhereClause",
]
