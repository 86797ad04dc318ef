"""db: store library for known transaction methods and tags (SQLAlchemy).

Public exports
--------------
- ``Base`` and ``metadata`` for schema creation
- ORM models ``TxMethod`` and ``Tag``
- Engine/session helpers live in ``txedit.db.client``
"""

from __future__ import annotations

from .models import Base, Tag, TxMethod

metadata = Base.metadata

__all__ = [
    "Base",
    "metadata",
    "Tag",
    "TxMethod",
]
