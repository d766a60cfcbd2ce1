"""
Timezone-aware timestamps shared by the table models
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Column type for every created_at/updated_at
TIMESTAMP = DateTime(timezone=True)
