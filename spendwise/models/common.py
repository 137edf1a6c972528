import uuid
from datetime import datetime, timezone


def new_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    # Stored naive, always UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)
