"""Shared field types."""
from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator

from kanban.utils.clock import as_utc

# Accepts any ISO-8601 timestamp and stores it as UTC; naive input is read as UTC
UTCDateTime = Annotated[datetime, AfterValidator(as_utc)]
