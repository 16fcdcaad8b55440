"""Record store adapter layer - abstracts over the payment records table."""

from app.adapters.records.airtable import AirtableRecordStore
from app.adapters.records.base import AbstractRecordStore
from app.adapters.records.factory import create_record_store

__all__ = [
    "AbstractRecordStore",
    "AirtableRecordStore",
    "create_record_store",
]
