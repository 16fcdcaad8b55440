"""Factory for the payment record store."""

from app.adapters.records.airtable import AirtableRecordStore
from app.adapters.records.base import AbstractRecordStore
from app.core.config import AirtableSettings, settings


def create_record_store(airtable: AirtableSettings | None = None) -> AbstractRecordStore:
    """Build the record store from Airtable settings.

    Missing credentials are not an error here: the returned store lists
    nothing and refuses writes with ConfigurationAppError, which the command
    layer turns into its echo-only mode.

    Args:
        airtable: Settings to use; defaults to the global settings.

    Returns:
        AbstractRecordStore: Configured store instance.
    """
    cfg = airtable or settings.airtable
    return AirtableRecordStore(
        api_key=cfg.api_key,
        base_id=cfg.base_id,
        table=cfg.table,
        view=cfg.view,
        page_size=cfg.page_size,
        api_url=cfg.api_url,
        timeout_seconds=cfg.timeout_seconds,
    )
