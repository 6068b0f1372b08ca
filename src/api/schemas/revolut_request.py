"""Request schemas for the Revolut API"""

from typing import Optional
from pydantic import BaseModel, Field


class DisconnectRequestSchema(BaseModel):
    """Request schema for POST /revolut/disconnect"""

    delete_data: bool = Field(
        default=False,
        description="Also delete mirrored accounts and transactions"
    )


class SyncRequestSchema(BaseModel):
    """Request schema for POST /revolut/sync"""

    company_id: Optional[str] = Field(
        default=None,
        description="Only sync this company's connection"
    )
