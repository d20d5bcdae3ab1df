"""Identity and audit fields shared by every catalog record."""

import uuid
from datetime import UTC, datetime

import sqlalchemy as sa
from pydantic import BaseModel
from pydantic import Field as PydanticField
from sqlmodel import Field, SQLModel


def new_record_id() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(UTC)


class CatalogRecord(BaseModel):
    """Domain-side record: a server-generated id plus audit timestamps.

    The id is assigned once, when the record is first built, and never
    changes afterwards.
    """

    id: str = PydanticField(
        default_factory=new_record_id,
        description="Server-generated record identifier",
    )

    created_at: datetime = PydanticField(default_factory=utc_now)
    updated_at: datetime = PydanticField(default_factory=utc_now)


class CatalogRecordTable(SQLModel, table=False):
    """Storage-side record with the same identity and audit columns."""

    id: str = Field(
        primary_key=True,
        default_factory=new_record_id,
        description="Server-generated record identifier",
    )

    created_at: datetime = Field(default_factory=utc_now, nullable=False)
    updated_at: datetime = Field(
        default_factory=utc_now,
        nullable=False,
        sa_column_kwargs={"server_default": sa.func.now()},
    )

    def touch(self) -> None:
        """Stamp the row as modified now."""
        self.updated_at = utc_now()
