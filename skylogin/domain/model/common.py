"""Base model for stored records."""

from pydantic import BaseModel, ConfigDict


class RecordModel(BaseModel):
    """Base class for records kept in the key-value stores.

    Records are written by the OAuth client as well as by this service, so
    unknown fields are kept and written back unchanged.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        populate_by_name=True,
    )

    def to_store(self) -> dict:
        """JSON-compatible representation written to the store."""
        return self.model_dump(mode="json", by_alias=True)
