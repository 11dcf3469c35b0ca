from sqlmodel import SQLModel, Field


class StoredRecord(SQLModel, table=True):
    """One JSON-encoded value under (scope, key).

    ``scope`` is ``shop`` for records every session shares and the session id
    for per-visitor records.
    """

    scope: str = Field(primary_key=True, max_length=64)
    key: str = Field(primary_key=True, max_length=64)
    value: str
