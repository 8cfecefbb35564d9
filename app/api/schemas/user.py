from pydantic import BaseModel, ConfigDict, TypeAdapter


class UserRecord(BaseModel):
    id: int
    username: str
    email: str
    model_config = ConfigDict(from_attributes=True)


class UserWrite(BaseModel):
    """Body of create and update requests.

    Both fields are optional at the schema level so that an absent field
    reaches the service's presence check and is reported as a 400.
    """

    username: str | None = None
    email: str | None = None


# Wire form of the cached collection: a compact JSON array
UserRecordList = TypeAdapter(list[UserRecord])
