import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class User(BaseModel):
    """User document as read from the ``users`` collection.

    Users are owned by the authentication service; this backend only reads
    them to identify the acting user and to enrich team responses.
    """

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), alias="_id")
    full_name: str
    email: str
    profile_photo: Optional[str] = None
    is_active: bool = True
