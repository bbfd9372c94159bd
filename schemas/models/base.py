"""
Base model for MongoDB document models.

MongoBaseModel provides to_mongo() / from_mongo() for round-tripping between
Python objects and raw MongoDB dicts. Documents here are keyed by a natural
string id (the principal), so ``_id`` is a plain ``str`` rather than an
ObjectId.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MongoBaseModel(BaseModel):
    """
    Base for all document models.

    to_mongo()  — converts model → dict suitable for pymongo writes
    from_mongo() — converts raw pymongo dict → model instance (returns None
                    gracefully when passed None)
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id", min_length=1)

    def to_mongo(self, *, include_id: bool = True) -> dict:
        """Return a dict ready for MongoDB.

        ``include_id=False`` drops ``_id`` for ``replace_one`` bodies, where
        the id lives in the filter.
        """
        data = self.model_dump(by_alias=True)
        if not include_id:
            data.pop("_id", None)
        return data

    @classmethod
    def from_mongo(cls, data: Optional[dict]) -> Optional["MongoBaseModel"]:
        """Build a model instance from a raw MongoDB document dict.

        Returns None when data is None (e.g. find_one returns None).
        """
        if data is None:
            return None
        return cls.model_validate(data)
