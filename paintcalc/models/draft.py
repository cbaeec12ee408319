"""Envelope for job drafts kept in the local key-value store."""

from typing import Generic, TypeVar

from pydantic import BaseModel

JobT = TypeVar("JobT")


class StoredDraft(BaseModel, Generic[JobT]):
    data: JobT
    saved_at: int  # epoch milliseconds
