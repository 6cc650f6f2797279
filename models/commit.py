from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from typing import Optional, Dict, Any


class CommitRecord(BaseModel):
    """A pending or archived commit, keyed by its SHA"""
    model_config = ConfigDict(frozen=True)

    sha: str = Field(..., min_length=1, description="Commit SHA hash")
    author: Optional[str] = Field(None, description="Commit author login")
    message: str = Field(..., description="Commit message")
    url: str = Field(..., min_length=1, description="Commit URL")
    date: datetime = Field(..., description="Commit date")

    @field_validator('author', mode='before')
    @classmethod
    def blank_author_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def to_document(self) -> Dict[str, Any]:
        """Mapping stored in the archive collection"""
        return {
            'sha': self.sha,
            'author': self.author,
            'message': self.message,
            'url': self.url,
            'date': self.date,
        }
