"""
Knowledge base topic schema.
"""

from typing import List

from pydantic import BaseModel, Field, field_validator


class TopicRecord(BaseModel):
    keywords: List[str] = Field(min_length=1)
    definition: str = Field(min_length=1)
    types: List[str] = []
    root_causes: List[str] = []
    impacts: List[str] = []
    immediate_relief: List[str] = []
    long_term_solutions: List[str] = []
    when_to_seek_help: str = ""
    resources: List[str] = []

    model_config = {"frozen": True}

    @field_validator("keywords")
    @classmethod
    def _normalise_keywords(cls, value: List[str]) -> List[str]:
        # dedupe, keep order
        cleaned = list(dict.fromkeys(kw.strip().lower() for kw in value if kw and kw.strip()))
        if not cleaned:
            raise ValueError("topic needs at least one non-empty keyword")
        return cleaned
