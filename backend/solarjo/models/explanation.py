"""
Pydantic model for narrative explanations attached to calculator results.
"""

from typing import Literal

from pydantic import BaseModel


class Explanation(BaseModel):
    text: str
    source: Literal["service", "fallback"]
