"""
API Request Models

Pydantic models for API request validation.
"""
from typing import List, Optional, Union
from pydantic import BaseModel


class CountdownCreateRequest(BaseModel):
    end_at: str  # target date, e.g. "2030-01-01T00:00:00+01:00"
    labels: Union[str, List[str]]  # "Days|Hours|Minutes" or a list of three labels
    caption: Optional[str] = None
    id: Optional[str] = None  # generated when omitted
