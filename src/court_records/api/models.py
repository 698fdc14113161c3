from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, Field

from court_records.ingest.schemas import SearchContext


class DetailRequest(BaseModel):
    source: str = Field(min_length=1, max_length=20)
    markup: Union[str, Dict[str, Any]] = Field(default="")
    base_url: Optional[str] = Field(default=None, max_length=2000)


class SearchResultsRequest(BaseModel):
    source: str = Field(min_length=1, max_length=20)
    payload: Union[str, List[Any], Dict[str, Any]] = Field(default="")
    context: Optional[SearchContext] = None
    base_url: Optional[str] = Field(default=None, max_length=2000)


class BatchRequest(BaseModel):
    documents: List[DetailRequest] = Field(default_factory=list)


class TrackingCheckRequest(BaseModel):
    rows: List[Dict[str, Any]] = Field(default_factory=list)
    tracked: List[Dict[str, Any]] = Field(default_factory=list)
