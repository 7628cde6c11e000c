"""Schemas for the query endpoint."""

from pydantic import BaseModel, Field


class QueryForm(BaseModel):
    """Form body for POST /. Both fields default to empty so missing values reach validation as 400, not 422."""

    model: str = Field("", description="Backend to ask: 'claude' or 'deepseek'. Anything else is answered with 'Unknown model selected'.")
    query: str = Field("", description="User query, 1 to 5000 characters before escaping.")
