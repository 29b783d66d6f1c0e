"""Pydantic schemas for the discovery document."""
from pydantic import BaseModel


class ParameterSchema(BaseModel):
    name: str
    type: str
    description: str
    required: bool


class FunctionSchema(BaseModel):
    name: str
    description: str
    parameters: list[ParameterSchema]
    endpoint: str
    http_method: str = "POST"


class DiscoveryResponse(BaseModel):
    functions: list[FunctionSchema]
