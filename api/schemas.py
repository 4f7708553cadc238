"""Pydantic schemas for the interview HTTP API."""
from __future__ import annotations

from typing import List, Literal, Optional, Union

from pydantic import AliasGenerator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from catalog.models import Role


class RequestModel(BaseModel):
    # Browser clients post camelCase bodies.
    model_config = ConfigDict(alias_generator=AliasGenerator(validation_alias=to_camel), populate_by_name=True)


class StartReq(RequestModel):
    course_id: str = Field(min_length=1)
    selected_topics: Optional[Union[Literal["random"], List[str]]] = None
    persona_id: Optional[str] = None
    role_id: Optional[str] = None


class RespondReq(RequestModel):
    session_id: str = Field(min_length=1)
    message: str = Field(min_length=1)
    skipped: bool = False


class EndReq(RequestModel):
    session_id: str = Field(min_length=1)


class RolesResp(BaseModel):
    generic_roles: List[Role] = Field(default_factory=list)
    course_roles: List[Role] = Field(default_factory=list)


class ClearResp(BaseModel):
    success: bool = True
    removed: int = 0
    message: str = "Interview history cleared"
