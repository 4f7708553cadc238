"""Reference data shapes: courses, topics, personas and target roles."""
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import AliasGenerator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CatalogModel(BaseModel):
    """Accepts camelCase or snake_case keys; always serializes snake_case."""

    model_config = ConfigDict(
        alias_generator=AliasGenerator(validation_alias=to_camel),
        populate_by_name=True,
        extra="ignore",
    )


class Topic(CatalogModel):
    id: str
    name: str
    subtopics: List[str] = Field(default_factory=list)


class Course(CatalogModel):
    id: str
    name: str
    description: str = ""
    topics: List[Topic] = Field(default_factory=list)

    def topic_by_id(self, topic_id: str) -> Optional[Topic]:
        return next((topic for topic in self.topics if topic.id == topic_id), None)


class Persona(CatalogModel):
    id: str
    name: str
    style: str = ""
    description: str = ""
    focus_areas: List[str] = Field(default_factory=list)
    question_styles: List[str] = Field(default_factory=list)
    behavior_guidelines: List[str] = Field(default_factory=list)
    evaluation_weight: Dict[str, float] = Field(default_factory=dict)


class Role(CatalogModel):
    id: str
    name: str
    level: Optional[int] = Field(default=None, ge=1, le=4)
    base_level: Optional[str] = None
    type: Literal["generic", "course-specific"] = "generic"
    years_experience: Optional[str] = None
    expectations: Dict[str, Any] = Field(default_factory=dict)
    evaluation_criteria: List[str] = Field(default_factory=list)
    focus_topics: List[str] = Field(default_factory=list)


class RoleCatalog(CatalogModel):
    generic_roles: List[Role] = Field(default_factory=list)
    course_roles: Dict[str, List[Role]] = Field(default_factory=dict)


__all__ = ["CatalogModel", "Course", "Persona", "Role", "RoleCatalog", "Topic"]
