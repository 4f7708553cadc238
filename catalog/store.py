from __future__ import annotations  # JSON-file backed reference catalog

import json
import logging
from pathlib import Path
from typing import Any, List, Optional

from pydantic import ValidationError

from .models import Course, Persona, Role, RoleCatalog

logger = logging.getLogger(__name__)

COURSES_FILE = "courses.json"
PERSONAS_FILE = "personas.json"
ROLES_FILE = "roles.json"


class CatalogStore:  # Read-only lookups over courses, personas and roles
    def __init__(self, directory: Path) -> None:
        self._directory = Path(directory)

    def _read(self, filename: str) -> Optional[Any]:  # Parse a catalog file, None when absent or unreadable
        path = self._directory / filename
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.error("Unable to read catalog file %s: %s", path, exc)
            return None

    def list_courses(self) -> List[Course]:
        data = self._read(COURSES_FILE) or {}
        try:
            return [Course.model_validate(item) for item in data.get("courses", [])]
        except ValidationError as exc:
            logger.error("Invalid course catalog: %s", exc)
            return []

    def get_course(self, course_id: str) -> Optional[Course]:
        return next((course for course in self.list_courses() if course.id == course_id), None)

    def list_personas(self) -> List[Persona]:
        data = self._read(PERSONAS_FILE) or {}
        try:
            return [Persona.model_validate(item) for item in data.get("personas", [])]
        except ValidationError as exc:
            logger.error("Invalid persona catalog: %s", exc)
            return []

    def get_persona(self, persona_id: str) -> Optional[Persona]:
        return next((persona for persona in self.list_personas() if persona.id == persona_id), None)

    def roles(self) -> RoleCatalog:
        data = self._read(ROLES_FILE)
        if not data:
            return RoleCatalog()
        try:
            return RoleCatalog.model_validate(data)
        except ValidationError as exc:
            logger.error("Invalid role catalog: %s", exc)
            return RoleCatalog()

    def course_roles(self, course_id: str) -> List[Role]:
        return self.roles().course_roles.get(course_id, [])

    def get_role(self, role_id: str, course_id: Optional[str] = None) -> Optional[Role]:
        """Generic roles are checked first, then the course's specialised roles."""

        catalog = self.roles()
        for role in catalog.generic_roles:
            if role.id == role_id:
                return role.model_copy(update={"type": "generic"})
        if course_id:
            for role in catalog.course_roles.get(course_id, []):
                if role.id == role_id:
                    return role.model_copy(update={"type": "course-specific"})
        return None


__all__ = ["CatalogStore"]
