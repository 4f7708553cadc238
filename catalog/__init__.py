from __future__ import annotations  # Reference catalog package exports

from .models import CatalogModel, Course, Persona, Role, RoleCatalog, Topic
from .store import CatalogStore

__all__ = ["CatalogModel", "CatalogStore", "Course", "Persona", "Role", "RoleCatalog", "Topic"]
