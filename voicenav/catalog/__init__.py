"""Voice command catalog: data model, static definitions, and builder."""

from voicenav.catalog.builder import STATIC_COMMANDS, build_catalog
from voicenav.catalog.topics import DEFAULT_TOPICS
from voicenav.catalog.types import ANY_AUDIENCE, Catalog, Command, DynamicEntity, Role

__all__ = [
    "ANY_AUDIENCE",
    "Catalog",
    "Command",
    "DEFAULT_TOPICS",
    "DynamicEntity",
    "Role",
    "STATIC_COMMANDS",
    "build_catalog",
]
