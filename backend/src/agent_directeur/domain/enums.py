"""Domain enumerations for the Agent Directeur service.

All enums use the (str, Enum) pattern to ensure JSON serialization compatibility.
"""

from enum import Enum


class FieldType(str, Enum):
    """Property types the record mapper knows how to encode.

    Values are the Notion wire type names, so a property definition's
    ``type`` can be parsed directly with ``FieldType(definition["type"])``.
    """

    TITLE = "title"
    TEXT = "rich_text"
    SINGLE_CHOICE = "select"
    MULTI_CHOICE = "multi_select"
    DATE = "date"
    BOOLEAN = "checkbox"


class WriteAction(str, Enum):
    """Outcome of a create-or-update against an external table."""

    CREATED = "created"
    UPDATED = "updated"


class Priority(str, Enum):
    """Priority levels, matching the drop-down options of the projects table."""

    HAUTE = "Haute"
    MOYENNE = "Moyenne"
    BASSE = "Basse"


class SpecialistName(str, Enum):
    """Secondary agents the director can mobilise."""

    PEDAGOGIQUE = "pedagogique"
    JURIDIQUE = "juridique"
    COMMERCIAL = "commercial"
