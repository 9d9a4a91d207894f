"""PlantUML class diagram generation from declaration trees.

Public API:
  ClassDiagramGenerator: tree walker writing to a text sink
  emit: diagram body as a list of lines
  generate_class_diagram: full @startuml/@enduml document
"""

from .class_diagram import ClassDiagramGenerator, emit, generate_class_diagram
from .modifiers import get_member_modifiers_text, get_type_modifiers_text

__all__ = [
    "ClassDiagramGenerator",
    "emit",
    "generate_class_diagram",
    "get_member_modifiers_text",
    "get_type_modifiers_text",
]
