"""ClassLoom: PlantUML class diagrams from C# source."""

__version__ = "0.1.0"
