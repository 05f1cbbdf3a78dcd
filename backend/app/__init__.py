"""FastAPI app for the LogicCraft analyzer."""

__version__ = "1.0.0"
