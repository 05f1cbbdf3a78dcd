"""LogicCraft analyzer backend."""
