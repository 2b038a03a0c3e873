"""A dice-driven race for three players through a three-floor maze with stairs, poles and Bawana."""

__version__ = "1.0.0"