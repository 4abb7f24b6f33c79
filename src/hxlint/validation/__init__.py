"""Validation of configuration document sets."""

from .validator import ConfigModel, Validator, validate

__all__ = ["ConfigModel", "Validator", "validate"]
