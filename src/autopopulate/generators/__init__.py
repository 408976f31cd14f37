"""Scalar value generators."""

from autopopulate.generators.base import BaseGenerator
from autopopulate.generators.faker_generator import FakerGenerator

__all__ = ["BaseGenerator", "FakerGenerator"]
