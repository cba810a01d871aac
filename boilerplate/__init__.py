"""Boilerplate -- generates project skeletons from packaged template trees.

Quick usage::

    from boilerplate import HeadlessServiceParams, Materializer

    params = HeadlessServiceParams(ProjectName="demo", ProjectPackage="example.com/demo")
    Materializer().materialize("headless-service", "/tmp/out", params.as_map())
"""

from boilerplate.config import GeneratorConfig
from boilerplate.params import (
    CobraParams,
    HeadlessServiceParams,
    IndirectSelectionParams,
    ProjectParams,
    SPAParams,
    params_model_for,
)
from boilerplate.scaffolder import Archetype, Materializer, MaterializeResult, materialize

__version__ = "3.6.0"

__all__ = [
    "Archetype",
    "CobraParams",
    "GeneratorConfig",
    "HeadlessServiceParams",
    "IndirectSelectionParams",
    "MaterializeResult",
    "Materializer",
    "ProjectParams",
    "SPAParams",
    "materialize",
    "params_model_for",
]
