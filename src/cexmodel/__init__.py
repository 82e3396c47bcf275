"""cexmodel - counterexample reconstruction from SMT solver models."""

from cexmodel.errors import CyclicModelError, ModelError
from cexmodel.model import HeapLocation, Model
from cexmodel.options import Options
from cexmodel.render import SynthesizedFunction, to_display, to_plain, to_source, to_syntax
from cexmodel.values import (
    UNDEFINED,
    Array,
    Boolean,
    ClassInstance,
    Function,
    FunctionCase,
    Null,
    Number,
    Object,
    String,
    Undefined,
    Value,
    plain_to_value,
)

__all__ = [
    # Main API
    "Model",
    "HeapLocation",
    "Options",
    # Errors
    "ModelError",
    "CyclicModelError",
    # Values
    "Value",
    "Number",
    "Boolean",
    "String",
    "Null",
    "Undefined",
    "Function",
    "FunctionCase",
    "Object",
    "ClassInstance",
    "Array",
    "UNDEFINED",
    "plain_to_value",
    # Rendering
    "SynthesizedFunction",
    "to_display",
    "to_plain",
    "to_source",
    "to_syntax",
]

__version__ = "0.1.0"
