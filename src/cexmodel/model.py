"""Decoding of solver models into JavaScript values.

A model is the solver's answer to ``(get-model)`` after ``sat``:

    sat
    (model
      (define-fun v_x () JSVal (jsint 3))
      (define-fun l_y () Loc Loc!val!0)
      (define-fun h_0 () (Array Loc JSVal) (_ as-array k!1))
      (define-fun k!1 ((x!0 Loc)) JSVal (jsobj_Array Arr!val!0))
      ...)

Definitions follow the naming convention of the verification condition
encoder. Model collects them into lookup tables once; values of free
variables are then hydrated from those tables on demand.
"""

from __future__ import annotations

import logging
from typing import Callable, NamedTuple, Union

from cexmodel.chains import decode_chain, decode_member_set
from cexmodel.errors import CyclicModelError, ModelError, ModelFormatError
from cexmodel.functions import FunctionTable
from cexmodel.lazy import (
    ArrayRef,
    FunctionRef,
    LazyObject,
    LazyValue,
    Location,
    ObjectRef,
    PendingInstance,
    parse_lazy_value,
)
from cexmodel.literals import parse_number, parse_string
from cexmodel.options import DEFAULT_OPTIONS, Options
from cexmodel.sexpr import Expr, Group, Name, SExpr, format_sexpr, match_sexpr, parse_sexpr
from cexmodel.values import (
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
)

logger = logging.getLogger(__name__)


class HeapLocation(NamedTuple):
    """A mutable variable read at a given heap generation."""

    name: str
    heap: int


FreeVar = Union[str, HeapLocation, tuple[str, int]]

_DEFINE_FUN = ["define-fun", Name("name"), Group("args"), Expr("return"), Expr("body")]
_AS_ARRAY = ["_", "as-array", Name("name")]
_HEAP_MAPPING = ["define-fun", Name("name"), [["x!0", "Loc"]], "JSVal", Expr("body")]
_PROPERTY_MAPPING = ["define-fun", Name("name"), [["x!0", "String"]], "Bool", Expr("body")]

_CONTRACT_PREFIXES = ("pre", "post", "eff", "call")

# Reference kinds tracked while hydrating, to detect cycles
_ARRAY, _OBJECT, _FUNCTION = "array", "object", "function"


def _atom(expr: SExpr) -> str:
    if not isinstance(expr, str):
        raise ModelFormatError(f"expected name, got {format_sexpr(expr)}")
    return expr


def _index(expr: SExpr) -> int:
    # Negative numerals arrive as (- n)
    value = parse_number(expr)
    if not value.is_integer():
        raise ModelFormatError(f"expected integer, got {format_sexpr(expr)}")
    return int(value)


def _generation(name: str, prefix: str) -> int:
    digits = name[len(prefix):]
    if not digits.isdigit():
        raise ModelFormatError(f"expected index after {prefix} in {name}")
    return int(digits)


def _as_array_name(expr: SExpr) -> str:
    m = match_sexpr(expr, _AS_ARRAY)
    if m is None:
        raise ModelFormatError(f"expected (_ as-array $name), got {format_sexpr(expr)}")
    return m["name"]


def _array_length(expr: SExpr) -> int:
    if not isinstance(expr, str):
        raise ModelFormatError(f"expected num, got {format_sexpr(expr)}")
    return _index(expr)


def _string_key(what: str) -> Callable[[SExpr], str]:
    def parse(expr: SExpr) -> str:
        value = parse_string(expr)
        if value is None:
            raise ModelFormatError(f"expected string in {what}, got {format_sexpr(expr)}")
        return value

    return parse


def _membership(expr: SExpr) -> tuple[str, ...] | None:
    if expr == "true":
        return ()
    elif expr == "false":
        return None
    raise ModelFormatError(f"expected (true), got {format_sexpr(expr)}")


class Model:
    """A decoded satisfying assignment.

    The model is populated once, from one solver answer, and is read-only
    afterwards; queries may be repeated and always hydrate afresh.

    Args:
        smt: Solver output starting with the three-character ``sat`` tag.
        options: Settings used to stamp error locations.

    Raises:
        ModelError: If the text is not a model in the expected encoding.
    """

    def __init__(self, smt: str, options: Options | None = None) -> None:
        self.options = options or DEFAULT_OPTIONS
        self._arr_lengths: Callable[[str], int] | None = None
        self._arr_elems: Callable[[str, int], LazyValue] | None = None
        self._obj_properties: Callable[[str], str] | None = None
        self._obj_fields: Callable[[str, str], LazyValue] | None = None
        self._property_sets: dict[str, tuple[str, ...]] = {}
        self._heap_mappings: dict[str, Callable[[str], LazyValue]] = {}
        self._vars: dict[str, LazyValue] = {}
        self._locs: dict[str, Location] = {}
        self._heaps: dict[int, str] = {}
        self._functions = FunctionTable()

        # The satisfiability tag is always three characters
        body = smt[3:].strip()
        if body.startswith("(error"):
            raise self._error(body)
        try:
            data = parse_sexpr(body)
        except SyntaxError as exc:
            raise self._error(str(exc)) from exc
        if isinstance(data, str):
            raise self._error(data)
        if len(data) < 2 or data[0] != "model":
            raise self._error(smt)

        try:
            for definition in data[1:]:
                self._parse_definition(definition)
        except ModelFormatError as exc:
            raise self._error(str(exc)) from exc

        logger.debug(
            "Decoded model: %d variables, %d locations, %d heaps, %d functions",
            len(self._vars),
            len(self._locs),
            len(self._heaps),
            len(self._functions.branches),
        )

    # ---- Queries ----

    def value_of(self, var: FreeVar) -> Value:
        """Return the value of a free variable.

        Args:
            var: A variable name, or a (location name, heap generation) pair
                for a mutable variable.

        Returns:
            The hydrated value. Unknown plain variables are undefined.

        Raises:
            ModelError: If the value cannot be reconstructed.
        """
        if isinstance(var, str):
            val = self._vars.get(var)
            if val is None:
                return Undefined()
            return self.hydrate(val)

        name, heap = var
        loc = self._locs.get(name)
        if loc is None:
            raise self._error(f"no such loc {name}")
        mapping = self._heap_mappings.get(self._heaps.get(heap, ""))
        if mapping is None:
            raise self._error(f"no such heap {heap}")
        return self.hydrate(mapping(loc.name))

    def variables(self) -> set[str]:
        """Return the names of all plain and mutable variables."""
        return set(self._vars) | set(self._locs)

    def mutable_variables(self) -> set[str]:
        """Return the names of the mutable variables."""
        return set(self._locs)

    def heap_generations(self) -> list[int]:
        """Return the known heap generations in order."""
        return sorted(self._heaps)

    def hydrate(self, val: LazyValue) -> Value:
        """Resolve a lazy value into a concrete value.

        Raises:
            ModelError: If a reference cannot be resolved.
            CyclicModelError: If a reference contains itself.
        """
        try:
            return self._hydrate(val, frozenset())
        except ModelFormatError as exc:
            raise self._error(str(exc)) from exc

    # ---- Definitions ----

    def _error(self, fragment: str) -> ModelError:
        return ModelError.unrecognized(fragment, self.options.filename)

    def _parse_definition(self, data: SExpr) -> None:
        if isinstance(data, str) or not data:
            raise ModelFormatError(f"expected define-fun, got {format_sexpr(data)}")
        if data[0] != "define-fun":
            logger.debug("Skipping %s", format_sexpr(data))
            return
        m = match_sexpr(data, _DEFINE_FUN)
        if m is None:
            raise ModelFormatError(f"malformed define-fun {format_sexpr(data)}")

        name: str = m["name"]
        body = m["body"]
        if name.startswith("v_"):
            self._vars[name[2:]] = parse_lazy_value(body)
        elif name.startswith("l_"):
            if not isinstance(body, str):
                raise ModelFormatError(f"expected loc, got {format_sexpr(body)}")
            self._locs[name[2:]] = Location(body)
        elif name.startswith("h_"):
            self._heaps[_generation(name, "h_")] = _as_array_name(body)
        elif name == "arrlength":
            self._arr_lengths = decode_chain(body, [_atom], _array_length)
        elif name == "arrelems":
            self._arr_elems = decode_chain(body, [_atom, _index], parse_lazy_value)
        elif name == "objproperties":
            self._obj_properties = decode_chain(body, [_atom], _as_array_name)
        elif name == "objfield":
            self._obj_fields = decode_chain(body, [_atom, _string_key("object field")], parse_lazy_value)
        elif name.startswith("c_"):
            return
        elif name.startswith("app"):
            self._functions.add_application(body, _generation(name, "app"))
        elif name.startswith(_CONTRACT_PREFIXES):
            return
        else:
            self._parse_residual(data, name)

    def _parse_residual(self, data: SExpr, name: str) -> None:
        heap_match = match_sexpr(data, _HEAP_MAPPING)
        if heap_match is not None:
            self._heap_mappings[name] = decode_chain(heap_match["body"], [_atom], parse_lazy_value)
            return
        properties_match = match_sexpr(data, _PROPERTY_MAPPING)
        if properties_match is not None:
            members = decode_member_set(
                properties_match["body"], _string_key("property mapping"), _membership
            )
            self._property_sets[name] = members or ()
            return
        raise ModelFormatError(f"unexpected key: {name}")

    # ---- Hydration ----

    def _hydrate(self, val: LazyValue, active: frozenset[tuple[str, str]]) -> Value:
        if isinstance(val, (Number, Boolean, String, Null, Undefined)):
            return val
        elif isinstance(val, LazyObject):
            return Object({k: self._hydrate(v, active) for k, v in val.fields.items()})
        elif isinstance(val, PendingInstance):
            return ClassInstance(val.cls, [self._hydrate(a, active) for a in val.args])
        elif isinstance(val, ArrayRef):
            return self._hydrate_array(val, self._enter(active, _ARRAY, val.name))
        elif isinstance(val, ObjectRef):
            return self._hydrate_object(val, self._enter(active, _OBJECT, val.name))
        elif isinstance(val, FunctionRef):
            return self._hydrate_function(val, self._enter(active, _FUNCTION, val.name))
        raise ModelFormatError(f"cannot hydrate {val!r}")

    def _enter(
        self, active: frozenset[tuple[str, str]], kind: str, name: str
    ) -> frozenset[tuple[str, str]]:
        if (kind, name) in active:
            raise CyclicModelError.unrecognized(f"cyclic {kind} reference {name}", self.options.filename)
        return active | {(kind, name)}

    def _hydrate_array(self, ref: ArrayRef, active: frozenset[tuple[str, str]]) -> Array:
        if self._arr_lengths is None:
            raise ModelFormatError("no array length information")
        elements = []
        for index in range(self._arr_lengths(ref.name)):
            if self._arr_elems is None:
                raise ModelFormatError("no array element information")
            elements.append(self._hydrate(self._arr_elems(ref.name, index), active))
        return Array(elements)

    def _hydrate_object(self, ref: ObjectRef, active: frozenset[tuple[str, str]]) -> Object:
        if self._obj_properties is None:
            raise ModelFormatError("no object property information")
        if self._obj_fields is None:
            raise ModelFormatError("no object field information")
        alias = self._obj_properties(ref.name)
        if alias not in self._property_sets:
            raise ModelFormatError(f"no mapping for {alias}")
        return Object(
            {key: self._hydrate(self._obj_fields(ref.name, key), active) for key in self._property_sets[alias]}
        )

    def _hydrate_function(self, ref: FunctionRef, active: frozenset[tuple[str, str]]) -> Function:
        arities = self._functions.arities(ref.name)
        if not arities:
            return Function(arity=0)
        if len(arities) != 1:
            raise ModelFormatError(f"no support for variable argument functions ({ref.name})")

        [(arity, branches)] = arities.items()
        default = self._functions.defaults.get(arity)
        cases = []
        for branch in branches:
            if not branch.conditions:
                # The solver's own catch-all case
                default = branch.result
            else:
                cases.append(FunctionCase(list(branch.conditions), self._hydrate(branch.result, active)))
        if default is None:
            raise ModelFormatError(f"no default result for app{arity}")
        return Function(arity, cases, self._hydrate(default, active))
