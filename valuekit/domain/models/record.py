"""Record: a sealed keyed mapping with value semantics.

Subclasses declare their fields with class annotations, in the style of
dataclasses:

    class User(Record):
        name: str = "Anon"
        age: int = 0
        email: str | None = field(default=UNDEFINED, required=False)
        tags: list[str] = field(default_factory=list)

At class creation the annotations are turned into an explicit, ordered
RecordSchema (``User.__schema__``). Instances never discover fields
reflectively: everything downstream, including the kernel, only sees the
record as a Mapping of field name to value.

Lifecycle:
- create / create_strict / from_mapping / from_many build new instances
- copy() returns a patched new instance, the original is unchanged
- update() patches the instance in place; the merged values are built
  first and installed in one step, so a failure leaves it untouched
- any other attribute assignment raises FrozenRecordError

Fields declared without a default are required: create() leaves them
UNDEFINED, create_strict() raises MissingRequiredFieldError. Unknown patch
keys are accepted and stored as ordinary fields.
"""

from __future__ import annotations

import inspect
import typing
from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, replace
from typing import Any, ClassVar, TypeVar

import structlog

from valuekit.domain.errors.record import FrozenRecordError, MissingRequiredFieldError
from valuekit.domain.models.validation import ValidationResult, Validators, run_validators
from valuekit.domain.primitives.undefined import UNDEFINED
from valuekit.domain.services.canonicalizer import canonicalize, to_plain
from valuekit.domain.services.cloning import clone as clone_value
from valuekit.domain.services.equality import deep_equal, present_keys, shallow_equal
from valuekit.domain.services.hashing import hash_value
from valuekit.domain.services.merging import merge_deep, merged
from valuekit.domain.services.ordering import Ordering, compare_by_keys

log = structlog.get_logger()

R = TypeVar("R", bound="Record")

Overrides = Mapping[str, Any] | Callable[[Mapping[str, Any], int], Mapping[str, Any] | None]


@dataclass(frozen=True)
class FieldSpec:
    """Declaration of a single record field.

    Attributes:
        name: Field name.
        default: Value a new instance starts with (UNDEFINED for none).
        default_factory: Zero-argument callable producing the start value.
        required: Whether create_strict() demands the field.
    """

    name: str
    default: Any = UNDEFINED
    default_factory: Callable[[], Any] | None = None
    required: bool = False

    def __post_init__(self) -> None:
        """Validate the declaration."""
        if self.default is not UNDEFINED and self.default_factory is not None:
            raise ValueError(
                f"field {self.name!r} cannot have both default and default_factory"
            )

    def initial_value(self) -> Any:
        """Return the start value for a new instance.

        Mutable defaults are deep cloned so instances never share them.
        """
        if self.default_factory is not None:
            return self.default_factory()
        return clone_value(self.default, deep=True)


def field(
    *,
    default: Any = UNDEFINED,
    default_factory: Callable[[], Any] | None = None,
    required: bool | None = None,
) -> Any:
    """Declare a field with options, like dataclasses.field().

    Args:
        default: Start value for new instances.
        default_factory: Callable producing the start value.
        required: Defaults to True only when neither default nor
            default_factory is given.

    Returns:
        A FieldSpec placeholder; the name is filled in at class creation.
    """
    if required is None:
        required = default is UNDEFINED and default_factory is None
    return FieldSpec(
        name="",
        default=default,
        default_factory=default_factory,
        required=required,
    )


@dataclass(frozen=True)
class RecordSchema:
    """Ordered field declarations of a record type."""

    fields: tuple[FieldSpec, ...] = ()

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.fields)

    @property
    def required_fields(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.fields if spec.required)

    def initial_values(self) -> dict[str, Any]:
        """Return a fresh name -> start value dict in declaration order."""
        return {spec.name: spec.initial_value() for spec in self.fields}

    def extend(self, specs: Iterable[FieldSpec]) -> "RecordSchema":
        """Return a schema with specs added; redeclared names keep their position."""
        by_name = {spec.name: spec for spec in self.fields}
        for spec in specs:
            by_name[spec.name] = spec
        return RecordSchema(fields=tuple(by_name.values()))


def _is_classvar(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation.startswith(("ClassVar", "typing.ClassVar"))
    return annotation is ClassVar or typing.get_origin(annotation) is ClassVar


class Record(Mapping[str, Any]):
    """Base class for value-semantics records.

    Records compare, hash and print by value: ``==`` is deep structural
    equality, ``hash()`` is the 32-bit hash of the canonical form and
    ``str()`` is the canonical form itself. Hash and equality follow the
    current contents, so do not update() a record while it is a dict key
    or a set member.
    """

    __slots__ = ("_values",)

    __schema__: ClassVar[RecordSchema] = RecordSchema()

    _values: dict[str, Any]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        schema = RecordSchema()
        for base in reversed(cls.__bases__):
            base_schema = getattr(base, "__schema__", None)
            if isinstance(base_schema, RecordSchema):
                schema = schema.extend(base_schema.fields)

        declared: list[FieldSpec] = []
        for name, annotation in inspect.get_annotations(cls).items():
            if name.startswith("_") or _is_classvar(annotation):
                continue
            if hasattr(Record, name):
                raise TypeError(
                    f"{cls.__name__}: field name {name!r} shadows a Record attribute"
                )
            default = cls.__dict__.get(name, UNDEFINED)
            if isinstance(default, FieldSpec):
                spec = replace(default, name=name)
            else:
                spec = FieldSpec(name=name, default=default, required=default is UNDEFINED)
            declared.append(spec)
            if name in cls.__dict__:
                # Values live in _values; a class attribute would shadow them.
                delattr(cls, name)
        cls.__schema__ = schema.extend(declared)

    def __init__(self, patch: Mapping[str, Any] | None = None, /, **fields: Any) -> None:
        values = self.__schema__.initial_values()
        for source in (patch or {}, fields):
            for key, value in source.items():
                if value is not UNDEFINED:
                    values[key] = value
        object.__setattr__(self, "_values", values)

    # Factories

    @classmethod
    def create(cls: type[R], patch: Mapping[str, Any] | None = None, /, **fields: Any) -> R:
        """Create an instance from defaults overridden by patch and fields.

        Patch values replace defaults wholesale; UNDEFINED values are
        ignored. Required fields that are not given stay UNDEFINED.
        """
        return cls(patch, **fields)

    @classmethod
    def create_strict(cls: type[R], patch: Mapping[str, Any]) -> R:
        """Create an instance, demanding every required field.

        Raises:
            MissingRequiredFieldError: If a required field is missing or
                UNDEFINED in patch.
        """
        for name in cls.__schema__.required_fields:
            if patch.get(name, UNDEFINED) is UNDEFINED:
                log.warning(
                    "required_field_missing",
                    record_type=cls.__name__,
                    field_name=name,
                )
                raise MissingRequiredFieldError(cls.__name__, name)
        return cls(patch)

    @classmethod
    def from_mapping(
        cls: type[R],
        source: Mapping[str, Any],
        overrides: Mapping[str, Any] | None = None,
    ) -> R:
        """Create an instance from source with shallow overrides on top."""
        return cls({**source, **(overrides or {})})

    @classmethod
    def from_many(
        cls: type[R],
        sources: Iterable[Mapping[str, Any]],
        overrides: Overrides | None = None,
    ) -> list[R]:
        """Create one instance per source.

        Args:
            sources: Source mappings.
            overrides: Either one mapping applied to every source, or a
                callable ``(source, index) -> mapping | None``.
        """
        records = []
        for index, source in enumerate(sources):
            override = overrides(source, index) if callable(overrides) else overrides
            records.append(cls.from_mapping(source, override))
        return records

    @classmethod
    def _from_values(cls: type[R], values: dict[str, Any]) -> R:
        instance = cls.__new__(cls)
        object.__setattr__(instance, "_values", values)
        return instance

    # Copying and mutation

    def copy(self: R, patch: Any = None, *, deep: bool = False) -> R:
        """Return a new instance with patch deep-merged in.

        Args:
            patch: Partial mapping of overrides. UNDEFINED values are
                ignored; sequences replace, mappings merge.
            deep: Deep clone the current values before patching, so the
                copy shares no mutable structure with this instance.
        """
        base = clone_value(self._values, deep=deep)
        if patch:
            merge_deep(base, patch)
        return self._from_values(base)

    def update(self: R, patch: Any) -> R:
        """Deep-merge patch into this instance and return it.

        This is the only sanctioned way to change a record after
        creation. The merged values are built on a copy and swapped in
        once complete.
        """
        new_values = merged(self._values, patch)
        object.__setattr__(self, "_values", new_values)
        changed = present_keys(patch) if isinstance(patch, Mapping) else set()
        log.debug(
            "record_updated",
            record_type=type(self).__name__,
            fields=sorted(changed),
        )
        return self

    def clone(self: R, *, deep: bool = False) -> R:
        """Return a new instance with the same values (deep-copied if asked)."""
        return self._from_values(clone_value(self._values, deep=deep))

    # Value semantics

    def equals(self, other: Any, deep: bool = True) -> bool:
        if deep:
            return deep_equal(self, other)
        return shallow_equal(self, other)

    def hash_code(self) -> int:
        return hash_value(self)

    def to_json(self) -> dict[str, Any]:
        """Return the fields as plain JSON values with keys in canonical order."""
        plain: dict[str, Any] = to_plain(self)
        return plain

    def compare_to(self, other: Mapping[str, Any], order_by: Sequence[str] | None = None) -> Ordering:
        """Order against other by order_by, or by this record's field order."""
        return compare_by_keys(self, other, order_by)

    # Field selection

    def pick(self, keys: Iterable[str]) -> dict[str, Any]:
        return {key: self._values[key] for key in keys if key in self._values}

    def omit(self, keys: Iterable[str]) -> dict[str, Any]:
        excluded = set(keys)
        return {key: value for key, value in self._values.items() if key not in excluded}

    def validate(self, validators: Validators) -> ValidationResult:
        return run_validators(self, validators)

    # Mapping protocol

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    # Object protocol

    def __getattr__(self, name: str) -> Any:
        if name == "_values":
            raise AttributeError(name)
        try:
            return self._values[name]
        except KeyError:
            raise AttributeError(
                f"{type(self).__name__!r} object has no attribute {name!r}"
            ) from None

    def __setattr__(self, name: str, value: Any) -> None:
        raise FrozenRecordError(type(self).__name__, name)

    def __delattr__(self, name: str) -> None:
        raise FrozenRecordError(type(self).__name__, name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mapping):
            return NotImplemented
        return deep_equal(self, other)

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self) -> int:
        return self.hash_code()

    def __str__(self) -> str:
        return canonicalize(self)

    def __repr__(self) -> str:
        fields = ", ".join(f"{key}={value!r}" for key, value in self._values.items())
        return f"{type(self).__name__}({fields})"

    def __copy__(self: R) -> R:
        return self.clone()

    def __deepcopy__(self: R, memo: dict[int, Any]) -> R:
        return self.clone(deep=True)

    def __reduce__(self) -> tuple[Any, ...]:
        return (type(self)._from_values, (dict(self._values),))
