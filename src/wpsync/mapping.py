"""Field mapping from WordPress JSON onto local records.

Each content type declares a static table of ``FieldRule`` entries. A rule
extracts a value from the source JSON and assigns it to the record. The
table is validated when the mapper is built, so a bad mapping fails at
configuration time rather than in the middle of a sync.

Example:
    >>> from wpsync.mapping import FieldMapper
    >>> from wpsync.models.record import LocalRecord
    >>> mapper = FieldMapper.from_names(["slug", "title"])
    >>> record = LocalRecord(content_type="posts", source_id=1)
    >>> mapper.apply(record, {"slug": "hello", "ID": 1})
    >>> record.fields
    {'slug': 'hello', 'title': None}
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from wpsync.core.exceptions import ConfigurationError
from wpsync.models.record import LocalRecord

Extractor = Callable[[Mapping[str, Any]], Any]
Assigner = Callable[[LocalRecord, Any], None]

# Attributes mapped when a content type declares none
DEFAULT_MAPPABLE_FIELDS: tuple[str, ...] = ("slug", "title")


@dataclass(frozen=True)
class FieldRule:
    """One entry of a mapping table.

    Without an ``extractor`` the rule reads ``json[name]``; without an
    ``assigner`` it writes ``record.fields[name]``.

    Example:
        >>> from wpsync.mapping import FieldRule
        >>> rule = FieldRule("title")
        >>> rule.extract({"title": "Hi"})
        'Hi'
    """

    name: str
    extractor: Extractor | None = None
    assigner: Assigner | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ConfigurationError("Field rule name must not be empty")

    def extract(self, json: Mapping[str, Any]) -> Any:
        if self.extractor is None:
            return json.get(self.name)
        return self.extractor(json)

    def assign(self, record: LocalRecord, value: Any) -> None:
        if self.assigner is None:
            record.fields[self.name] = value
        else:
            self.assigner(record, value)


class FieldMapper:
    """Copies a declared list of fields from source JSON onto a record.

    Mapping only mutates the in-memory record. Persisting it is a separate
    step owned by the reconciler.

    Example:
        >>> from wpsync.mapping import FieldMapper, FieldRule
        >>> mapper = FieldMapper([
        ...     FieldRule("title", extractor=lambda j: (j.get("title") or {}).get("rendered")),
        ... ])
        >>> mapper.names
        ['title']
    """

    def __init__(self, rules: Iterable[FieldRule]) -> None:
        self._rules: dict[str, FieldRule] = {}
        for rule in rules:
            if rule.name in self._rules:
                raise ConfigurationError(f"Field '{rule.name}' is mapped more than once")
            self._rules[rule.name] = rule
        if not self._rules:
            raise ConfigurationError("A field mapper needs at least one field")

    @classmethod
    def from_names(cls, names: Iterable[str] = DEFAULT_MAPPABLE_FIELDS) -> FieldMapper:
        """Build a mapper that copies each named key verbatim."""
        return cls(FieldRule(name) for name in names)

    @property
    def names(self) -> list[str]:
        return list(self._rules)

    def __iter__(self) -> Iterator[FieldRule]:
        return iter(self._rules.values())

    def __len__(self) -> int:
        return len(self._rules)

    def apply(self, record: LocalRecord, json: Mapping[str, Any]) -> None:
        """Copy every declared field from ``json`` onto ``record``."""
        for rule in self._rules.values():
            rule.assign(record, rule.extract(json))
