import logging
from dataclasses import dataclass, fields, replace
from typing import Any, ClassVar, Optional

from inflection import pluralize

from ..client import execute
from ..enums import ResourceType
from ..exceptions import (
    Intent,
    InvalidChangeException,
    ResourceNotFoundException,
    SnowsyncException,
    WrongEditionException,
)
from ..identifiers import like_pattern, quote_identifier
from ..props import Props
from ..session import ProviderConfig

logger = logging.getLogger("snowsync")

CREATE = "create"
UPDATE = "update"
NO_CHANGE = "none"


@dataclass(frozen=True)
class ResourceSpec:
    """
    Declared state of one object. A field left as None is unmanaged: it is
    never compared against the live object and never altered.
    """

    name: str

    resource_type: ClassVar[ResourceType]
    # Accepted at creation, never reported back by SHOW
    write_only_fields: ClassVar[tuple[str, ...]] = ()
    # Reported back, but changing them means recreating the object
    create_only_fields: ClassVar[tuple[str, ...]] = ()
    # Only available on enterprise editions and above
    enterprise_only_fields: ClassVar[tuple[str, ...]] = ()

    def __post_init__(self):
        if not isinstance(self.name, str) or self.name == "":
            raise ValueError(f"{type(self).__name__} name must be a non-empty string, got: {self.name!r}")

    def _coerce(self, attr: str, cls):
        value = getattr(self, attr)
        if value is not None and not isinstance(value, cls):
            object.__setattr__(self, attr, cls(value))

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def field_names(cls) -> list[str]:
        return [f.name for f in fields(cls)]


def diff(desired: ResourceSpec, actual: ResourceSpec) -> dict[str, Any]:
    """
    Attributes to change so that `actual` matches `desired`.

    Only managed attributes (non-None in `desired`) take part; write-only
    attributes can't be observed and never produce drift.
    """
    if type(desired) is not type(actual):
        raise TypeError(f"Cannot diff {type(desired).__name__} against {type(actual).__name__}")
    if desired.name != actual.name:
        raise ValueError(f"Cannot diff different objects: {desired.name!r} and {actual.name!r}")

    changes = {}
    for attr in desired.field_names():
        if attr == "name" or attr in desired.write_only_fields:
            continue
        desired_value = getattr(desired, attr)
        if desired_value is None:
            continue
        if desired_value != getattr(actual, attr):
            changes[attr] = desired_value
    return changes


class Reconciler:
    """
    Create, read, update and delete one kind of Snowflake object.

    Reconcilers hold no state between calls. Every call takes the run's
    ProviderConfig explicitly and checks a connection out of its pool.
    """

    resource_type: ClassVar[ResourceType]
    spec: ClassVar[type[ResourceSpec]]
    props: ClassVar[Props]

    @property
    def kind(self) -> str:
        return str(self.resource_type)

    @property
    def show_label(self) -> str:
        return pluralize(self.kind.lower()).upper()

    def spec_from_row(self, row: dict) -> ResourceSpec:
        raise NotImplementedError

    def create_sql(self, spec: ResourceSpec, redact: bool = False) -> str:
        options = self.props.render(spec.to_dict(), redact=redact)
        return f"CREATE {self.kind} {quote_identifier(spec.name)} {options}".strip()

    def _check_spec(self, spec: ResourceSpec):
        if not isinstance(spec, self.spec):
            raise TypeError(f"{type(self).__name__} expects {self.spec.__name__}, got: {type(spec).__name__}")

    def _check_edition(self, config: ProviderConfig, data: dict, intent: Intent):
        if config.supports_multi_cluster:
            return
        used = [attr for attr in self.spec.enterprise_only_fields if data.get(attr) is not None]
        if used:
            raise WrongEditionException(
                f"{', '.join(used)} requires enterprise edition or above, account is {config.account_edition}",
                intent=intent,
            )

    def _execute(self, config: ProviderConfig, sql: str, intent: Intent, redacted_sql: Optional[str] = None) -> list:
        with config.session(intent) as conn:
            return execute(conn, sql, intent=intent, redacted_sql=redacted_sql)

    def create(self, config: ProviderConfig, spec: ResourceSpec):
        self._check_spec(spec)
        intent = Intent(CREATE, self.resource_type, spec.name)
        self._check_edition(config, spec.to_dict(), intent)
        sql = self.create_sql(spec)
        redacted = self.create_sql(spec, redact=True)
        self._execute(config, sql, intent, redacted_sql=redacted if redacted != sql else None)

    def read(self, config: ProviderConfig, name: str) -> ResourceSpec:
        intent = Intent("read", self.resource_type, name)
        rows = self._execute(config, f"SHOW {self.show_label} LIKE {like_pattern(name)}", intent)
        matches = [row for row in rows if row["name"] == name]

        if len(matches) == 0:
            raise ResourceNotFoundException("object does not exist", intent=intent)
        if len(matches) > 1:
            raise SnowsyncException(f"found {len(matches)} objects with this name", intent=intent)

        try:
            spec = self.spec_from_row(matches[0])
        except (KeyError, TypeError, ValueError) as err:
            raise SnowsyncException(f"unexpected SHOW {self.show_label} row: {err}", intent=intent) from err
        if not config.supports_multi_cluster and self.spec.enterprise_only_fields:
            spec = replace(spec, **{attr: None for attr in self.spec.enterprise_only_fields})
        return spec

    def exists(self, config: ProviderConfig, name: str) -> bool:
        try:
            self.read(config, name)
        except ResourceNotFoundException:
            return False
        return True

    def update_sql(self, name: str, changes: dict[str, Any], redact: bool = False) -> list[str]:
        identifier = quote_identifier(name)
        statements = []
        to_set = {attr: value for attr, value in changes.items() if value is not None}
        to_unset = [self.props[attr].name for attr in self.props if attr in changes and changes[attr] is None]
        if to_set:
            statements.append(f"ALTER {self.kind} {identifier} SET {self.props.render(to_set, redact=redact)}")
        if to_unset:
            statements.append(f"ALTER {self.kind} {identifier} UNSET {', '.join(to_unset)}")
        return statements

    def update(self, config: ProviderConfig, name: str, changes: dict[str, Any]):
        intent = Intent(UPDATE, self.resource_type, name)
        if not changes:
            logger.debug(f"No changes for {str(self.resource_type).lower()} {name}")
            return

        known = self.spec.field_names()
        unknown = [attr for attr in changes if attr not in known or attr == "name"]
        if unknown:
            raise InvalidChangeException(f"cannot change {', '.join(unknown)}", intent=intent)
        create_only = [attr for attr in changes if attr in self.spec.create_only_fields]
        if create_only:
            raise InvalidChangeException(
                f"{', '.join(create_only)} can only be set when the object is created", intent=intent
            )
        self._check_edition(config, changes, intent)

        statements = self.update_sql(name, changes)
        redacted = self.update_sql(name, changes, redact=True)
        for sql, redacted_sql in zip(statements, redacted):
            self._execute(config, sql, intent, redacted_sql=redacted_sql if redacted_sql != sql else None)

    def delete(self, config: ProviderConfig, name: str) -> bool:
        """Drop the object. Returns False if it was already gone."""
        intent = Intent("delete", self.resource_type, name)
        try:
            self._execute(config, f"DROP {self.kind} {quote_identifier(name)}", intent)
        except ResourceNotFoundException:
            logger.warning(f"{str(self.resource_type).lower()} {name} does not exist, nothing to drop")
            return False
        return True

    def converge(self, config: ProviderConfig, spec: ResourceSpec) -> str:
        """
        Bring one object in line with its declaration: create it when absent,
        alter the drifted attributes when present.
        """
        self._check_spec(spec)
        try:
            actual = self.read(config, spec.name)
        except ResourceNotFoundException:
            self.create(config, spec)
            return CREATE

        changes = diff(spec, actual)
        if not changes:
            return NO_CHANGE
        self.update(config, spec.name, changes)
        return UPDATE


def _none_if_empty(value):
    if value is None or value == "" or value == "null":
        return None
    return value


def _to_bool(value) -> Optional[bool]:
    value = _none_if_empty(value)
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    return str(value).lower() == "true"


def _to_int(value) -> Optional[int]:
    value = _none_if_empty(value)
    if value is None:
        return None
    return int(value)
