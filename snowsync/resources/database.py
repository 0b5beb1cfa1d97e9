from dataclasses import dataclass
from typing import Optional

from ..enums import ResourceType
from ..identifiers import quote_identifier
from ..props import IntProp, Props, StringProp
from .resource import Reconciler, ResourceSpec, _none_if_empty, _to_int


@dataclass(frozen=True)
class DatabaseSpec(ResourceSpec):
    transient: bool = False
    data_retention_time_in_days: Optional[int] = None
    comment: Optional[str] = None

    resource_type = ResourceType.DATABASE
    create_only_fields = ("transient",)


class Database(Reconciler):
    """
    Description:
        A database, the top-level container for schemas.

    Snowflake Docs:
        https://docs.snowflake.com/en/sql-reference/sql/create-database

    Fields:
        name (string, required): The name of the database.
        transient (bool): Create a transient database. Can't be changed afterwards. Defaults to False.
        data_retention_time_in_days (int): Time Travel retention. Account default if not specified.
        comment (string): A comment for the database.
    """

    resource_type = ResourceType.DATABASE
    spec = DatabaseSpec
    props = Props(
        data_retention_time_in_days=IntProp("data_retention_time_in_days"),
        comment=StringProp("comment"),
    )

    def create_sql(self, spec: DatabaseSpec, redact: bool = False) -> str:
        transient = "TRANSIENT " if spec.transient else ""
        options = self.props.render(spec.to_dict(), redact=redact)
        return f"CREATE {transient}DATABASE {quote_identifier(spec.name)} {options}".strip()

    def spec_from_row(self, row: dict) -> DatabaseSpec:
        options = row.get("options") or ""
        return DatabaseSpec(
            name=row["name"],
            transient="TRANSIENT" in options.upper(),
            data_retention_time_in_days=_to_int(row.get("retention_time")),
            comment=_none_if_empty(row.get("comment")),
        )
