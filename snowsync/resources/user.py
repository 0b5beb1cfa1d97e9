from dataclasses import dataclass
from typing import Optional

from ..enums import ResourceType
from ..props import BoolProp, IdentifierProp, Props, StringProp
from .resource import Reconciler, ResourceSpec, _none_if_empty, _to_bool


@dataclass(frozen=True, repr=False)
class UserSpec(ResourceSpec):
    password: Optional[str] = None
    login_name: Optional[str] = None
    display_name: Optional[str] = None
    email: Optional[str] = None
    default_role: Optional[str] = None
    default_warehouse: Optional[str] = None
    default_namespace: Optional[str] = None
    must_change_password: Optional[bool] = None
    disabled: bool = False
    comment: Optional[str] = None

    resource_type = ResourceType.USER
    write_only_fields = ("password",)

    def __post_init__(self):
        super().__post_init__()
        # Snowflake stores login names uppercased
        if self.login_name is not None:
            object.__setattr__(self, "login_name", self.login_name.upper())

    def __repr__(self):
        data = self.to_dict()
        if data["password"] is not None:
            data["password"] = "***"
        return f"UserSpec({', '.join(f'{key}={value!r}' for key, value in data.items())})"


class User(Reconciler):
    """
    Description:
        A user identity that can log in to the account.

    Snowflake Docs:
        https://docs.snowflake.com/en/sql-reference/sql/create-user

    Fields:
        name (string, required): The name of the user.
        password (string): The password. Write-only, never read back or compared.
        login_name (string): Name used to log in. Stored uppercased.
        display_name (string): Name shown in the UI.
        email (string): Email address.
        default_role (string): Role active at login.
        default_warehouse (string): Warehouse active at login.
        default_namespace (string): Database or database.schema active at login.
        must_change_password (bool): Force a password change at next login.
        disabled (bool): Whether the user is disabled. Defaults to False.
        comment (string): A comment for the user.
    """

    resource_type = ResourceType.USER
    spec = UserSpec
    props = Props(
        password=StringProp("password", secret=True),
        login_name=StringProp("login_name"),
        display_name=StringProp("display_name"),
        email=StringProp("email"),
        default_role=IdentifierProp("default_role"),
        default_warehouse=IdentifierProp("default_warehouse"),
        default_namespace=StringProp("default_namespace"),
        must_change_password=BoolProp("must_change_password"),
        disabled=BoolProp("disabled"),
        comment=StringProp("comment"),
    )

    def spec_from_row(self, row: dict) -> UserSpec:
        return UserSpec(
            name=row["name"],
            login_name=_none_if_empty(row.get("login_name")),
            display_name=_none_if_empty(row.get("display_name")),
            email=_none_if_empty(row.get("email")),
            default_role=_none_if_empty(row.get("default_role")),
            default_warehouse=_none_if_empty(row.get("default_warehouse")),
            default_namespace=_none_if_empty(row.get("default_namespace")),
            must_change_password=_to_bool(row.get("must_change_password")),
            disabled=bool(_to_bool(row.get("disabled"))),
            comment=_none_if_empty(row.get("comment")),
        )
