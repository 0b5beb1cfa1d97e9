"""
In-memory stand-in for a Snowflake account.

Understands just enough of the statements snowsync generates (CREATE, SHOW ...
LIKE, ALTER ... SET/UNSET, DROP) to run reconcilers end to end without a
network connection.
"""

import re
import threading

from packaging.version import Version
from snowflake.connector.errors import ProgrammingError

from snowsync.client import DOES_NOT_EXIST_ERR, OBJECT_ALREADY_EXISTS_ERR, SYNTAX_ERROR
from snowsync.enums import AccountEdition
from snowsync.session import ProviderConfig

STATEMENT_RE = re.compile(
    r'^(?P<verb>CREATE|ALTER|DROP) (?P<transient>TRANSIENT )?(?P<kind>WAREHOUSE|DATABASE|USER) "(?P<name>(?:[^"]|"")*)"\s*(?P<rest>.*)$',
    re.DOTALL,
)
SHOW_RE = re.compile(r"^SHOW (?P<kinds>WAREHOUSES|DATABASES|USERS) LIKE '(?P<pattern>(?:[^']|'')*)'$", re.DOTALL)
OPTION_RE = re.compile(r"""(\w+) = ('(?:[^']|'')*'|"(?:[^"]|"")*"|\S+)""")

SIZE_DISPLAY = {
    "XSMALL": "X-Small",
    "SMALL": "Small",
    "MEDIUM": "Medium",
    "LARGE": "Large",
    "XLARGE": "X-Large",
    "XXLARGE": "2X-Large",
}


def _unescape_string(body: str) -> str:
    return body.replace("''", "'").replace("\\\\", "\\")


def _parse_value(raw: str):
    if raw.startswith("'"):
        return _unescape_string(raw[1:-1])
    if raw.startswith('"'):
        return raw[1:-1].replace('""', '"')
    if raw in ("TRUE", "FALSE"):
        return raw == "TRUE"
    return int(raw)


def parse_options(text: str) -> dict:
    return {key.lower(): _parse_value(value) for key, value in OPTION_RE.findall(text)}


def _like_matches(pattern: str, name: str) -> bool:
    regex = ""
    escaped = False
    for char in pattern:
        if escaped:
            regex += re.escape(char)
            escaped = False
        elif char == "\\":
            escaped = True
        elif char == "%":
            regex += ".*"
        elif char == "_":
            regex += "."
        else:
            regex += re.escape(char)
    return re.fullmatch(regex, name, re.IGNORECASE | re.DOTALL) is not None


def _str(value):
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class FakeAccount:
    def __init__(self, version: str = "8.40.1"):
        self.objects = {"WAREHOUSE": {}, "DATABASE": {}, "USER": {}}
        self.statements = []
        self.version = version
        self.lock = threading.Lock()

    def mutations(self) -> list[str]:
        return [sql for sql in self.statements if not sql.startswith(("SHOW", "SELECT"))]

    def run(self, sql: str) -> list:
        with self.lock:
            self.statements.append(sql)
            if sql == "SELECT CURRENT_VERSION()":
                return [{"CURRENT_VERSION()": self.version}]
            show = SHOW_RE.match(sql)
            if show:
                return self._show(show.group("kinds")[:-1], _unescape_string(show.group("pattern")))
            statement = STATEMENT_RE.match(sql)
            if statement is None:
                raise ProgrammingError(f"SQL compilation error: syntax error in {sql!r}", errno=SYNTAX_ERROR)
            kind = statement.group("kind")
            name = statement.group("name").replace('""', '"')
            verb = statement.group("verb")
            rest = statement.group("rest")
            if verb == "CREATE":
                return self._create(kind, name, rest, bool(statement.group("transient")))
            if verb == "ALTER":
                return self._alter(kind, name, rest)
            return self._drop(kind, name)

    def _create(self, kind, name, rest, transient):
        if name in self.objects[kind]:
            raise ProgrammingError(
                f"SQL compilation error: Object '{name}' already exists.", errno=OBJECT_ALREADY_EXISTS_ERR
            )
        options = parse_options(rest)
        if transient:
            options["transient"] = True
        self.objects[kind][name] = options
        return [{"status": f"{kind.title()} {name} successfully created."}]

    def _require(self, kind, name):
        if name not in self.objects[kind]:
            raise ProgrammingError(
                f"SQL compilation error: {kind.title()} '{name}' does not exist or not authorized.",
                errno=DOES_NOT_EXIST_ERR,
            )
        return self.objects[kind][name]

    def _alter(self, kind, name, rest):
        options = self._require(kind, name)
        if rest.startswith("SET "):
            options.update(parse_options(rest[len("SET ") :]))
        elif rest.startswith("UNSET "):
            for key in rest[len("UNSET ") :].split(","):
                options.pop(key.strip().lower(), None)
        else:
            raise ProgrammingError(f"SQL compilation error: unexpected {rest!r}", errno=SYNTAX_ERROR)
        return [{"status": "Statement executed successfully."}]

    def _drop(self, kind, name):
        self._require(kind, name)
        del self.objects[kind][name]
        return [{"status": f"{name} successfully dropped."}]

    def _show(self, kind, pattern):
        rows = []
        for name, options in self.objects[kind].items():
            if _like_matches(pattern, name):
                rows.append(getattr(self, f"_{kind.lower()}_row")(name, options))
        return rows

    def _warehouse_row(self, name, options):
        return {
            "name": name,
            "state": "SUSPENDED" if options.get("initially_suspended") else "STARTED",
            "type": "STANDARD",
            "size": SIZE_DISPLAY[options.get("warehouse_size", "XSMALL")],
            "min_cluster_count": options.get("min_cluster_count", 1),
            "max_cluster_count": options.get("max_cluster_count", 1),
            "auto_suspend": options.get("auto_suspend", 600),
            "auto_resume": _str(options.get("auto_resume", True)),
            "scaling_policy": options.get("scaling_policy", "STANDARD"),
            "comment": _str(options.get("comment")),
            "owner": "SYSADMIN",
        }

    def _database_row(self, name, options):
        return {
            "name": name,
            "kind": "STANDARD",
            "options": "TRANSIENT" if options.get("transient") else "",
            "retention_time": str(options.get("data_retention_time_in_days", 1)),
            "comment": _str(options.get("comment")),
            "owner": "SYSADMIN",
        }

    def _user_row(self, name, options):
        return {
            "name": name,
            "login_name": _str(options.get("login_name", name)).upper(),
            "display_name": _str(options.get("display_name", name)),
            "email": _str(options.get("email")),
            "comment": _str(options.get("comment")),
            "disabled": _str(options.get("disabled", False)),
            "must_change_password": _str(options.get("must_change_password", False)),
            "default_warehouse": _str(options.get("default_warehouse")),
            "default_namespace": _str(options.get("default_namespace")),
            "default_role": _str(options.get("default_role")),
            "owner": "USERADMIN",
        }


class FakeCursor:
    def __init__(self, connection):
        self.connection = connection
        self._result = []

    def execute(self, sql):
        self._result = self.connection.account.run(sql)

    def fetchall(self):
        return self._result


class FakeConnection:
    user = "SNOWSYNC"
    role = "SYSADMIN"

    def __init__(self, account: FakeAccount):
        self.account = account

    def cursor(self, cursor_class=None):
        return FakeCursor(self)

    def close(self):
        # Checked back in to the pool
        pass


class FakePool:
    def __init__(self, account: FakeAccount):
        self.account = account
        self.checkouts = 0
        self.disposed = False
        self._lock = threading.Lock()

    def connect(self):
        with self._lock:
            self.checkouts += 1
        return FakeConnection(self.account)

    def dispose(self):
        self.disposed = True


def fake_config(account: FakeAccount, edition: AccountEdition = AccountEdition.STANDARD) -> ProviderConfig:
    return ProviderConfig(
        pool=FakePool(account),
        server_version=Version(account.version),
        account_edition=edition,
        dsn="SNOWSYNC:***@fake",
    )
