import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Optional

from packaging.version import InvalidVersion, Version
from sqlalchemy.pool import QueuePool

from .client import classify_error, execute
from .enums import AccountEdition
from .operations.connector import ConnectionParameters, SnowflakeConnectionError, connect

logger = logging.getLogger("snowsync")

DEFAULT_POOL_SIZE = 8
VERSION_PROBE = "SELECT CURRENT_VERSION()"


@dataclass(frozen=True)
class ProviderConfig:
    """
    Per-run context shared by every reconciler call.

    The pool is the only mutable part and is safe to use from many threads at
    once; everything else is fixed at construction.
    """

    pool: QueuePool
    server_version: Version
    account_edition: AccountEdition = AccountEdition.STANDARD
    dsn: Optional[str] = None

    @property
    def supports_multi_cluster(self) -> bool:
        return self.account_edition != AccountEdition.STANDARD

    @contextmanager
    def session(self, intent=None):
        """Check out one pooled connection for the duration of the block."""
        try:
            conn = self.pool.connect()
        except Exception as err:
            classified = classify_error(err, intent=intent)
            if classified is err:
                raise
            raise classified from err
        try:
            yield conn
        finally:
            conn.close()

    def close(self):
        self.pool.dispose()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()


def _parse_version(version_str) -> Version:
    if version_str is None or str(version_str).strip() == "":
        raise SnowflakeConnectionError(Exception(f"{VERSION_PROBE} returned an empty version"))
    # CURRENT_VERSION() may carry a build suffix, eg "8.40.1 b20241011"
    token = str(version_str).strip().split()[0]
    try:
        return Version(token)
    except InvalidVersion as err:
        raise SnowflakeConnectionError(Exception(f"{VERSION_PROBE} returned an unparsable version: {version_str!r}")) from err


def server_version(pool: QueuePool) -> Version:
    conn = pool.connect()
    try:
        rows = execute(conn, VERSION_PROBE)
    finally:
        conn.close()

    if len(rows) == 0:
        raise SnowflakeConnectionError(Exception(f"{VERSION_PROBE} returned an empty set"))
    return _parse_version(next(iter(rows[0].values()), None))


def create_pool(params: ConnectionParameters, pool_size: int = DEFAULT_POOL_SIZE) -> QueuePool:
    # Connections are opened lazily on first checkout
    return QueuePool(
        lambda: connect(params),
        pool_size=pool_size,
        max_overflow=0,
        reset_on_return=None,
    )


def configure(
    params: Optional[ConnectionParameters] = None,
    pool_size: int = DEFAULT_POOL_SIZE,
    **overrides,
) -> ProviderConfig:
    if params is None:
        params = ConnectionParameters.from_env(**overrides)
    elif overrides:
        raise ValueError("Pass either ConnectionParameters or keyword overrides, not both")
    params = params.validate()

    if not isinstance(pool_size, int) or pool_size < 1:
        raise ValueError(f"pool_size must be a positive integer, got: {pool_size}")

    pool = create_pool(params, pool_size=pool_size)
    try:
        version = server_version(pool)
    except Exception as err:
        pool.dispose()
        if isinstance(err, SnowflakeConnectionError):
            raise
        raise SnowflakeConnectionError(err) from err

    logger.info(f"Connected to Snowflake {version} as {params.dsn()} ({params.account_edition} edition)")
    return ProviderConfig(
        pool=pool,
        server_version=version,
        account_edition=params.account_edition,
        dsn=params.dsn(),
    )
