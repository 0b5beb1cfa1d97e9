import logging
import time
from typing import Optional

import snowflake.connector
from snowflake.connector.cursor import SnowflakeCursor
from snowflake.connector.errors import (
    DataError,
    Error,
    ForbiddenError,
    IntegrityError,
    NotSupportedError,
    ProgrammingError,
)
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from .exceptions import (
    Intent,
    ResourceAlreadyExistsException,
    ResourceNotFoundException,
    SnowsyncException,
    SyntaxOrPermissionException,
    TransientConnectionException,
)
from .operations.connector import SnowflakeConnectionError

logger = logging.getLogger("snowsync")

UNSUPPORTED_FEATURE = 2
SYNTAX_ERROR = 1003
OBJECT_ALREADY_EXISTS_ERR = 2002
DOES_NOT_EXIST_ERR = 2003
INVALID_IDENTIFIER = 2004
OBJECT_DOES_NOT_EXIST_ERR = 2043
ACCESS_CONTROL_ERR = 3001
ALREADY_EXISTS_ERR = 3041

ALREADY_EXISTS_CODES = (OBJECT_ALREADY_EXISTS_ERR, ALREADY_EXISTS_ERR)
NOT_FOUND_CODES = (DOES_NOT_EXIST_ERR, OBJECT_DOES_NOT_EXIST_ERR)


def classify_error(err: Exception, intent: Optional[Intent] = None, sql: str = None) -> Exception:
    """
    Map a driver or pool failure onto the snowsync error taxonomy.

    Exceptions that don't come from the transport are returned unchanged so the
    caller can re-raise them as they are.
    """
    if isinstance(err, SnowsyncException):
        return err
    if isinstance(err, SnowflakeConnectionError) and err.__cause__ is not None:
        # Raised by a lazy connect inside the pool, classify the driver error it wraps
        classified = classify_error(err.__cause__, intent=intent, sql=sql)
        return err if classified is err.__cause__ else classified

    errno = getattr(err, "errno", None)
    message = getattr(err, "msg", None) or str(err)

    if isinstance(err, ProgrammingError):
        if errno in ALREADY_EXISTS_CODES:
            return ResourceAlreadyExistsException(message, intent=intent, errno=errno, sql=sql)
        if errno in NOT_FOUND_CODES:
            return ResourceNotFoundException(message, intent=intent, errno=errno, sql=sql)
        return SyntaxOrPermissionException(message, intent=intent, errno=errno, sql=sql)
    if isinstance(err, (ForbiddenError, IntegrityError, DataError, NotSupportedError)):
        return SyntaxOrPermissionException(message, intent=intent, errno=errno, sql=sql)
    # OperationalError, InterfaceError, HTTP gateway/timeout errors and the like
    if isinstance(err, Error):
        return TransientConnectionException(message, intent=intent, errno=errno, sql=sql)
    if isinstance(err, (PoolTimeoutError, TimeoutError, ConnectionError, OSError)):
        return TransientConnectionException(str(err) or type(err).__name__, intent=intent, sql=sql)
    return err


def execute(
    conn_or_cursor,
    sql: str,
    intent: Optional[Intent] = None,
    redacted_sql: Optional[str] = None,
) -> list:
    """
    Run a single statement and return its rows as dicts.

    `redacted_sql` is what gets logged and attached to errors when `sql` carries
    secrets such as passwords.
    """
    if not isinstance(sql, str):
        raise Exception(f"Unknown sql type: {type(sql)}, {sql}")

    if isinstance(conn_or_cursor, SnowflakeCursor):
        session = conn_or_cursor.connection
        cur = conn_or_cursor
        cur._use_dict_result = True
    else:
        # SnowflakeConnection, or the pool's proxy around one
        session = conn_or_cursor
        cur = session.cursor(snowflake.connector.DictCursor)

    sql_text = redacted_sql or sql
    session_header = f"[{session.user}:{session.role}] > {sql_text}"

    start = time.time()
    try:
        cur.execute(sql)
        result = cur.fetchall()
    except Exception as err:
        classified = classify_error(err, intent=intent, sql=sql_text)
        logger.error(f"{session_header}    \033[31m(err {getattr(err, 'errno', None)}, {time.time() - start:.2f}s)\033[0m")
        if classified is err:
            raise
        raise classified from err
    runtime = time.time() - start
    logger.warning(f"{session_header}    \033[94m({len(result)} rows, {runtime:.2f}s)\033[0m")
    return result
