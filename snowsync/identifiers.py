IDENTIFIER_DELIMITER = '"'


def quote_identifier(name: str) -> str:
    """
    Render a raw object name as a delimited Snowflake identifier.

    Every embedded delimiter is doubled, so the result can be interpolated into
    DDL without altering the statement structure:

        ANALYTICS_WH   =>  "ANALYTICS_WH"
        my"db          =>  "my""db"
        (empty)        =>  ""
    """
    if not isinstance(name, str):
        raise TypeError(f"Identifier must be a string, got: {type(name)}")
    escaped = name.replace(IDENTIFIER_DELIMITER, IDENTIFIER_DELIMITER * 2)
    return f"{IDENTIFIER_DELIMITER}{escaped}{IDENTIFIER_DELIMITER}"


def unquote_identifier(quoted: str) -> str:
    if len(quoted) < 2 or not (quoted.startswith(IDENTIFIER_DELIMITER) and quoted.endswith(IDENTIFIER_DELIMITER)):
        raise ValueError(f"Not a delimited identifier: {quoted!r}")
    body = quoted[1:-1]
    if body.replace(IDENTIFIER_DELIMITER * 2, "").count(IDENTIFIER_DELIMITER) > 0:
        raise ValueError(f"Identifier contains an unescaped delimiter: {quoted!r}")
    return body.replace(IDENTIFIER_DELIMITER * 2, IDENTIFIER_DELIMITER)


def quote_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("'", "''")
    return f"'{escaped}'"


def like_pattern(name: str) -> str:
    """
    String literal for `SHOW ... LIKE`. Backslashes are escaped for LIKE; the
    `_` and `%` wildcards are left alone, so callers must filter the result by
    exact name.
    """
    return quote_string(name.replace("\\", "\\\\"))
