from enum import Enum
from typing import Any

from .identifiers import quote_identifier, quote_string


class Prop:
    """
    Renders one attribute of a declared object as a DDL option, eg
    `WAREHOUSE_SIZE = 'SMALL'`.
    """

    def __init__(self, name: str, secret: bool = False):
        self.name = name.upper()
        self.secret = secret

    def render_value(self, value: Any) -> str:
        raise NotImplementedError

    def render(self, value: Any, redact: bool = False) -> str:
        rendered = "'***'" if (redact and self.secret) else self.render_value(value)
        return f"{self.name} = {rendered}"


class StringProp(Prop):
    def render_value(self, value):
        return quote_string(str(value))


class IntProp(Prop):
    def render_value(self, value):
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"{self.name} expects an integer, got: {value!r}")
        return str(value)


class BoolProp(Prop):
    def render_value(self, value):
        return "TRUE" if value else "FALSE"


class EnumProp(Prop):
    def __init__(self, name: str, enum_type: type[Enum], **kwargs):
        super().__init__(name, **kwargs)
        self.enum_type = enum_type

    def render_value(self, value):
        return quote_string(str(self.enum_type(value)))


class IdentifierProp(Prop):
    def render_value(self, value):
        return quote_identifier(str(value))


class Props:
    def __init__(self, **props: Prop):
        self.props = props

    def __getitem__(self, key: str) -> Prop:
        return self.props[key]

    def __contains__(self, key: str) -> bool:
        return key in self.props

    def __iter__(self):
        return iter(self.props)

    def render(self, data: dict, redact: bool = False) -> str:
        rendered = []
        for attr, prop in self.props.items():
            value = data.get(attr)
            if value is None:
                continue
            rendered.append(prop.render(value, redact=redact))
        return " ".join(rendered)
