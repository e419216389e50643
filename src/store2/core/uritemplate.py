"""Plantillas de rutas (subset de RFC 6570).

Por qué un motor propio:
- Todas las operaciones de la API declaran su ruta como plantilla
  (`/catalogs/{pin}/{area}/products{?q,skip,take,sort}`).
- Solo necesitamos dos formas: sustitución simple `{var}` y un bloque de query
  final `{?a,b,c}`. El resto de RFC 6570 no se soporta.

Reglas:
- El orden de las variables de query se fija al parsear (tupla), nunca se
  deriva del orden del mapping que pasa el llamador. Misma entrada, misma URL
  byte a byte.
- `None` (o la clave ausente) significa "ausente"; la cadena vacía está
  presente.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Union
from urllib.parse import quote

from store2.core.errors import MissingVariableError, TemplateSyntaxError

_VARNAME_RE = re.compile(r"^[A-Za-z0-9_.]+$")

# Operadores de RFC 6570 que reconocemos pero no soportamos.
_UNSUPPORTED_OPERATORS = frozenset("+#./;&=,!@|")

ParameterSet = Mapping[str, object]


class Operator(str, Enum):
    SIMPLE = ""
    QUERY = "?"


@dataclass(frozen=True)
class Literal:
    text: str


@dataclass(frozen=True)
class Expression:
    operator: Operator
    variables: tuple[str, ...]


Segment = Union[Literal, Expression]


@dataclass(frozen=True)
class Template:
    """Plantilla compilada e inmutable.

    Se construye una vez por tipo de operación (constante de módulo) y se
    expande por llamada.
    """

    pattern: str
    segments: tuple[Segment, ...]

    @property
    def required_variables(self) -> tuple[str, ...]:
        return tuple(
            seg.variables[0]
            for seg in self.segments
            if isinstance(seg, Expression) and seg.operator is Operator.SIMPLE
        )

    @property
    def query_variables(self) -> tuple[str, ...]:
        for seg in self.segments:
            if isinstance(seg, Expression) and seg.operator is Operator.QUERY:
                return seg.variables
        return ()

    def expand(self, params: ParameterSet) -> str:
        return expand(self, params)

    def __str__(self) -> str:
        return self.pattern


def parse(pattern: str) -> Template:
    """Parsea `pattern` y devuelve un `Template`.

    Lanza `TemplateSyntaxError` ante llaves desbalanceadas, operadores
    desconocidos, nombres de variable inválidos o un bloque de query que no
    sea el último segmento.
    """

    segments: list[Segment] = []
    literal: list[str] = []
    pos = 0
    length = len(pattern)

    while pos < length:
        ch = pattern[pos]
        if ch == "}":
            raise TemplateSyntaxError(pattern, pos, "unmatched '}'")
        if ch != "{":
            literal.append(ch)
            pos += 1
            continue

        end = pattern.find("}", pos + 1)
        if end < 0:
            raise TemplateSyntaxError(pattern, pos, "unclosed '{'")
        nested = pattern.find("{", pos + 1, end)
        if nested >= 0:
            raise TemplateSyntaxError(pattern, nested, "nested '{'")

        if literal:
            segments.append(Literal("".join(literal)))
            literal = []
        segments.append(_parse_expression(pattern, pos, pattern[pos + 1 : end]))
        pos = end + 1

    if literal:
        segments.append(Literal("".join(literal)))

    for index, seg in enumerate(segments):
        if isinstance(seg, Expression) and seg.operator is Operator.QUERY:
            if index != len(segments) - 1:
                raise TemplateSyntaxError(
                    pattern, pattern.find("{?"), "query expression must be the last segment"
                )

    return Template(pattern=pattern, segments=tuple(segments))


def _parse_expression(pattern: str, pos: int, body: str) -> Expression:
    if not body:
        raise TemplateSyntaxError(pattern, pos, "empty expression")

    operator = Operator.SIMPLE
    if body[0] == "?":
        operator = Operator.QUERY
        body = body[1:]
    elif body[0] in _UNSUPPORTED_OPERATORS:
        raise TemplateSyntaxError(pattern, pos, f"unknown operator {body[0]!r}")

    names = tuple(body.split(","))
    for name in names:
        if not _VARNAME_RE.match(name):
            raise TemplateSyntaxError(pattern, pos, f"invalid variable name {name!r}")
    if len(set(names)) != len(names):
        raise TemplateSyntaxError(pattern, pos, "duplicate variable name")
    if operator is Operator.SIMPLE and len(names) != 1:
        raise TemplateSyntaxError(pattern, pos, "path expression takes exactly one variable")

    return Expression(operator=operator, variables=names)


def stringify(value: object) -> str:
    """Forma textual sin pérdida de un valor de parámetro."""

    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


def percent_encode(value: object) -> str:
    # Solo el conjunto unreserved (ALPHA / DIGIT / "-" / "." / "_" / "~") queda sin codificar.
    return quote(stringify(value), safe="")


def expand(template: Template, params: ParameterSet) -> str:
    """Expande `template` con `params`.

    Lanza `MissingVariableError` si falta una variable de ruta.
    """

    out: list[str] = []
    for seg in template.segments:
        if isinstance(seg, Literal):
            out.append(seg.text)
            continue

        if seg.operator is Operator.SIMPLE:
            name = seg.variables[0]
            value = params.get(name)
            if value is None:
                raise MissingVariableError(name, template.pattern)
            out.append(percent_encode(value))
            continue

        pairs = []
        for name in seg.variables:
            value = params.get(name)
            if value is None:
                continue
            pairs.append(f"{name}={percent_encode(value)}")
        if pairs:
            out.append("?" + "&".join(pairs))

    return "".join(out)
