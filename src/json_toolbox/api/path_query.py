"""
JSONPath query engine.

Supports a practical subset of JSONPath:

    $                   root
    .key ['key'] ["key"] member access
    [n]                 array index
    [*] .*              wildcard over array elements or object values
    ..key ..[*]         recursive descent
    [?(@.field OP v)]   filter, OP one of == != > < >= <=

A path is tokenized into segments first, then evaluated left to right over
an ordered list of current values.
"""

import logging
import operator
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from .converter import to_text

logger = logging.getLogger(__name__)

_MISSING = object()

_NAME_RE = re.compile(r'[^.\[\]]+')
_INDEX_RE = re.compile(r'[0-9]+')
_NUMBER_RE = re.compile(r'[-+]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][-+]?[0-9]+)?')
_FILTER_RE = re.compile(r'^@\.(\w+)\s*(==|!=|>=|<=|>|<)\s*(.+)$')

_OPERATORS = {
    '==': operator.eq,
    '!=': operator.ne,
    '>': operator.gt,
    '<': operator.lt,
    '>=': operator.ge,
    '<=': operator.le,
}


class PathSyntaxError(ValueError):
    """Raised when a path expression cannot be tokenized."""

    def __init__(self, message: str, position: int):
        super().__init__(f"{message} at position {position}")
        self.position = position


@dataclass(frozen=True)
class KeySegment:
    name: str


@dataclass(frozen=True)
class IndexSegment:
    index: int


@dataclass(frozen=True)
class WildcardSegment:
    pass


@dataclass(frozen=True)
class FilterCondition:
    """Parsed form of ``@.field OP literal``."""

    field: str
    operator: str
    value: Union[str, float]
    numeric: bool


@dataclass(frozen=True)
class FilterSegment:
    expression: str
    condition: Optional[FilterCondition]


@dataclass(frozen=True)
class RecursiveDescentSegment:
    remainder: Tuple[Any, ...]


Segment = Union[KeySegment, IndexSegment, WildcardSegment, FilterSegment, RecursiveDescentSegment]


@dataclass
class QueryResult:
    """Outcome of a path query. result is only meaningful when error is None."""

    result: Any = None
    error: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        if self.error is not None:
            return {'success': False, 'error': self.error}
        return {'success': True, 'result': self.result}


def parse_filter(expression: str) -> Optional[FilterCondition]:
    """
    Parse a filter body such as ``@.price < 10`` or ``@.name == 'x'``.

    Returns None when the expression is not of the supported shape.
    """
    match = _FILTER_RE.match(expression.strip())
    if not match:
        return None

    field, op, raw = match.groups()
    raw = raw.strip()
    if len(raw) >= 2 and raw[0] == raw[-1] and raw[0] in '\'"':
        return FilterCondition(field, op, raw[1:-1], numeric=False)
    if _NUMBER_RE.fullmatch(raw):
        return FilterCondition(field, op, float(raw), numeric=True)
    return FilterCondition(field, op, raw, numeric=False)


def tokenize_path(path: str) -> List[Segment]:
    """
    Split a path expression into segments.

    Args:
        path: Path expression, with or without the leading ``$``

    Returns:
        List of segments; a recursive descent segment is always last and
        carries the rest of the path

    Raises:
        PathSyntaxError: If the expression is malformed
    """
    text = path.strip()
    offset = 0
    if text.startswith('$'):
        text = text[1:]
        offset = 1
    return _tokenize(text, offset)


def _tokenize(text: str, offset: int) -> List[Segment]:
    segments: List[Segment] = []
    pos = 0

    while pos < len(text):
        if text.startswith('..', pos):
            rest = text[pos + 2:]
            if not rest or rest[0] == '.':
                raise PathSyntaxError("Recursive descent needs a target", offset + pos)
            if rest[0] == '[':
                remainder = _tokenize(rest, offset + pos + 2)
            else:
                remainder = _tokenize('.' + rest, offset + pos + 1)
            segments.append(RecursiveDescentSegment(tuple(remainder)))
            return segments

        char = text[pos]
        if char == '.':
            match = _NAME_RE.match(text, pos + 1)
            if not match:
                raise PathSyntaxError("Expected a member name", offset + pos + 1)
            segments.append(_name_segment(match.group(0)))
            pos = match.end()
        elif char == '[':
            segment, pos = _read_bracket(text, pos, offset)
            segments.append(segment)
        elif pos == 0:
            # bare leading member, e.g. "store.book"
            match = _NAME_RE.match(text, pos)
            if not match:
                raise PathSyntaxError(f"Unexpected character {char!r}", offset + pos)
            segments.append(_name_segment(match.group(0)))
            pos = match.end()
        else:
            raise PathSyntaxError(f"Unexpected character {char!r}", offset + pos)

    return segments


def _name_segment(name: str) -> Segment:
    return WildcardSegment() if name == '*' else KeySegment(name)


def _read_bracket(text: str, pos: int, offset: int) -> Tuple[Segment, int]:
    if text.startswith('[?(', pos):
        end = text.find(')]', pos)
        if end == -1:
            raise PathSyntaxError("Unterminated filter expression", offset + pos)
        expression = text[pos + 3:end]
        return FilterSegment(expression, parse_filter(expression)), end + 2

    if text[pos + 1:pos + 2] in ('"', "'"):
        quote = text[pos + 1]
        close = text.find(quote, pos + 2)
        if close == -1 or text[close + 1:close + 2] != ']':
            raise PathSyntaxError("Unterminated quoted member name", offset + pos)
        return KeySegment(text[pos + 2:close]), close + 2

    end = text.find(']', pos)
    if end == -1:
        raise PathSyntaxError("Unterminated bracket", offset + pos)
    inner = text[pos + 1:end].strip()
    if inner == '*':
        return WildcardSegment(), end + 1
    if _INDEX_RE.fullmatch(inner):
        return IndexSegment(int(inner)), end + 1
    raise PathSyntaxError(f"Unsupported bracket expression [{inner}]", offset + pos)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _as_number(text: str) -> Optional[float]:
    text = text.strip()
    return float(text) if _NUMBER_RE.fullmatch(text) else None


def matches_filter(condition: FilterCondition, item: Any) -> bool:
    """Check a single array element against a filter condition."""
    if not isinstance(item, dict):
        return False
    if condition.field not in item:
        return condition.operator == '!='

    compare = _OPERATORS[condition.operator]
    left = item[condition.field]
    right = condition.value

    if condition.numeric:
        if _is_number(left):
            return compare(left, right)
        number = _as_number(left) if isinstance(left, str) else None
        if number is None:
            return condition.operator == '!='
        return compare(number, right)

    if _is_number(left):
        number = _as_number(right)
        if number is None:
            return condition.operator == '!='
        return compare(left, number)

    return compare(to_text(left), right)


def _member(value: Any, name: str) -> Any:
    if isinstance(value, dict):
        return value.get(name, _MISSING)
    if isinstance(value, list) and _INDEX_RE.fullmatch(name):
        return _element(value, int(name))
    return _MISSING


def _element(value: Any, index: int) -> Any:
    if isinstance(value, list):
        return value[index] if index < len(value) else _MISSING
    if isinstance(value, dict):
        return value.get(str(index), _MISSING)
    return _MISSING


def _walk(value: Any) -> Iterator[Any]:
    """Yield value and every nested value, depth-first pre-order."""
    yield value
    if isinstance(value, list):
        for item in value:
            yield from _walk(item)
    elif isinstance(value, dict):
        for item in value.values():
            yield from _walk(item)


def _apply(segment: Segment, values: List[Any]) -> Tuple[List[Any], bool]:
    if isinstance(segment, KeySegment):
        found = (_member(value, segment.name) for value in values)
        return [value for value in found if value is not _MISSING], False

    if isinstance(segment, IndexSegment):
        found = (_element(value, segment.index) for value in values)
        return [value for value in found if value is not _MISSING], False

    results: List[Any] = []
    if isinstance(segment, WildcardSegment):
        for value in values:
            if isinstance(value, list):
                results.extend(value)
            elif isinstance(value, dict):
                results.extend(value.values())
        return results, True

    if isinstance(segment, FilterSegment):
        for value in values:
            if not isinstance(value, list):
                continue
            if segment.condition is None:
                logger.debug("Unsupported filter expression %r, passing array through", segment.expression)
                results.extend(value)
            else:
                results.extend(item for item in value if matches_filter(segment.condition, item))
        return results, True

    raise TypeError(f"Unknown path segment: {segment!r}")


def evaluate_segments(values: List[Any], segments) -> Tuple[List[Any], bool]:
    """
    Evaluate segments against a list of current values.

    Returns:
        Tuple of (resolved values, whether any segment fanned out)
    """
    fanned = False
    for segment in segments:
        if not values:
            break
        if isinstance(segment, RecursiveDescentSegment):
            results: List[Any] = []
            for base in values:
                for node in _walk(base):
                    found, _ = evaluate_segments([node], segment.remainder)
                    results.extend(found)
            return results, True

        values, fans_out = _apply(segment, values)
        fanned = fanned or fans_out

    return values, fanned


def _no_value(path: str) -> str:
    return f'No value found at path "{path}"'


def query_json_path(data: Any, path: str) -> QueryResult:
    """
    Evaluate a JSONPath expression against a parsed JSON value.

    Args:
        data: Parsed JSON value; never modified
        path: Path expression such as ``$.store.book[?(@.price < 10)].title``

    Returns:
        QueryResult with the matched value. A fan-out that yields exactly one
        match is unwrapped, several matches come back as a list, and no match
        is reported as an error.
    """
    if not path or path.strip() == '$':
        return QueryResult(result=data)

    try:
        segments = tokenize_path(path)
    except PathSyntaxError as e:
        logger.debug("Malformed path %r: %s", path, e)
        return QueryResult(error=_no_value(path))

    try:
        values, fanned = evaluate_segments([data], segments)
    except RecursionError:
        return QueryResult(error="Maximum nesting depth exceeded")

    if not values:
        logger.debug("Path %r matched nothing", path)
        return QueryResult(error=_no_value(path))
    if fanned and len(values) > 1:
        return QueryResult(result=values)
    return QueryResult(result=values[0])


_SIMPLE_KEY_RE = re.compile(r'[A-Za-z_$][\w$]*')


def _child_path(prefix: str, key: str) -> str:
    if _SIMPLE_KEY_RE.fullmatch(key):
        return f"{prefix}.{key}"
    if "'" in key:
        return f'{prefix}["{key}"]'
    return f"{prefix}['{key}']"


def _example_paths(data: Any, prefix: str, depth: int) -> List[str]:
    if depth > 3:
        return []

    paths: List[str] = []
    if isinstance(data, list):
        if data:
            path = f"{prefix}[0]"
            paths.append(path)
            paths.extend(_example_paths(data[0], path, depth + 1))
    elif isinstance(data, dict):
        for key in list(data)[:5]:
            path = _child_path(prefix, key)
            paths.append(path)
            paths.extend(_example_paths(data[key], path, depth + 1))
    return paths


def generate_path_examples(data: Any, limit: int = 8) -> List[str]:
    """Build a short list of example paths that resolve in data."""
    return ['$'] + _example_paths(data, '$', 0)[:max(limit - 1, 0)]
