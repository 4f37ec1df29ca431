"""
Test cases for the JSONPath query engine.
Covers tokenization, member/index access, wildcards, recursive descent and filters.
"""

import copy

import jsonpath_ng
import pytest

from json_toolbox.api.path_query import (
    query_json_path,
    tokenize_path,
    parse_filter,
    generate_path_examples,
    PathSyntaxError,
    KeySegment,
    IndexSegment,
    WildcardSegment,
    FilterSegment,
    FilterCondition,
    RecursiveDescentSegment,
)


STORE = {
    "store": {
        "book": [
            {"category": "reference", "author": "Nigel Rees",
             "title": "Sayings of the Century", "price": 8.95},
            {"category": "fiction", "author": "Evelyn Waugh",
             "title": "Sword of Honour", "price": 12.99},
            {"category": "fiction", "author": "Herman Melville",
             "title": "Moby Dick", "isbn": "0-553-21311-3", "price": 8.99},
            {"category": "fiction", "author": "J. R. R. Tolkien",
             "title": "The Lord of the Rings", "isbn": "0-395-19395-8", "price": 22.99}
        ],
        "bicycle": {"color": "red", "price": 19.95}
    }
}

AUTHORS = ["Nigel Rees", "Evelyn Waugh", "Herman Melville", "J. R. R. Tolkien"]


def query(path, data=STORE):
    result = query_json_path(data, path)
    assert result.found, result.error
    return result.result


def assert_no_value(path, data=STORE):
    result = query_json_path(data, path)
    assert not result.found
    assert result.error == f'No value found at path "{path}"'


class TestTokenizer:
    """Test path tokenization into segments."""

    def test_mixed_segments(self):
        segments = tokenize_path("$.a['b c'][0][*]..d")
        assert segments == [
            KeySegment("a"),
            KeySegment("b c"),
            IndexSegment(0),
            WildcardSegment(),
            RecursiveDescentSegment((KeySegment("d"),)),
        ]

    def test_root_only(self):
        assert tokenize_path("$") == []

    def test_without_root(self):
        assert tokenize_path("store.book") == [KeySegment("store"), KeySegment("book")]

    def test_dot_wildcard(self):
        assert tokenize_path("$.store.*") == [KeySegment("store"), WildcardSegment()]

    def test_double_quoted_key(self):
        assert tokenize_path('$["a.b"]') == [KeySegment("a.b")]

    def test_recursive_descent_keeps_remainder(self):
        segments = tokenize_path("$.a..b[0].c")
        assert segments == [
            KeySegment("a"),
            RecursiveDescentSegment((KeySegment("b"), IndexSegment(0), KeySegment("c"))),
        ]

    def test_recursive_descent_with_bracket(self):
        assert tokenize_path("$..[*]") == [RecursiveDescentSegment((WildcardSegment(),))]

    def test_filter_segment(self):
        segments = tokenize_path("$[?(@.x > 1)]")
        assert segments == [FilterSegment("@.x > 1", FilterCondition("x", ">", 1.0, True))]

    @pytest.mark.parametrize("path", ["$.a[", "$.a[-1]", "$.", "$..", "$...a", "$.a]", "$['a", "$[?(@.a == 1"])
    def test_malformed_paths_raise(self, path):
        with pytest.raises(PathSyntaxError):
            tokenize_path(path)


class TestParseFilter:
    """Test filter expression parsing."""

    def test_numeric_literal(self):
        assert parse_filter("@.price < 10") == FilterCondition("price", "<", 10.0, True)

    def test_quoted_literal(self):
        assert parse_filter("@.name == 'Bob'") == FilterCondition("name", "==", "Bob", False)
        assert parse_filter('@.name != "Bob"') == FilterCondition("name", "!=", "Bob", False)

    def test_quoted_number_stays_string(self):
        assert parse_filter("@.code == '42'") == FilterCondition("code", "==", "42", False)

    def test_bare_word_literal(self):
        assert parse_filter("@.active == true") == FilterCondition("active", "==", "true", False)

    def test_two_character_operators(self):
        assert parse_filter("@.n>=2").operator == ">="
        assert parse_filter("@.n<=2").operator == "<="

    def test_unsupported_shape(self):
        assert parse_filter("price < 10") is None
        assert parse_filter("@.a") is None


class TestQueryBasics:
    """Test root, member and index access."""

    def test_root_returns_value_unchanged(self):
        result = query_json_path(STORE, "$")
        assert result.found
        assert result.result is STORE

    def test_empty_path_returns_value(self):
        assert query_json_path([1, 2], "").result == [1, 2]

    @pytest.mark.parametrize("value", [None, 0, "text", [], {}, [1, [2]], {"a": None}])
    def test_root_for_any_value(self, value):
        assert query_json_path(value, "$").result == value

    def test_nested_member(self):
        assert query("$.a.b", {"a": {"b": 1}}) == 1

    def test_dot_path(self):
        assert query("$.store.bicycle.color") == "red"

    def test_path_without_root(self):
        assert query("store.bicycle.color") == "red"

    def test_bracket_keys(self):
        assert query("$['store']['bicycle'][\"color\"]") == "red"

    def test_array_index(self):
        assert query("$.store.book[0].title") == "Sayings of the Century"

    def test_dot_index_on_array(self):
        assert query("$.store.book.1.author") == "Evelyn Waugh"

    def test_container_result_is_not_flattened(self):
        assert query("$.store.book") == STORE["store"]["book"]

    def test_null_value_is_found(self):
        result = query_json_path({"a": None}, "$.a")
        assert result.found
        assert result.result is None

    def test_index_on_object_uses_string_key(self):
        assert query("$[0]", {"0": "zero"}) == "zero"


class TestQueryMisses:
    """Test that unresolvable paths report an error instead of raising."""

    def test_missing_key(self):
        assert_no_value("$.store.car")

    def test_index_out_of_range(self):
        assert_no_value("$.store.book[10]")

    def test_member_of_scalar(self):
        assert_no_value("$.store.bicycle.color.shade")

    def test_key_on_array(self):
        assert_no_value("$.store.book.title")

    @pytest.mark.parametrize("path", ["$.store[", "$.store.book[-1]", "$.", "$..", "$.store]"])
    def test_malformed_path(self, path):
        assert_no_value(path)

    def test_wildcard_on_scalar(self):
        assert_no_value("$.store.bicycle.color[*]")

    def test_result_to_dict(self):
        assert query_json_path(STORE, "$.nope").to_dict() == {
            'success': False,
            'error': 'No value found at path "$.nope"'
        }
        assert query_json_path(STORE, "$.store.bicycle.price").to_dict() == {
            'success': True,
            'result': 19.95
        }


class TestWildcard:
    """Test [*] and .* fan-out."""

    def test_array_wildcard(self):
        assert query("$.store.book[*].author") == AUTHORS

    def test_missing_members_are_dropped(self):
        assert query("$.store.book[*].isbn") == ["0-553-21311-3", "0-395-19395-8"]

    def test_object_wildcard(self):
        assert query("$.store.*") == [STORE["store"]["book"], STORE["store"]["bicycle"]]

    def test_bracket_wildcard_on_object(self):
        assert query("$.store.bicycle[*]") == ["red", 19.95]

    def test_single_match_is_unwrapped(self):
        assert query("$.items[*].id", {"items": [{"id": 7}, {"name": "x"}]}) == 7

    def test_nested_wildcards_flatten(self):
        data = {"rows": [[1, 2], [3]]}
        assert query("$.rows[*][*]", data) == [1, 2, 3]

    def test_empty_array_has_no_value(self):
        assert_no_value("$.items[*]", {"items": []})


class TestRecursiveDescent:
    """Test .. search over the whole subtree."""

    def test_depth_first_order(self):
        data = {"a": {"b": {"c": 5}}, "d": {"c": 6}}
        assert query("$..c", data) == [5, 6]

    def test_all_prices(self):
        assert query("$..price") == [8.95, 12.99, 8.99, 22.99, 19.95]

    def test_with_prefix(self):
        assert query("$.store.bicycle..price") == 19.95

    def test_prefix_must_resolve(self):
        assert_no_value("$.garage..price")

    def test_remainder_path(self):
        assert query("$..book[2].title") == "Moby Dick"

    def test_all_authors(self):
        assert query("$..author") == AUTHORS

    def test_matches_nested_in_matches(self):
        data = {"c": {"c": 1}}
        assert query("$..c", data) == [{"c": 1}, 1]

    def test_arrays_are_searched(self):
        data = [{"id": 1, "children": [{"id": 2}]}, {"id": 3}]
        assert query("$..id", data) == [1, 2, 3]

    def test_recursive_wildcard(self):
        data = {"a": [1, {"b": 2}]}
        assert query("$..[*]", data) == [[1, {"b": 2}], 1, {"b": 2}, 2]

    def test_recursive_filter(self):
        data = {"groups": [{"users": [{"age": 30}, {"age": 12}]}, {"users": [{"age": 40}]}]}
        assert query("$..users[?(@.age > 18)].age", data) == [30, 40]

    def test_no_match(self):
        assert_no_value("$..missing")


class TestFilters:
    """Test [?(@.field OP value)] filters."""

    def test_greater_than(self):
        data = [{"x": 1}, {"x": 2}, {"x": 3}]
        assert query("$[?(@.x>1)]", data) == [{"x": 2}, {"x": 3}]

    def test_numeric_filter_then_member(self):
        assert query("$.store.book[?(@.price < 10)].title") == ["Sayings of the Century", "Moby Dick"]

    def test_string_equality_single_match_unwrapped(self):
        assert query("$.store.book[?(@.category == 'reference')]") == STORE["store"]["book"][0]

    def test_not_equal(self):
        assert query('$.store.book[?(@.author != "Evelyn Waugh")].price') == [8.95, 8.99, 22.99]

    def test_greater_or_equal(self):
        assert query("$.store.book[?(@.price >= 22.99)].title") == "The Lord of the Rings"

    def test_less_or_equal(self):
        assert query("$.store.book[?(@.price <= 8.99)].author") == ["Nigel Rees", "Herman Melville"]

    def test_numeric_string_field(self):
        assert query("$[?(@.v > 9)]", [{"v": "10"}, {"v": "9"}, {"v": "abc"}]) == {"v": "10"}

    def test_numeric_field_against_quoted_number(self):
        assert query("$[?(@.n == '5')]", [{"n": 5}, {"n": 6}]) == {"n": 5}

    def test_boolean_field(self):
        assert query("$[?(@.ok == true)]", [{"ok": True}, {"ok": False}]) == {"ok": True}

    def test_null_field(self):
        assert query("$[?(@.v == null)]", [{"v": None}, {"v": 1}]) == {"v": None}

    def test_missing_field_only_matches_not_equal(self):
        data = [{"a": 1}, {"b": 2}]
        assert query("$[?(@.a != 1)]", data) == {"b": 2}
        assert_no_value("$[?(@.a == 2)]", data)

    def test_non_objects_never_match(self):
        assert query("$[?(@.x == 2)]", [1, "x", {"x": 2}, [2]]) == {"x": 2}

    def test_unsupported_expression_passes_array_through(self):
        titles = [book["title"] for book in STORE["store"]["book"]]
        assert query("$.store.book[?(price < 10)].title") == titles

    def test_filter_on_object_has_no_value(self):
        assert_no_value("$.store.bicycle[?(@.color == 'red')]")

    def test_no_matches(self):
        assert_no_value("$.store.book[?(@.price > 100)]")


class TestPurity:
    """Queries never modify their input."""

    @pytest.mark.parametrize("path", [
        "$", "$.store.book[*]", "$..price", "$.store.book[?(@.price < 10)]", "$.store.*"
    ])
    def test_input_not_mutated(self, path):
        data = copy.deepcopy(STORE)
        query_json_path(data, path)
        assert data == STORE


class TestPathExamples:
    """Test example path generation."""

    def test_examples_start_with_root(self):
        assert generate_path_examples(42) == ["$"]

    def test_examples_for_nested_document(self):
        data = {"a": {"b": [1]}, "c d": 2}
        assert generate_path_examples(data) == ["$", "$.a", "$.a.b", "$.a.b[0]", "$['c d']"]

    def test_limit(self):
        paths = generate_path_examples(STORE)
        assert len(paths) == 8
        assert paths[:4] == ["$", "$.store", "$.store.book", "$.store.book[0]"]

    def test_examples_resolve(self):
        data = {"user's": {"x": 1}, "list": [{"k": True}], "plain": None}
        for path in generate_path_examples(data, limit=20):
            assert query_json_path(data, path).found, path


class TestReferenceImplementation:
    """Cross-check plain paths against jsonpath-ng."""

    @pytest.mark.parametrize("path", [
        "$.store.bicycle.color",
        "$.store.book[0].title",
        "$.store.book[*].author",
        "$.store.book[3].price",
    ])
    def test_matches_jsonpath_ng(self, path):
        expected = [match.value for match in jsonpath_ng.parse(path).find(STORE)]
        result = query(path)
        assert (result if len(expected) > 1 else [result]) == expected
