import pytest

from ferrodoc.where import in_array, logic_expr


def key_pair(key, value, placeholder):
    placeholder.append(key)
    return key, [value]


def name_scalar(value, placeholder):
    placeholder.append(value)
    return str(value), [value]


def test_and_joins_documents():
    seen = []
    sql, args = logic_expr("$and", [{"a": 1}, {"b": 2}], seen, key_pair)
    assert sql == "(a) AND (b)"
    assert args == [1, 2]
    assert seen == ["a", "b"]


def test_keys_in_one_document_match_and():
    together = logic_expr("$or", [{"a": 1, "b": 2}], [], key_pair)
    split = logic_expr("$and", [{"a": 1}, {"b": 2}], [], key_pair)
    assert together == split


def test_or_joins_each_document():
    sql, args = logic_expr("$or", [{"a": 1}, {"b": 2}, {"c": 3}], [], key_pair)
    assert sql.count(" OR") == 2
    assert " AND" not in sql
    assert args == [1, 2, 3]


def test_nor_negates():
    sql, args = logic_expr("$nor", [{"a": 1}, {"b": 2}], [], key_pair)
    assert sql == "NOT ( (a) OR (b))"
    assert args == [1, 2]


def test_nor_is_negated_or():
    or_sql, or_args = logic_expr("$or", [{"x": 5}, {"y": 6}], [], key_pair)
    nor_sql, nor_args = logic_expr("$nor", [{"x": 5}, {"y": 6}], [], key_pair)
    assert nor_sql.startswith("NOT (")
    assert nor_sql.endswith(")")
    assert nor_args == or_args
    assert or_sql in nor_sql


def test_empty_and():
    sql, args = logic_expr("$and", [], [], key_pair)
    assert sql == ""
    assert args == []


def test_unhandled_op():
    with pytest.raises(ValueError, match="unhandled op"):
        logic_expr("$xor", [{"a": 1}], [], key_pair)


def test_non_document_element():
    with pytest.raises(TypeError):
        logic_expr("$and", [42], [], key_pair)


def test_where_pair_error_propagates():
    def failing(key, value, placeholder):
        raise LookupError(key)

    with pytest.raises(LookupError):
        logic_expr("$or", [{"a": 1}], [], failing)


def test_in_array():
    seen = []
    sql, args = in_array(["x", "y"], seen, name_scalar)
    assert sql == "(x, y)"
    assert args == ["x", "y"]
    assert seen == ["x", "y"]


def test_in_array_parts_split_back():
    values = ["p", "q", "r"]
    sql, args = in_array(values, [], name_scalar)
    assert sql.startswith("(") and sql.endswith(")")
    assert sql[1:-1].split(", ") == values
    assert args == values


def test_in_array_scalar_error_propagates():
    def failing(value, placeholder):
        raise ValueError("bad scalar")

    with pytest.raises(ValueError, match="bad scalar"):
        in_array([1], [], failing)