import pytest

from decl.types import TypeExpression


def test_parse_nested_generic():
    t = TypeExpression.parse("Dictionary<string, List<int>>")

    assert t.name == "Dictionary"
    assert [c.name for c in t.children] == ["string", "List"]
    assert t.children[1].children == (TypeExpression("int"),)
    assert str(t) == "Dictionary<string, List<int>>"


def test_canonical_form_normalizes_spacing():
    assert str(TypeExpression.parse("Map< K ,V >")) == "Map<K, V>"


def test_qualified_generic_keeps_qualifier_in_name():
    t = TypeExpression.parse("global::System.Collections.Generic.List<T>")

    assert t.name == "global::System.Collections.Generic.List"
    assert t.children == (TypeExpression("T"),)


def test_nullable_and_array_generics_are_opaque_leaves():
    nullable = TypeExpression.parse("List<int>?")
    array = TypeExpression.parse("List<T>[]")

    assert nullable == TypeExpression("List<int>?")
    assert array.children == ()
    assert array.name == "List<T>[]"


@pytest.mark.parametrize("text", ["", "List<int", "List<>", "List<int,>", "<int>", "A<B>>"])
def test_parse_rejects_malformed_text(text):
    with pytest.raises(ValueError):
        TypeExpression.parse(text)


def test_clone_is_equal_but_independent_tree():
    t = TypeExpression.parse("Task<List<T>>")
    c = t.clone()

    assert c == t
    assert c is not t
    assert c.children[0] is not t.children[0]


def test_named_helper_and_debug_json():
    t = TypeExpression.named("Task", TypeExpression("T"))

    assert t.is_generic
    assert t.to_debug_json() == {"name": "Task", "children": [{"name": "T", "children": []}]}


def test_tuple_type_is_an_opaque_leaf():
    assert TypeExpression.parse("(int, string)") == TypeExpression("(int, string)")
    assert TypeExpression.parse(" (int Id, string Name)? ").name == "(int Id, string Name)?"


def test_tuple_inside_generic_is_a_single_child():
    t = TypeExpression.parse("Task<(int Id, string Name)>")

    assert t.name == "Task"
    assert t.children == (TypeExpression("(int Id, string Name)"),)


def test_tuple_with_generic_members_does_not_split():
    t = TypeExpression.parse("Dictionary<string, (List<int> Ids, int Count)>")

    assert [str(c) for c in t.children] == ["string", "(List<int> Ids, int Count)"]


@pytest.mark.parametrize("text", ["(int, string", "Task<(int, string>", "Foo(int)", "Task<int>(x)"])
def test_unbalanced_or_misplaced_parentheses_are_rejected(text):
    with pytest.raises(ValueError):
        TypeExpression.parse(text)
