from decl.model import Argument, MethodDeclaration
from decl.types import TypeExpression
from engine.specializer import (
    replace_generic_type,
    replace_generic_types,
    specialize_method,
    substitution_map,
)

T = TypeExpression.parse


def test_substitution_map_pairs_positionally():
    mapping = substitution_map(["TKey", "TValue"], [T("string"), T("List<int>")])

    assert mapping == {"TKey": T("string"), "TValue": T("List<int>")}


def test_identity_binding_is_left_out():
    mapping = substitution_map(["T", "U"], [T("T"), T("int")])

    assert mapping == {"U": T("int")}


def test_arity_mismatch_maps_only_the_shorter_prefix():
    assert substitution_map(["T", "U"], [T("int")]) == {"T": T("int")}
    assert substitution_map(["T"], [T("int"), T("string")]) == {"T": T("int")}


def test_replace_swaps_whole_node_including_children():
    mapping = {"T": T("Dictionary<string, int>")}

    out = replace_generic_types(T("Task<List<T>>"), mapping)

    assert str(out) == "Task<List<Dictionary<string, int>>>"


def test_replace_is_simultaneous():
    # T -> U must not be rewritten again by U -> int in the same map
    mapping = {"T": T("U"), "U": T("int")}

    assert str(replace_generic_types(T("Pair<T, U>"), mapping)) == "Pair<U, int>"


def test_replace_with_empty_map_returns_equal_copy():
    original = T("Task<List<T>>")

    out = replace_generic_types(original, {})

    assert out == original
    assert out is not original


def test_replacement_targets_are_not_shared():
    target = T("List<int>")
    mapping = {"T": target}

    a = replace_generic_types(T("T"), mapping)
    b = replace_generic_types(T("T"), mapping)

    assert a == b == target
    assert a is not target and b is not target


def test_replace_generic_type_renders_text():
    mapping = {"T": T("List<int>")}

    assert replace_generic_type("T", mapping) == "List<int>"
    assert replace_generic_type("TOther", mapping) == "TOther"


def test_specialize_method_rewrites_args_return_and_method_params():
    m = MethodDeclaration(
        name="Find",
        owner_interface_name="IRepo",
        return_type=T("Task<T>"),
        arguments=(Argument("key", T("TKey")), Argument("limit", T("int"))),
        method_generic_parameters=("T",),
        is_dispatchable=True,
    )

    out = specialize_method(m, {"T": T("User"), "TKey": T("Guid")})

    assert str(out.return_type) == "Task<User>"
    assert out.argument_list_with_types == "Guid key, int limit"
    assert out.method_generic_parameters == ("User",)
    assert out.owner_interface_name == "IRepo"
    assert out.is_dispatchable
    # input untouched
    assert str(m.return_type) == "Task<T>"


def test_specialize_method_rewrites_owner_type_parameters_as_text():
    m = MethodDeclaration(
        name="Get",
        owner_interface_name="IRepo",
        return_type=T("TValue"),
        owner_type_parameters=("TKey", "TValue"),
    )

    out = specialize_method(m, {"TKey": T("Guid"), "TValue": T("List<User>")})

    assert out.owner_type_parameters == ("Guid", "List<User>")
    assert out.qualified_owner_name == "IRepo<Guid, List<User>>"
    assert m.owner_type_parameters == ("TKey", "TValue")
