from decl.graph import InheritanceGraph
from decl.model import BaseReference, InterfaceDeclaration, MethodDeclaration
from decl.types import TypeExpression
from engine.eligibility import EligibilityFilter


def m(name, owner, dispatch):
    return MethodDeclaration(name=name, owner_interface_name=owner, return_type=TypeExpression("void"), is_dispatchable=dispatch)


def names(decls):
    return [d.name for d in EligibilityFilter(InheritanceGraph(decls)).eligible_interfaces()]


def test_interface_with_dispatch_method_is_eligible():
    decls = [InterfaceDeclaration("IApi", own_methods=(m("Get", "IApi", True),))]

    assert names(decls) == ["IApi"]


def test_eligibility_propagates_from_base():
    decls = [
        InterfaceDeclaration("IBase", own_methods=(m("Get", "IBase", True),)),
        InterfaceDeclaration("IMid", base_references=(BaseReference("IBase"),), own_methods=(m("Plain", "IMid", False),)),
        InterfaceDeclaration("ILeaf", base_references=(BaseReference("IMid"),)),
    ]

    assert names(decls) == ["IBase", "IMid", "ILeaf"]


def test_closure_without_dispatch_methods_is_excluded():
    decls = [
        InterfaceDeclaration("IPlainBase", own_methods=(m("Dispose", "IPlainBase", False),)),
        InterfaceDeclaration("IPlain", base_references=(BaseReference("IPlainBase"),)),
        InterfaceDeclaration("IExternalOnly", base_references=(BaseReference("IDisposable"),)),
    ]

    assert names(decls) == []


def test_base_lookup_is_arity_sensitive():
    decls = [
        InterfaceDeclaration("IRepo", ("T",), own_methods=(m("All", "IRepo", True),)),
        # non-generic reference: IRepo`0 does not exist, so nothing is inherited
        InterfaceDeclaration("IUsers", base_references=(BaseReference("IRepo"),)),
        InterfaceDeclaration("IOrders", base_references=(BaseReference("IRepo", (TypeExpression("Order"),)),)),
    ]

    assert names(decls) == ["IRepo", "IOrders"]


def test_cyclic_closure_does_not_hang():
    decls = [
        InterfaceDeclaration("IA", base_references=(BaseReference("IB"),)),
        InterfaceDeclaration("IB", base_references=(BaseReference("IA"),), own_methods=(m("Get", "IB", True),)),
    ]

    assert names(decls) == ["IA", "IB"]


def test_result_is_memoized():
    decl = InterfaceDeclaration("IApi", own_methods=(m("Get", "IApi", True),))
    f = EligibilityFilter(InheritanceGraph([decl]))

    assert f.is_eligible(decl)
    assert f._memo == {("IApi", 0): True}
