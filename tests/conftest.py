"""Shared code-model fixtures for Depend Insight tests."""

import pytest

from depend_insight.code.registry import CodeRegistry


@pytest.fixture
def registry():
    """Empty registry."""
    return CodeRegistry()


@pytest.fixture
def linear_chain():
    """Four-level chain in one package: A <- B <- C <- D."""
    reg = CodeRegistry()
    reg.add_class("library", "A")
    reg.add_class("library", "B", parent="A")
    reg.add_class("library", "C", parent="B")
    reg.add_class("library", "D", parent="C")
    return reg


@pytest.fixture
def mixed_hierarchy():
    """Five shallow hierarchies in 'library' plus a filtered-out 'vendor' chain.

    library: 19 classes, 14 of them direct children of a root
        R1 <- C11..C14, R2 <- C21..C24, R3 <- C31..C33, R4 <- C41..C42, R5 <- C51
        plus the interface Visitable, implemented by every root
    vendor: V1 <- V2 <- V3
    """
    reg = CodeRegistry()
    reg.add_interface("library", "Visitable")
    for root, count in (("R1", 4), ("R2", 4), ("R3", 3), ("R4", 2), ("R5", 1)):
        reg.add_class("library", root, interfaces=["Visitable"])
        for i in range(1, count + 1):
            reg.add_class("library", f"C{root[1]}{i}", parent=root)

    reg.add_class("vendor", "V1")
    reg.add_class("vendor", "V2", parent="V1")
    reg.add_class("vendor", "V3", parent="V2")
    return reg


@pytest.fixture
def cross_package():
    """'app' classes extending 'vendor' classes.

    vendor: Base <- Middle
    app:    Leaf extends vendor.Middle, Other extends vendor.Base,
            Orphan extends the unknown Framework\\Controller
    """
    reg = CodeRegistry()
    reg.add_class("vendor", "Base")
    reg.add_class("vendor", "Middle", parent="Base")
    reg.add_class("app", "Leaf", parent="vendor.Middle")
    reg.add_class("app", "Other", parent="vendor.Base")
    reg.add_class("app", "Orphan", parent="Framework\\Controller")
    return reg
