import pytest

from graphsplit.params import (
    CType,
    GType,
    IPType,
    ObjType,
    Params,
    PType,
    RType,
    i2rubfactor,
)


@pytest.mark.parametrize("enum_cls", [PType, ObjType, CType, IPType, RType, GType])
def test_labels_round_trip(enum_cls):
    for member in enum_cls:
        assert enum_cls(member.value) is member


def test_refinement_labels():
    assert RType("2sided") is RType.SEP2SIDED
    assert RType("1sided") is RType.SEP1SIDED


@pytest.mark.parametrize("enum_cls", [PType, CType, GType])
def test_unknown_label_raises(enum_cls):
    with pytest.raises(ValueError):
        enum_cls("no-such-scheme")


def test_ufactor_conversion_matches_documented_values():
    assert i2rubfactor(30) == pytest.approx(1.03)
    assert i2rubfactor(200) == pytest.approx(1.20)
    assert i2rubfactor(1) == pytest.approx(1.001)


def test_ufactor_conversion_is_increasing():
    values = [i2rubfactor(u) for u in range(0, 300, 10)]
    assert values == sorted(values)
    assert i2rubfactor(0) == 1.0


def test_params_documented_defaults():
    p = Params()
    assert p.niter == 10
    assert p.ncuts == 1
    assert p.ncommon == 1


def test_params_instances_are_independent():
    a = Params(ubvec=[1.05])
    b = Params()
    assert b.ubvec is None
    assert a.ubvec == [1.05]