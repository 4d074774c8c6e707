import numpy as np
import pytest

from MLA.Tensor.tensor import Tensor, convert, HASH_TAG
from MLA.Utilities.arrays import hashArray
from MLA.Utilities.errors import BoundsError, DimensionMismatch, ArgumentError, InexactConversion

epsilon = 1e-10


def test_properties():
    t1 = Tensor(np.random.rand(3, 3))
    assert t1.shape == (3, 3)
    assert t1.dim(0) == 3
    assert t1.rank == 2
    assert t1.size == 9
    assert t1.dtype == np.float64

    t2 = Tensor(np.random.randint(-10, 10, size=(3, 3, 3)).astype(np.int32))
    assert t2.shape == (3, 3, 3)
    assert t2.dim(1) == 3
    assert t2.rank == 3
    assert t2.size == 27
    assert t2.dtype == np.int32

    t3 = Tensor(np.float32(3.0))
    assert t3.shape == ()
    assert t3.dim(2) == 1
    assert t3.rank == 0
    assert t3.size == 1
    assert t3.dtype == np.float32

    with pytest.raises(BoundsError):
        t1.dim(-1)


def test_sizeLaws():
    for i in range(10):
        shape = tuple(np.random.randint(1, 4, size=np.random.randint(0, 5)))
        t = Tensor(np.random.randn(*shape))
        assert t.size == int(np.prod(t.shape))
        assert t.rank == len(t.shape)


def test_equality():
    # Keep values away from zero so that the relative tolerance applies.
    a1 = 1 + np.random.rand(2, 3, 3)
    t1 = Tensor(a1)

    # t1 and t2 share their underlying data
    a2 = a1
    t2 = Tensor(a2)
    assert t1.identical(t2)
    assert t1 == t2
    assert t1.approxEqual(t2)

    # t1 and t2 don't share their data, but contain the same values
    a2 = np.copy(a1)
    t2 = Tensor(a2)
    assert not t1.identical(t2)
    assert t1 == t2
    assert t1.approxEqual(t2)

    # t1 and t2 differ very slightly in one value
    a2[0, 1, 2] += 1e-10
    t2 = Tensor(a2)
    assert not t1.identical(t2)
    assert t1 != t2
    assert t1.approxEqual(t2)

    # t1 and t2 differ in one value
    a2[0, 1, 2] = 4
    t2 = Tensor(a2)
    assert not t1.identical(t2)
    assert t1 != t2
    assert not t1.approxEqual(t2)


def test_equalityRelation():
    x = Tensor([1, 2, 3])
    y = Tensor([1.0, 2.0, 3.0])
    z = Tensor(np.array([1, 2, 3], dtype=np.int8))

    assert x == x
    assert x == y and y == x
    assert y == z and x == z
    assert x != Tensor([[1, 2, 3]])
    assert not (x == [1, 2, 3])
    assert not x.approxEqual(Tensor([[1, 2, 3]]))


def test_sharedStorage():
    a = np.zeros((2, 2))
    t1 = Tensor(a)
    t2 = Tensor(t1)
    assert t1.identical(t2)

    t1[0, :] = 1
    assert t2[0, 1] == Tensor(1.0)
    assert a[0, 1] == 1.0

    t3 = Tensor(t1, dtype=np.float64)
    assert not t3.identical(t1)
    t3[1, 1] = 5
    assert a[1, 1] == 0.0


def test_types():
    t1 = Tensor(np.random.rand(3, 3))
    assert t1.dtype == np.float64

    t2 = Tensor(t1, dtype=np.float32)
    assert t2.dtype == np.float32

    t3 = convert(t1, np.float16)
    assert t3.dtype == np.float16

    with pytest.raises(InexactConversion):
        Tensor(t1, dtype=np.int64)
    with pytest.raises(InexactConversion):
        convert(t1, np.int64)

    # rank-0 tensors can be converted to the underlying scalar
    t4 = Tensor(4)
    assert t4.scalar(np.int64) == 4
    assert int(t4) == 4
    assert float(t4) == 4.0
    assert t4.scalar() == 4

    with pytest.raises(InexactConversion):
        int(Tensor(4.5))

    # not possible for tensors of higher rank
    with pytest.raises(TypeError):
        float(t1)
    with pytest.raises(TypeError):
        t1.scalar(np.float64)


def test_conversionRoundTrip():
    for i in range(5):
        t = Tensor(np.random.randint(-100, 100, size=(4, 5)).astype(np.int32))
        wide = t.astype(np.int64)
        assert wide.dtype == np.int64
        back = wide.astype(np.int32)
        assert back.dtype == np.int32
        assert back == t

    t = Tensor(np.array([1.0, -2.0, 3.0]))
    ti = t.astype(np.int64)
    assert ti.dtype == np.int64
    assert ti == Tensor([1, -2, 3])


def test_reshaping():
    t1 = Tensor(np.arange(1, 10))
    assert t1.shape == (9,)

    # reshaping does not alter the original tensor
    t2 = t1.reshape(3, 3)
    assert t1.shape == (9,)
    assert t2.shape == (3, 3)
    assert t2 == Tensor([
        [1, 4, 7],
        [2, 5, 8],
        [3, 6, 9]
    ])
    assert t1.reshape((3, 3)) == t2
    assert t2.reshape(9) == t1

    t2[0, 0] = 100
    assert t1[0] == Tensor(1)

    with pytest.raises(DimensionMismatch):
        t1.reshape(2, 4)
    with pytest.raises(ArgumentError):
        t1.reshape(-3, -3)

    # permuteDims also does not alter the original tensor
    t3 = Tensor(np.random.rand(5, 4, 2))
    assert t3.shape == (5, 4, 2)
    t4 = t3.permuteDims((2, 0, 1))
    assert t3.shape == (5, 4, 2)
    assert t4.shape == (2, 5, 4)

    assert t3 != t4
    assert t3[:, :, 0] == t4[0, :, :]
    assert t3[:, :, 1] == t4[1, :, :]

    assert t4.permuteDims((1, 2, 0)) == t3

    # on rank-1 and rank-2 tensors the permutation can be omitted
    assert Tensor([1, 2, 3]).permuteDims() == Tensor([[1, 2, 3]])
    assert Tensor([[1, 2, 3]]).permuteDims() == Tensor(np.reshape([1, 2, 3], (3, 1)))
    assert Tensor([[1, 2, 3], [4, 5, 6]]).permuteDims() == Tensor([[1, 4], [2, 5], [3, 6]])

    with pytest.raises(ArgumentError):
        t3.permuteDims()
    with pytest.raises(ArgumentError):
        t3.permuteDims((0, 0, 1))


def test_reshapeRoundTrip():
    for i in range(5):
        t = Tensor(np.random.randn(2, 3, 4))
        assert t.reshape(4, 6).reshape(2, 3, 4) == t
        assert t.permuteDims((1, 2, 0)).permuteDims((2, 0, 1)) == t
        assert t.shape == (2, 3, 4)


def test_indexing():
    t = Tensor(np.random.rand(1, 2, 3, 3))

    inds = list(t.indices())
    assert len(inds) == 18
    assert inds[:3] == [(0, 0, 0, 0), (0, 1, 0, 0), (0, 0, 1, 0)]

    t1 = t[0, :, :, :]
    assert t1.rank == 3
    assert t1.shape == (2, 3, 3)
    assert t1 == t[0, :, :, :]

    t2 = t[:, 1, :, 2]
    assert t2.rank == 2
    assert t2.shape == (1, 3)
    assert t2 == t[:, 1, :, 2]

    t3 = t[0, 1, 2, 1]
    assert t3.rank == 0
    assert t3.shape == ()
    assert t3 == t[0, 1, 2, 1]
    assert float(t3) == t.array[0, 1, 2, 1]
    with pytest.raises(BoundsError):
        t3[0]

    t[0, 0, 0, :] = Tensor([1, 2, 3])
    assert t[0, 0, 0, :] == Tensor([1.0, 2.0, 3.0])

    # tensor elements can be assigned scalars and scalar tensors
    t[0, 0, 0, 1] = 4
    t[0, 0, 0, 2] = Tensor(9)
    assert t[0, 0, 0, :] == Tensor([1.0, 4.0, 9.0])

    # throws BoundsError if indices are out-of-range
    with pytest.raises(BoundsError) as excinfo:
        t[1, :, :, :]
    assert excinfo.value.axis == 0
    assert excinfo.value.index == 1
    assert excinfo.value.shape == (1, 2, 3, 3)

    with pytest.raises(BoundsError):
        t[0, 2, 2, 2] = 2
    with pytest.raises(BoundsError):
        t[0, 0, 0]
    with pytest.raises(DimensionMismatch):
        t[0, 0, 0, :] = Tensor([1, 2])
    with pytest.raises(TypeError):
        t[0, 0, 0, :] = [1, 2, 3]

    # bounds can also be checked directly
    assert t.inBounds(0, 0, 0, 0)
    assert not t.inBounds(1, 0, 0, 0)
    with pytest.raises(BoundsError):
        t.checkBounds(1, 0, 0, 0)


def test_selectors():
    t = Tensor(np.arange(10))
    assert t[2:5] == Tensor([2, 3, 4])
    assert t[range(0, 10, 3)] == Tensor([0, 3, 6, 9])
    assert t[[9, 0]] == Tensor([9, 0])

    with pytest.raises(BoundsError):
        t[5:11]
    with pytest.raises(BoundsError):
        t[[10]]
    with pytest.raises(BoundsError):
        t[-1]
    with pytest.raises(ArgumentError):
        t[::0]

    m = Tensor(np.arange(12).reshape(3, 4))
    assert m[[0, 2], [1, 3]] == Tensor([[1, 3], [9, 11]])

    m[[0, 2], [1, 3]] = 0
    assert m[0, :] == Tensor([0, 0, 2, 0])


def test_scalarIndexing():
    s = Tensor(5)
    assert s[()] == Tensor(5)
    assert not s[()].identical(s)

    s[()] = 7
    assert s.scalar() == 7

    ti = Tensor(np.zeros(3, dtype=np.int64))
    with pytest.raises(InexactConversion):
        ti[0] = 0.5
    ti[0] = 2.0
    assert ti == Tensor([2, 0, 0])


def test_iteration():
    assert list(Tensor([[1, 2], [3, 4]])) == [1, 3, 2, 4]
    assert list(Tensor(3)) == [3]


def test_elementwise():
    assert Tensor([1 + 2j]).conj() == Tensor([1 - 2j])
    assert -Tensor([1, -2]) == Tensor([-1, 2])
    assert -Tensor([True, False]) == Tensor([-1, 0])


def test_printing():
    assert str(Tensor(2)) == 'scalar Tensor of int64 (rank 0):\n2'
    assert str(Tensor(np.ones(4))).splitlines()[0] == '4-element Tensor of float64 (rank 1):'

    t = Tensor(np.arange(1, 10, dtype=np.int32).reshape(3, 3))
    assert str(t).splitlines()[0] == '3×3 Tensor of int32 (rank 2):'
    assert repr(Tensor([1, 2])) == 'Tensor(' + repr(np.array([1, 2])) + ')'


def test_hashing():
    t = Tensor(np.random.rand(3, 3))

    # tensors are hashable and their hash is different than the hash of the underlying data
    assert hash(t) != hashArray(t.array)
    assert hash(t) == hash((hashArray(t.array), HASH_TAG))

    # tensors can be used in a dict
    d = {t: (3, 3)}
    assert d[t] == (3, 3)
    assert d[Tensor(np.copy(t.array))] == (3, 3)

    assert hash(Tensor([1, 2, 3])) == hash(Tensor([1.0, 2.0, 3.0]))

    # NaN entries hash alike however often they are rehashed
    t = Tensor([1.0, np.nan])
    h = hash(t)
    values = [float(i) / 7 for i in range(1000)]
    assert hash(t) == h
    assert hash(Tensor([1.0, np.nan])) == h
    assert hash(Tensor(np.array([1.0, np.nan], dtype=np.float32))) == h
