import operator
import numpy as np

from MLA.Utilities.arrays import cartesianIndices, exactCast, hashArray
from MLA.Utilities.errors import BoundsError, DimensionMismatch, ArgumentError
from MLA import config

# Mixed into the hash so that a Tensor never collides with its backing array.
HASH_TAG = 'Tensor'


class Tensor:
    '''
    A Tensor is a rank-N array of homogeneous elements wrapping a numpy array.

    Wrapping an existing array shares its storage: writes through one Tensor are
    visible through every other Tensor (and array reference) sharing it.
    Everything other than indexed assignment returns a new Tensor with fresh storage.

    The native traversal order of a Tensor is column-major, i.e. the first index
    varies fastest. Reshaping and iteration follow this order.
    '''

    def __init__(self, data, dtype=None):
        '''
        :param data: A numpy array (shared), a Tensor (shared) or anything numpy.asarray accepts.
        :param dtype: If given, the elements are converted exactly into fresh storage of this type.
        '''
        if isinstance(data, Tensor):
            data = data.array
        elif not isinstance(data, np.ndarray):
            data = np.asarray(data)

        if dtype is not None:
            data = exactCast(data, dtype)

        self._array = data

    def __repr__(self):
        return 'Tensor(' + repr(self._array) + ')'

    def __str__(self):
        if self.rank == 0:
            head = 'scalar'
        elif self.rank == 1:
            head = str(self.shape[0]) + '-element'
        else:
            head = '×'.join(str(s) for s in self.shape)
        return head + ' Tensor of ' + str(self.dtype) + ' (rank ' + str(self.rank) + '):\n' + str(self._array)

    @property
    def shape(self):
        return self._array.shape

    @property
    def rank(self):
        return self._array.ndim

    @property
    def size(self):
        return self._array.size

    @property
    def dtype(self):
        return self._array.dtype

    @property
    def array(self):
        return self._array

    def dim(self, k):
        '''
        :param k: An axis.
        :return: The size of the Tensor along axis k, or 1 if k is beyond the rank.
        '''
        k = operator.index(k)
        if k < 0:
            raise BoundsError(self.shape, k)
        if k >= self.rank:
            return 1
        return self.shape[k]

    def indices(self):
        '''
        Iterates over all multi-indices of the Tensor in column-major order.
        '''
        return cartesianIndices(self.shape)

    def __iter__(self):
        return iter(self._array.ravel(order='F').tolist())

    ##########
    # Equality
    ##########

    def identical(self, other):
        '''
        Returns True if other shares the backing storage of this Tensor.
        '''
        return isinstance(other, Tensor) and self._array is other._array

    def __eq__(self, other):
        if not isinstance(other, Tensor):
            return NotImplemented
        if self._array is other._array:
            return True
        return self.shape == other.shape and bool(np.array_equal(self._array, other._array))

    def __hash__(self):
        return hash((hashArray(self._array), HASH_TAG))

    def approxEqual(self, other, rtol=None, atol=None):
        '''
        Elementwise approximate equality.
        :param other: The Tensor to compare against.
        :param rtol: Relative tolerance, defaults to config.rtol.
        :param atol: Absolute tolerance, defaults to config.atol.
        :return: True if the shapes agree and every pair of elements is close.
        '''
        if rtol is None:
            rtol = config.rtol
        if atol is None:
            atol = config.atol

        if self.shape != other.shape:
            return False
        return bool(np.allclose(self._array, other._array, rtol=rtol, atol=atol))

    ############
    # Conversion
    ############

    def astype(self, dtype):
        '''
        Returns a copy of the Tensor with elements of type dtype.
        Raises InexactConversion if any element would change value.
        '''
        return Tensor(exactCast(self._array, dtype))

    def scalar(self, dtype=None):
        '''
        Returns the element of a rank-0 Tensor as a Python scalar, converted
        exactly to dtype if given.
        '''
        if self.rank != 0:
            raise TypeError('Cannot convert a Tensor of rank ' + str(self.rank) + ' to a scalar.')
        if dtype is None:
            return self._array.item()
        return exactCast(self._array, dtype).item()

    def __int__(self):
        return self.scalar(int)

    def __float__(self):
        return self.scalar(float)

    def __complex__(self):
        return self.scalar(complex)

    def __bool__(self):
        return self.scalar(bool)

    ##################
    # Shape operations
    ##################

    def reshape(self, *shape):
        '''
        Returns a copy of the Tensor with its elements, taken in column-major
        order, arranged into the given shape.
        :param shape: The new sizes, either as separate arguments or as one sequence.
        '''
        if len(shape) == 1 and isinstance(shape[0], (tuple, list)):
            shape = shape[0]
        shape = tuple(operator.index(s) for s in shape)

        if any(s < 0 for s in shape):
            raise ArgumentError('Negative size in shape ' + str(shape) + '.')
        if int(np.prod(shape, dtype=np.intp)) != self.size:
            raise DimensionMismatch('Cannot reshape ' + str(self.size) + ' elements into shape ' + str(shape) + '.')

        return Tensor(np.reshape(self._array, shape, order='F').copy())

    def permuteDims(self, perm=None):
        '''
        Returns a copy of the Tensor with its axes reordered so that axis k of the
        result is axis perm[k] of this Tensor.

        On rank-1 Tensors perm may be omitted, giving the 1 x n row.
        On rank-2 Tensors perm may be omitted, giving the transpose.
        '''
        if perm is None:
            if self.rank == 1:
                return Tensor(np.reshape(self._array, (1, self.shape[0])).copy())
            elif self.rank == 2:
                perm = (1, 0)
            else:
                raise ArgumentError('A permutation is required for Tensors of rank ' + str(self.rank) + '.')

        perm = tuple(operator.index(p) for p in perm)
        if sorted(perm) != list(range(self.rank)):
            raise ArgumentError(str(perm) + ' is not a permutation of the axes of a rank ' + str(self.rank) + ' Tensor.')

        return Tensor(np.transpose(self._array, axes=perm).copy())

    ##########
    # Indexing
    ##########

    def _select(self, key):
        '''
        Resolves an index key into one integer array per axis, along with the
        shape of the selection once the integer-indexed axes are dropped.
        '''
        if not isinstance(key, tuple):
            key = (key,)
        if len(key) != self.rank:
            raise BoundsError(self.shape, key)

        selectors = []
        kept = []
        for axis, (k, n) in enumerate(zip(key, self.shape)):
            if isinstance(k, slice):
                if k.step is not None and operator.index(k.step) == 0:
                    raise ArgumentError('Slice step cannot be zero.')
                for bound in (k.start, k.stop):
                    if bound is not None and not 0 <= operator.index(bound) <= n:
                        raise BoundsError(self.shape, k, axis)
                ind = np.arange(n)[k]
                kept.append(len(ind))
            elif isinstance(k, (range, list, np.ndarray)):
                ind = np.asarray(k, dtype=np.intp)
                if ind.ndim != 1:
                    raise ArgumentError('Index arrays must be one-dimensional.')
                if np.any((ind < 0) | (ind >= n)):
                    raise BoundsError(self.shape, k, axis)
                kept.append(len(ind))
            else:
                i = operator.index(k)
                if not 0 <= i < n:
                    raise BoundsError(self.shape, i, axis)
                ind = np.array([i], dtype=np.intp)
            selectors.append(ind)

        return selectors, tuple(kept)

    def __getitem__(self, key):
        selectors, shape = self._select(key)
        if self.rank == 0:
            return Tensor(self._array.copy())
        return Tensor(np.reshape(self._array[np.ix_(*selectors)], shape))

    def __setitem__(self, key, value):
        selectors, shape = self._select(key)

        if isinstance(value, Tensor):
            if value.shape != shape:
                raise DimensionMismatch('Cannot assign a Tensor of shape ' + str(value.shape) +
                                        ' to a selection of shape ' + str(shape) + '.')
            value = value.array
        elif np.ndim(value) != 0:
            raise TypeError('Only scalars and Tensors can be assigned into a Tensor.')

        value = exactCast(value, self.dtype)

        if self.rank == 0:
            self._array[()] = value
        else:
            full = tuple(len(s) for s in selectors)
            self._array[np.ix_(*selectors)] = np.reshape(value, full) if value.ndim > 0 else value

    def checkBounds(self, *inds):
        '''
        Raises BoundsError if inds does not index this Tensor.
        '''
        self._select(inds)

    def inBounds(self, *inds):
        '''
        Returns True if inds indexes this Tensor.
        '''
        try:
            self._select(inds)
        except BoundsError:
            return False
        return True

    ##########################
    # Elementwise operations
    ##########################

    def conj(self):
        if self.dtype.kind == 'c':
            return Tensor(np.conjugate(self._array))
        return Tensor(self._array.copy())

    def __neg__(self):
        arr = self._array
        if arr.dtype.kind == 'b':
            arr = arr.astype(np.intp)
        return Tensor(np.negative(arr))


def convert(t, dtype):
    '''
    Returns a copy of t with elements of type dtype, raising InexactConversion if
    any element would change value.
    '''
    return t.astype(dtype)
