from functools import reduce
import numpy as np

from MLA.Tensor.tensor import Tensor
from MLA.Utilities.arrays import ndArrayToMatrix, permuteIndices, exactCast
from MLA.Utilities.errors import BoundsError, DimensionMismatch, ArgumentError
from MLA.Utilities.logger import makeLogger
from MLA import config
logger = makeLogger(__name__, config.levels['products'])


def _accumulator(dtype):
    '''
    Returns the type in which sums of elements of type dtype are accumulated.
    Booleans and narrow integers are summed as 64-bit integers and converted
    back exactly afterwards.
    '''
    if dtype.kind == 'b':
        return np.dtype(np.int64)
    elif dtype.kind == 'i':
        return np.dtype(np.int64)
    elif dtype.kind == 'u':
        return np.dtype(np.uint64)
    return dtype

def _checkAxis(t, d):
    if not 0 <= d < t.rank:
        raise BoundsError(t.shape, d)

def _outer(t1, t2):
    dtype = np.result_type(t1.dtype, t2.dtype)

    # result[I, J] = t1[I] * t2[J], so in column-major order the elements
    # of t1 vary fastest.
    arr = np.multiply.outer(t1.array.astype(dtype), t2.array.astype(dtype))
    return Tensor(np.asarray(arr, dtype=dtype))

def outer(*ts):
    '''
    Computes the outer (tensor) product of the tensors ts, which may have any shape.
    The empty outer product is the rank-0 Tensor holding 1.

    :param ts: The factors.
    :return: A Tensor whose shape is the concatenation of the shapes of ts and
             whose element type is the promoted type of their element types.
    '''
    logger.debug('Outer product of shapes ' + str([t.shape for t in ts]) + '.')
    # A boolean 1 promotes to the element type of the first factor.
    return reduce(_outer, ts, Tensor(np.ones((), dtype=bool)))

def pushover(t1, t2, d1, d2):
    '''
    Computes the pushover of t1 and t2 along axis d1 of t1 and axis d2 of t2,
    i.e. the sum over the shared index of the products of their elements.

    :param t1: The first Tensor.
    :param t2: The second Tensor.
    :param d1: The contracted axis of t1.
    :param d2: The contracted axis of t2.
    :return: A Tensor with the remaining axes of t1 followed by the remaining axes of t2.

    Raises BoundsError if d1 or d2 is not an axis of its Tensor and
    DimensionMismatch if the two axes differ in size.
    '''
    _checkAxis(t1, d1)
    _checkAxis(t2, d2)
    if t1.shape[d1] != t2.shape[d2]:
        raise DimensionMismatch('Axis ' + str(d1) + ' of shape ' + str(t1.shape) + ' does not match axis ' +
                                str(d2) + ' of shape ' + str(t2.shape) + '.')

    logger.debug('Pushover of shapes ' + str(t1.shape) + ' and ' + str(t2.shape) +
                 ' along axes ' + str(d1) + ' and ' + str(d2) + '.')

    dtype = np.result_type(t1.dtype, t2.dtype)
    acc = _accumulator(dtype)

    # Bring the contracted axes to the front and flatten the rest, then sum
    # over the leading axis for every pair of remaining positions.
    m1 = ndArrayToMatrix(t1.array.astype(acc), d1)
    m2 = ndArrayToMatrix(t2.array.astype(acc), d2)
    arr = np.dot(m1.T, m2)

    shape = t1.shape[:d1] + t1.shape[d1 + 1:] + t2.shape[:d2] + t2.shape[d2 + 1:]
    arr = np.reshape(arr, shape)

    if acc != dtype:
        arr = exactCast(arr, dtype)

    return Tensor(arr)

def inner(t1, t2, *ts):
    '''
    Computes the inner product of t1 and t2, contracting the last axis of the
    conjugate of t1 with the first axis of t2. Further arguments are multiplied
    in from the left, so inner(a, b, c) is inner(inner(a, b), c).

    Raises ArgumentError if either Tensor has rank 0 and DimensionMismatch if
    the last axis of t1 does not match the first axis of t2.
    '''
    if len(ts) > 0:
        return reduce(inner, ts, inner(t1, t2))

    if t1.rank == 0 or t2.rank == 0:
        raise ArgumentError('The inner product needs Tensors of non-zero rank, got ranks ' +
                            str(t1.rank) + ' and ' + str(t2.rank) + '.')
    if t1.shape[-1] != t2.shape[0]:
        raise DimensionMismatch('Cannot take the inner product of shapes ' + str(t1.shape) +
                                ' and ' + str(t2.shape) + '.')

    return pushover(t1.conj(), t2, t1.rank - 1, 0)

def contract(t, d1, d2):
    '''
    Contracts the Tensor t along its axes d1 and d2, summing its diagonal over them.

    :param t: The Tensor to contract.
    :param d1: The first contracted axis.
    :param d2: The second contracted axis.
    :return: A Tensor of rank t.rank - 2 holding the remaining axes in order.

    Raises ArgumentError if d1 == d2, BoundsError if either is not an axis of t
    and DimensionMismatch if the two axes differ in size.
    '''
    if d1 == d2:
        raise ArgumentError('Contracted axes must be distinct, got ' + str(d1) + ' twice.')
    _checkAxis(t, d1)
    _checkAxis(t, d2)
    if t.shape[d1] != t.shape[d2]:
        raise DimensionMismatch('Axes ' + str(d1) + ' and ' + str(d2) + ' of shape ' +
                                str(t.shape) + ' differ in size.')

    logger.debug('Contracting shape ' + str(t.shape) + ' along axes ' + str(d1) + ' and ' + str(d2) + '.')

    acc = _accumulator(t.dtype)
    arr = permuteIndices(t.array, [d1, d2]).astype(acc)
    arr = np.asarray(np.trace(arr, axis1=0, axis2=1, dtype=acc))

    if acc != t.dtype:
        arr = exactCast(arr, t.dtype)

    return Tensor(arr)

def trace(t):
    '''
    Computes the trace of the square rank-2 Tensor t as a rank-0 Tensor.
    '''
    if t.rank != 2:
        raise ArgumentError('The trace needs a Tensor of rank 2, got rank ' + str(t.rank) + '.')
    return contract(t, 0, 1)
