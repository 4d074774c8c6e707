import operator
import itertools
import numpy as np

from MLA.Tensor.tensor import Tensor
from MLA.Algebra.products import pushover
from MLA.Utilities.arrays import permutationParity
from MLA.Utilities.errors import DimensionMismatch, ArgumentError
from MLA.Utilities.logger import makeLogger
from MLA import config
logger = makeLogger(__name__, config.levels['invariants'])


def delta(n):
    '''
    Returns the Kronecker delta of size n: an n x n boolean Tensor which is True
    exactly on the diagonal. It is the identity of the inner product.
    '''
    n = operator.index(n)
    if n < 0:
        raise ArgumentError('The delta tensor needs a non-negative size, got ' + str(n) + '.')
    return Tensor(np.identity(n, dtype=bool))

def epsilon(n):
    '''
    Returns the Levi-Civita tensor of rank n, an int8 Tensor with n axes of size n.
    The entry at a multi-index is the sign of the permutation which sorts it,
    and 0 if any index repeats.
    '''
    n = operator.index(n)
    if n < 0:
        raise ArgumentError('The epsilon tensor needs a non-negative rank, got ' + str(n) + '.')

    logger.debug('Building epsilon tensor of rank ' + str(n) + '.')

    # Only the n! entries with distinct indices are non-zero.
    arr = np.zeros((n,) * n, dtype=np.int8)
    for perm in itertools.permutations(range(n)):
        arr[perm] = permutationParity(perm)

    return Tensor(arr)

def cross(*vectors):
    '''
    Computes the generalized cross product of n-1 vectors of size n, the vector c with
    c[k] = sum epsilon[i1, ..., i(n-1), k] * v1[i1] * ... * v(n-1)[i(n-1)].
    For two vectors of size 3 this is the usual cross product.

    :param vectors: Rank-1 Tensors, one fewer than their common size.
    :return: A rank-1 Tensor orthogonal to every vector.
    '''
    if len(vectors) == 0:
        raise ArgumentError('The cross product needs at least one vector.')
    for v in vectors:
        if v.rank != 1:
            raise ArgumentError('The cross product needs Tensors of rank 1, got rank ' + str(v.rank) + '.')

    n = len(vectors) + 1
    for v in vectors:
        if v.shape[0] != n:
            raise DimensionMismatch('The cross product of ' + str(len(vectors)) +
                                    ' vectors needs vectors of size ' + str(n) + ', got ' + str(v.shape[0]) + '.')

    res = epsilon(n)
    for v in vectors:
        res = pushover(v, res, 0, 0)
    return res
