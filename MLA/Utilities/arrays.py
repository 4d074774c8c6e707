import warnings
import numpy as np

from MLA.Utilities.errors import InexactConversion
from MLA.Utilities.logger import makeLogger
from MLA import config
logger = makeLogger(__name__, config.levels['arrays'])

_NAN_KEY = 'nan'


def insertIndex(arr, ind, newInd):
	'''
	This method removes the specified index (ind) and inserts
	it in the new location (newInd).
	'''
	perm = list(range(len(arr.shape)))
	perm.remove(ind)
	perm.insert(newInd, ind)
	arr = np.transpose(arr, axes=perm)
	return arr

def permuteIndices(arr, indices, front=True):
	'''
	This method moves the indices specified in indices
	to be the first ones in the array in the order in which they appear in indices.
	If front is False it instead moves them to be the last ones.
	'''
	shape = arr.shape
	perm = list(range(len(shape)))

	for i in indices:
		perm.remove(i)
	for j,i in enumerate(indices):
		if front:
			perm.insert(j, i)
		else:
			perm.insert(len(shape)-len(indices) + j, i)
	return np.transpose(arr, axes=perm)

def ndArrayToMatrix(arr, index, front=True):
		'''
		This method flattens the array along all indices other than
		index and does so in a way which preserves the ordering of the other
		axes when unflattened.

		This method also takes as input a boolean variable front. If front is True
		then the special index is pushed to the beginning. If front is False then the
		special index is pushed to the back.
		'''
		arr = insertIndex(arr, index, 0)
		rest = int(np.prod(arr.shape[1:], dtype=np.intp))
		arr = np.reshape(arr, (arr.shape[0], rest))

		if not front:
			arr = np.transpose(arr)

		return arr

def cartesianIndices(shape):
	'''
	Iterates over every multi-index of shape in column-major order, so that the
	first index varies fastest.
	:param shape: The shape to traverse.
	:return: A generator of index tuples.
	'''
	shape = tuple(int(s) for s in shape)

	# Column-major strides, computed once.
	strides = []
	stride = 1
	for s in shape:
		strides.append(stride)
		stride *= s

	for i in range(stride):
		yield tuple((i // st) % s for st, s in zip(strides, shape))

def permutationParity(seq):
	'''
	Returns the sign of the permutation which sorts seq: 1 if it is even,
	-1 if it is odd and 0 if seq contains a repeated entry.
	'''
	seq = list(seq)
	if len(set(seq)) < len(seq):
		return 0

	inversions = 0
	for i in range(len(seq)):
		for j in range(i + 1, len(seq)):
			if seq[i] > seq[j]:
				inversions += 1

	if inversions % 2 == 0:
		return 1
	else:
		return -1

def exactCast(arr, dtype):
	'''
	Converts arr to dtype in fresh storage, refusing conversions which change a value.
	Conversions into integer or boolean types must preserve every value, as must
	conversions from complex to real types. Conversions between floating types round.

	:param arr: The array to convert.
	:param dtype: The target element type.
	:return: The converted array.
	'''
	arr = np.asarray(arr)
	dtype = np.dtype(dtype)

	with warnings.catch_warnings():
		warnings.simplefilter('ignore')
		with np.errstate(all='ignore'):
			res = arr.astype(dtype)

			checked = dtype.kind in 'biu' or (arr.dtype.kind == 'c' and dtype.kind != 'c')
			if not checked:
				return res

			bad = res.astype(arr.dtype) != arr

			# Round trips between signed and unsigned integers can wrap back
			# onto the original value.
			if arr.dtype.kind == 'i' and dtype.kind == 'u':
				bad = bad | (arr < 0)
			elif arr.dtype.kind == 'u' and dtype.kind == 'i':
				bad = bad | (res < 0)

	if np.any(bad):
		value = arr[bad][0].item()
		logger.debug('Refusing conversion of ' + repr(value) + ' to ' + str(dtype) + '.')
		raise InexactConversion(value, dtype)

	return res

def hashArray(arr):
	'''
	Hashes the shape and values of arr. Arrays holding equal values hash equally
	regardless of their element types, and NaN entries always hash alike.
	'''
	arr = np.asarray(arr)
	values = arr.ravel(order='F').tolist()

	# NaN hashes by object identity, so every NaN is replaced by one key.
	values = tuple(_NAN_KEY if v != v else v for v in values)
	return hash((arr.shape, values))
