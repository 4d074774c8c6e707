################################
# Errors raised by MLA operations
################################


class BoundsError(IndexError):
    '''
    An index or axis lies outside the valid range of a shape.
    '''

    def __init__(self, shape, index, axis=None):
        self.shape = tuple(shape)
        self.index = index
        self.axis = axis
        if axis is None:
            msg = 'Index ' + str(index) + ' out of bounds for shape ' + str(self.shape) + '.'
        else:
            msg = 'Index ' + str(index) + ' out of bounds on axis ' + str(axis) + \
                ' of shape ' + str(self.shape) + '.'
        super().__init__(msg)


class DimensionMismatch(ValueError):
    '''
    Two axes which must agree in size do not.
    '''
    pass


class ArgumentError(ValueError):
    '''
    A structural precondition independent of the shape is violated.
    '''
    pass


class InexactConversion(ValueError):
    '''
    An elementwise conversion would change a value.
    '''

    def __init__(self, value, dtype):
        self.value = value
        self.dtype = dtype
        super().__init__('Cannot convert ' + repr(value) + ' exactly to ' + str(dtype) + '.')
