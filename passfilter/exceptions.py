"""
Filter-specific exceptions.
"""

class FilterError(Exception):
    """Base class for every error raised by passfilter"""
    pass

class FilterSpecificationError(FilterError, ValueError):
    """Raised when the requested filter or its input data is invalid"""
    pass

class UnsupportedInputError(FilterSpecificationError, TypeError):
    """Raised when the input data has an unsupported type or shape"""
    pass

class FilterDesignError(FilterError):
    """Raised when filter synthesis or zero-phase application fails"""
    pass

class FilterOrderError(FilterDesignError):
    """Raised when a forced FIR design needs more samples than the signal has"""
    pass
