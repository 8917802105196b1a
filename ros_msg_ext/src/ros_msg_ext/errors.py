"""
Errors raised by the conversion functions
"""


class ConversionError(Exception):
    """ Base class of every error raised while converting a message. """


class UnsupportedEncoding(ConversionError):
    """ The pixel or element encoding tag of the input has no conversion rule. """

    def __init__(self, encoding, message=None):
        self.encoding = encoding
        if message is None:
            message = 'unsupported encoding ' + repr(encoding)
        super().__init__(message)


class InvalidDimensions(ConversionError):
    """ The declared buffer size is inconsistent with the declared height, width or stride. """

    def __init__(self, message, expected=None, actual=None):
        self.expected = expected
        self.actual = actual
        super().__init__(message)


class DegenerateInput(ConversionError):
    """ Structurally valid but numerically invalid input, e.g. a zero norm quaternion. """


class MissingCapability(ConversionError):
    """ The third-party library backing a capability is not installed. """

    def __init__(self, capability, package, extra):
        self.capability = capability
        self.package = package
        self.extra = extra
        super().__init__('capability ' + repr(capability) + ' requires the ' + package +
                         ' package (pip install ros-msg-ext[' + extra + '])')
