"""
Image encoding tags and the strategies that decode them.

Every recognized tag maps to one EncodingStrategy. A strategy knows how many bytes a pixel takes in the message
buffer, which encoding the decoded matrix has, and a decode function taking the (height, width * bytes_per_pixel)
uint8 rows of the image, without the row padding.
"""

import numpy as np

from ros_msg_ext.capabilities import hasCapability
from ros_msg_ext.errors import InvalidDimensions, UnsupportedEncoding

# encoding tag -> EncodingStrategy
encoding_strategies = {}


# -------------------------------------------------------------------------------
# --- CLASSES
# -------------------------------------------------------------------------------

class EncodingStrategy:

    def __init__(self, tag, bytes_per_pixel, resolved_encoding, decode, capability=None):
        self.tag = tag
        self.bytes_per_pixel = bytes_per_pixel
        self.resolved_encoding = resolved_encoding  # the encoding of the decoded matrix
        self.decode = decode
        self.capability = capability

    def __repr__(self):
        return 'EncodingStrategy(' + self.tag + ', bytes_per_pixel=' + str(self.bytes_per_pixel) + \
               ', resolved_encoding=' + self.resolved_encoding + ')'


# -------------------------------------------------------------------------------
# --- FUNCTIONS
# -------------------------------------------------------------------------------

def registerEncoding(tags, bytes_per_pixel, resolved_encoding=None, capability=None):
    """
    Decorator that registers a decode function for one or more encoding tags.
    :param tags: a tag or a list of tags (matched case insensitively)
    :param bytes_per_pixel: the size of a pixel in the message buffer
    :param resolved_encoding: the encoding of the decoded matrix, defaults to the tag itself
    :param capability: the capability the strategy depends on, if any
    """
    if isinstance(tags, str):
        tags = [tags]

    def decorator(decode):
        for tag in tags:
            encoding_strategies[tag.lower()] = EncodingStrategy(tag.lower(), bytes_per_pixel,
                                                                resolved_encoding or tag.lower(), decode,
                                                                capability=capability)
        return decode

    return decorator


def getEncodingStrategy(encoding):
    """
    Gets the strategy registered for an encoding tag.
    Raises UnsupportedEncoding if there is no strategy or if its capability is not available.
    """
    tag = str(encoding).lower()
    if tag not in encoding_strategies:
        raise UnsupportedEncoding(encoding, 'unsupported image encoding ' + repr(encoding) +
                                  ', supported encodings are ' + str(sorted(encoding_strategies.keys())))

    strategy = encoding_strategies[tag]
    if strategy.capability is not None and not hasCapability(strategy.capability):
        raise UnsupportedEncoding(encoding, 'image encoding ' + repr(encoding) + ' requires the ' +
                                  repr(strategy.capability) + ' capability')
    return strategy


def getSupportedEncodings():
    return sorted(tag for tag, strategy in encoding_strategies.items()
                  if strategy.capability is None or hasCapability(strategy.capability))


def asByteArray(data):
    """ Views the data field of a message (bytes, array.array, list or ndarray) as a flat uint8 numpy array. """
    if isinstance(data, (bytes, bytearray, memoryview)):
        return np.frombuffer(data, dtype=np.uint8)
    if isinstance(data, np.ndarray):
        return data.reshape(-1).view(np.uint8)
    return np.asarray(data, dtype=np.uint8).reshape(-1)


def imageRows(image, bytes_per_pixel):
    """
    Gets the rows of pixel bytes of an Image message, checking the declared dimensions first.
    :param image: the Image message
    :param bytes_per_pixel: the size of a pixel for the encoding of the image
    :return: a (height, width * bytes_per_pixel) uint8 array, a view on the message buffer
    """
    height = int(image.height)
    width = int(image.width)
    step = int(image.step)

    row_bytes = width * bytes_per_pixel
    if step < row_bytes:
        raise InvalidDimensions('image step ' + str(step) + ' is smaller than width * bytes per pixel = ' +
                                str(row_bytes), expected=row_bytes, actual=step)

    data = asByteArray(image.data)
    if data.size < step * height:
        raise InvalidDimensions('image data has ' + str(data.size) + ' bytes but step * height = ' +
                                str(step * height), expected=step * height, actual=data.size)

    if step == 0:
        return np.zeros((height, 0), dtype=np.uint8)
    return data[:step * height].reshape(height, step)[:, :row_bytes]


# -------------------------------------------------------------------------------
# --- STRATEGIES (numpy only)
# -------------------------------------------------------------------------------

@registerEncoding(['rgb8', 'bgr8'], 3)
def decodeThreeChannels(rows, image):
    return rows.reshape(int(image.height), int(image.width), 3).copy()


@registerEncoding(['rgba8', 'bgra8'], 4)
def decodeFourChannels(rows, image):
    return rows.reshape(int(image.height), int(image.width), 4).copy()


@registerEncoding(['mono8', '8UC1'], 1, resolved_encoding='mono8')
def decodeMono8(rows, image):
    return rows.reshape(int(image.height), int(image.width)).copy()


@registerEncoding(['mono16', '16UC1'], 2, resolved_encoding='mono16')
def decodeMono16(rows, image):
    byte_order = '>' if image.is_bigendian else '<'
    pixels = np.ascontiguousarray(rows).view(np.dtype('uint16').newbyteorder(byte_order))
    return pixels.reshape(int(image.height), int(image.width)).astype(np.uint16)
