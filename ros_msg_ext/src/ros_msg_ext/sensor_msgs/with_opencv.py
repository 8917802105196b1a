"""
sensor_msgs/Image -> OpenCV conversions
"""

import cv2
import numpy as np

from ros_msg_ext.encodings import getEncodingStrategy, imageRows, registerEncoding
from ros_msg_ext.errors import InvalidDimensions, UnsupportedEncoding
from ros_msg_ext.utilities import printImageInfo, printMatrixInfo

# (decoded encoding, desired encoding) -> cv2 color conversion code
color_conversions = {('rgb8', 'bgr8'): cv2.COLOR_RGB2BGR,
                     ('rgb8', 'mono8'): cv2.COLOR_RGB2GRAY,
                     ('bgr8', 'rgb8'): cv2.COLOR_BGR2RGB,
                     ('bgr8', 'mono8'): cv2.COLOR_BGR2GRAY,
                     ('rgba8', 'bgr8'): cv2.COLOR_RGBA2BGR,
                     ('rgba8', 'rgb8'): cv2.COLOR_RGBA2RGB,
                     ('rgba8', 'mono8'): cv2.COLOR_RGBA2GRAY,
                     ('bgra8', 'bgr8'): cv2.COLOR_BGRA2BGR,
                     ('bgra8', 'rgb8'): cv2.COLOR_BGRA2RGB,
                     ('bgra8', 'mono8'): cv2.COLOR_BGRA2GRAY,
                     ('mono8', 'bgr8'): cv2.COLOR_GRAY2BGR,
                     ('mono8', 'rgb8'): cv2.COLOR_GRAY2RGB}

desired_channels = {'bgr8': 3, 'rgb8': 3, 'mono8': 1}


# -------------------------------------------------------------------------------
# --- STRATEGIES (YUV 4:2:2)
# -------------------------------------------------------------------------------

def convertYUV422ToBGR(rows, image, code):
    """
    Translates packed YUV 4:2:2 rows (2 bytes per pixel) into a freshly allocated BGR matrix.
    """
    height = int(image.height)
    width = int(image.width)
    if width % 2 != 0:
        raise InvalidDimensions('YUV 4:2:2 images must have an even width, got ' + str(width),
                                expected=width + 1, actual=width)

    if height == 0 or width == 0:
        return np.zeros((height, width, 3), dtype=np.uint8)

    yuv = np.ascontiguousarray(rows).reshape(height, width, 2)
    return cv2.cvtColor(yuv, code)


@registerEncoding(['uyvy', 'yuv422'], 2, resolved_encoding='bgr8', capability='yuv')
def decodeUYVY(rows, image):
    return convertYUV422ToBGR(rows, image, cv2.COLOR_YUV2BGR_UYVY)


@registerEncoding(['yuyv', 'yuv422_yuy2'], 2, resolved_encoding='bgr8', capability='yuv')
def decodeYUYV(rows, image):
    return convertYUV422ToBGR(rows, image, cv2.COLOR_YUV2BGR_YUY2)


# -------------------------------------------------------------------------------
# --- FUNCTIONS
# -------------------------------------------------------------------------------

def convertColor(matrix, encoding, desired_encoding):
    """
    Converts a decoded matrix to the desired encoding.
    :param matrix: the decoded matrix
    :param encoding: the encoding of the decoded matrix
    :param desired_encoding: 'passthrough', 'bgr8', 'rgb8' or 'mono8'
    :return: a matrix in the desired encoding
    """
    if desired_encoding == 'passthrough' or desired_encoding == encoding:
        return matrix

    if (encoding, desired_encoding) not in color_conversions:
        raise UnsupportedEncoding(desired_encoding, 'cannot convert image encoding ' + repr(encoding) + ' to ' +
                                  repr(desired_encoding))

    if matrix.size == 0:
        channels = desired_channels[desired_encoding]
        shape = matrix.shape[0:2] if channels == 1 else matrix.shape[0:2] + (channels,)
        return np.zeros(shape, dtype=np.uint8)

    return cv2.cvtColor(matrix, color_conversions[(encoding, desired_encoding)])


def image_to_matrix(image, desired_encoding='passthrough', verbose=False):
    """
    Converts a sensor_msgs/Image to an OpenCV matrix (a numpy array).

    :param image: the Image message
    :param desired_encoding: 'passthrough' keeps the channels as they are in the buffer (YUV images are decoded to
    bgr8), otherwise one of 'bgr8', 'rgb8' or 'mono8'
    :param verbose: prints the layout of the image and of the matrix
    :return: a (height, width) matrix for single channel encodings, (height, width, channels) otherwise. The matrix
    never shares memory with the message.
    """
    strategy = getEncodingStrategy(image.encoding)
    if not isinstance(desired_encoding, str):
        raise UnsupportedEncoding(desired_encoding, 'desired encoding must be a string, got ' +
                                  repr(desired_encoding))
    desired_encoding = desired_encoding.lower()
    if desired_encoding != 'passthrough' and desired_encoding != strategy.resolved_encoding and \
            (strategy.resolved_encoding, desired_encoding) not in color_conversions:
        raise UnsupportedEncoding(desired_encoding, 'cannot convert image encoding ' + repr(image.encoding) +
                                  ' to ' + repr(desired_encoding))

    if verbose:
        printImageInfo(image, text='Converting image with strategy ' + str(strategy))

    rows = imageRows(image, strategy.bytes_per_pixel)
    matrix = strategy.decode(rows, image)
    matrix = convertColor(matrix, strategy.resolved_encoding, desired_encoding)

    if verbose:
        printMatrixInfo(matrix, text='Resulting matrix')
    return matrix


def image_to_mat(image):
    """ Converts a sensor_msgs/Image to a BGR OpenCV matrix. """
    return image_to_matrix(image, desired_encoding='bgr8')


# -------------------------------------------------------------------------------
# --- EXTENSION ADAPTERS
# -------------------------------------------------------------------------------

class ImageOpenCvExt:
    """ Adds OpenCV conversions to a sensor_msgs/Image. """

    def __init__(self, msg):
        self.msg = msg

    def to_mat(self):
        return image_to_mat(self.msg)

    def to_matrix(self, desired_encoding='passthrough'):
        return image_to_matrix(self.msg, desired_encoding=desired_encoding)
