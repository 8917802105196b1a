"""
sensor_msgs/PointCloud2 -> numpy conversions
"""

import itertools
import struct

import numpy as np
from numpy.lib.recfunctions import repack_fields

from ros_msg_ext.errors import InvalidDimensions, UnsupportedEncoding
from ros_msg_ext.encodings import asByteArray
from ros_msg_ext.point_field import FLOAT32, pftypeToNptype, pointcloud2Records, pointcloud2ToDtype
from ros_msg_ext.sensor_msgs.point_bytes import point_bytes_iter


# -------------------------------------------------------------------------------
# --- FUNCTIONS
# -------------------------------------------------------------------------------

def getXYZFields(cloud_msg):
    """
    Checks that the first three fields of a point cloud are x, y and z, each a single float32, and returns them.
    """
    fields = list(cloud_msg.fields)
    if len(fields) < 3:
        raise UnsupportedEncoding([f.name for f in fields], 'point cloud has ' + str(len(fields)) +
                                  ' fields, at least x, y and z are required')

    fx, fy, fz = fields[0:3]
    if (fx.name, fy.name, fz.name) != ('x', 'y', 'z'):
        raise UnsupportedEncoding([fx.name, fy.name, fz.name], 'the first point cloud fields must be x, y and z, got ' +
                                  str([fx.name, fy.name, fz.name]))

    for field in (fx, fy, fz):
        if field.datatype != FLOAT32 or field.count != 1:
            raise UnsupportedEncoding(field.datatype, 'field ' + repr(field.name) +
                                      ' must be a single FLOAT32 value, got datatype ' + str(field.datatype) +
                                      ' with count ' + str(field.count))

    # a point holds at least 3 float32 values
    if cloud_msg.point_step < 12:
        raise InvalidDimensions('point_step must be at least 12 bytes, got ' + str(cloud_msg.point_step),
                                expected=12, actual=cloud_msg.point_step)

    for field in (fx, fy, fz):
        if field.offset + 4 > cloud_msg.point_step:
            raise InvalidDimensions('field ' + repr(field.name) + ' is beyond point_step ' +
                                    str(cloud_msg.point_step), expected=cloud_msg.point_step,
                                    actual=field.offset + 4)
    return fx, fy, fz


def pointcloud2_to_xyz_iter(cloud_msg):
    """
    Iterates over the x, y, z coordinates of the points of a point cloud, in row major order.
    :param cloud_msg: the PointCloud2 message
    :return: an iterator of float32 arrays with shape (3,)
    """
    fx, fy, fz = getXYZFields(cloud_msg)
    height = int(cloud_msg.height)
    width = int(cloud_msg.width)
    row_step = int(cloud_msg.row_step)
    if width * cloud_msg.point_step > row_step:
        raise InvalidDimensions('width * point_step = ' + str(width * cloud_msg.point_step) +
                                ' is larger than row_step ' + str(row_step), expected=width * cloud_msg.point_step,
                                actual=row_step)

    size = asByteArray(cloud_msg.data).size
    if size < row_step * height:
        raise InvalidDimensions('point cloud data has ' + str(size) + ' bytes but row_step * height = ' +
                                str(row_step * height), expected=row_step * height, actual=size)

    fmt = '>f' if cloud_msg.is_bigendian else '<f'
    offsets = (fx.offset, fy.offset, fz.offset)
    rows = itertools.islice(point_bytes_iter(cloud_msg), height)

    def generator():
        for row in rows:
            for point in row:
                yield np.array([struct.unpack_from(fmt, point, offset)[0] for offset in offsets],
                               dtype=np.float32)

    return generator()


def pointcloud2_to_xyz(cloud_msg):
    """
    Gets the x, y, z coordinates of the points of a point cloud.
    :param cloud_msg: the PointCloud2 message
    :return: a (height * width, 3) float32 array
    """
    fx, fy, fz = getXYZFields(cloud_msg)
    nptype = pftypeToNptype(FLOAT32, cloud_msg.is_bigendian)
    dtype = np.dtype({'names': ['x', 'y', 'z'], 'formats': [nptype] * 3,
                      'offsets': [fx.offset, fy.offset, fz.offset], 'itemsize': int(cloud_msg.point_step)})

    records = pointcloud2Records(cloud_msg, dtype).reshape(-1)
    xyz = np.empty((records.shape[0], 3), dtype=np.float32)
    xyz[:, 0] = records['x']
    xyz[:, 1] = records['y']
    xyz[:, 2] = records['z']
    return xyz


def pointcloud2_to_array(cloud_msg, remove_padding=True):
    """
    Converts a PointCloud2 message to a numpy record array with shape (height, width), even if the height is 1.
    Fields with count > 1 are sub-arrays. The values keep the byte order of the message.
    :param cloud_msg: the PointCloud2 message
    :param remove_padding: drops the dummy fields that describe the padding bytes
    :return: a numpy structured array which does not share memory with the message
    """
    dtype = pointcloud2ToDtype(cloud_msg)
    cloud_arr = pointcloud2Records(cloud_msg, dtype)

    if remove_padding:
        names = [field.name for field in cloud_msg.fields]
        return repack_fields(cloud_arr[names]).copy()

    return cloud_arr.copy()


# -------------------------------------------------------------------------------
# --- EXTENSION ADAPTERS
# -------------------------------------------------------------------------------

class PointCloud2NumpyExt:
    """ Adds numpy conversions to a sensor_msgs/PointCloud2. """

    def __init__(self, msg):
        self.msg = msg

    def xyz_iter(self):
        return pointcloud2_to_xyz_iter(self.msg)

    def to_xyz(self):
        return pointcloud2_to_xyz(self.msg)

    def to_array(self, remove_padding=True):
        return pointcloud2_to_array(self.msg, remove_padding=remove_padding)
