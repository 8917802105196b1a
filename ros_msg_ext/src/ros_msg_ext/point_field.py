"""
PointField datatype tags and their mappings to numpy types.
"""

import numpy as np

from ros_msg_ext.encodings import asByteArray
from ros_msg_ext.errors import InvalidDimensions, UnsupportedEncoding

# -----------------------------------------------------------------------------
# ----- Settings
# -----------------------------------------------------------------------------

# PointField datatype tags, as defined in sensor_msgs/msg/PointField
INT8 = 1
UINT8 = 2
INT16 = 3
UINT16 = 4
INT32 = 5
UINT32 = 6
FLOAT32 = 7
FLOAT64 = 8

DUMMY_FIELD_PREFIX = '__'

# mappings between PointField types and numpy types
type_mappings = [(INT8, np.dtype('int8')),
                 (UINT8, np.dtype('uint8')),
                 (INT16, np.dtype('int16')),
                 (UINT16, np.dtype('uint16')),
                 (INT32, np.dtype('int32')),
                 (UINT32, np.dtype('uint32')),
                 (FLOAT32, np.dtype('float32')),
                 (FLOAT64, np.dtype('float64'))]

pftype_to_nptype = dict(type_mappings)

pftype_names = {INT8: 'INT8', UINT8: 'UINT8', INT16: 'INT16', UINT16: 'UINT16',
                INT32: 'INT32', UINT32: 'UINT32', FLOAT32: 'FLOAT32', FLOAT64: 'FLOAT64'}


# -----------------------------------------------------------------------------
# ----- Functions
# -----------------------------------------------------------------------------

def pftypeToNptype(datatype, is_bigendian=False):
    """
    Gets the numpy dtype of a PointField datatype tag, with the byte order of the message.
    :param datatype: the PointField datatype tag (1 to 8)
    :param is_bigendian: the is_bigendian flag of the message
    :return: a numpy dtype
    """
    if datatype not in pftype_to_nptype:
        raise UnsupportedEncoding(datatype, 'unsupported PointField datatype ' + repr(datatype))

    byte_order = '>' if is_bigendian else '<'
    return pftype_to_nptype[datatype].newbyteorder(byte_order)


def pointcloud2ToDtype(cloud_msg, remove_padding=False):
    """
    Converts the list of PointFields of a PointCloud2 message to a numpy structured dtype.
    Fields with count > 1 become sub-array fields of shape (count,).
    The itemsize of the dtype is the point_step of the message, so padding between and after fields is kept unless
    remove_padding is True, in which case only the declared fields are described (still at their offsets).
    """
    checkFieldsFitPointStep(cloud_msg)

    names = []
    formats = []
    offsets = []
    for field in cloud_msg.fields:
        nptype = pftypeToNptype(field.datatype, cloud_msg.is_bigendian)
        names.append(field.name)
        formats.append(nptype if field.count == 1 else (nptype, (field.count,)))
        offsets.append(field.offset)

    dtype = np.dtype({'names': names, 'formats': formats, 'offsets': offsets, 'itemsize': cloud_msg.point_step})
    if remove_padding:
        return dtype

    # name the padding bytes explicitly, the same way the pcl bridge does
    padded_names = list(names)
    padded_formats = list(formats)
    padded_offsets = list(offsets)
    covered = np.zeros(cloud_msg.point_step, dtype=bool)
    for name in names:
        field_dtype, field_offset = dtype.fields[name][:2]
        covered[field_offset:field_offset + field_dtype.itemsize] = True
    for offset in np.flatnonzero(~covered):
        padding_name = '%s%d' % (DUMMY_FIELD_PREFIX, offset)
        while padding_name in names:
            padding_name = DUMMY_FIELD_PREFIX + padding_name
        padded_names.append(padding_name)
        padded_formats.append(np.uint8)
        padded_offsets.append(int(offset))

    return np.dtype({'names': padded_names, 'formats': padded_formats, 'offsets': padded_offsets,
                     'itemsize': cloud_msg.point_step})


def checkFieldsFitPointStep(cloud_msg):
    """ Raises InvalidDimensions if a PointField extends past the point_step of the cloud. """
    for field in cloud_msg.fields:
        size = pftypeToNptype(field.datatype).itemsize * field.count
        if field.offset + size > cloud_msg.point_step:
            raise InvalidDimensions('field ' + repr(field.name) + ' ends at byte ' + str(field.offset + size) +
                                    ' which is beyond point_step ' + str(cloud_msg.point_step),
                                    expected=cloud_msg.point_step, actual=field.offset + size)


def pointcloud2Records(cloud_msg, dtype):
    """
    Views the points of a PointCloud2 message as a (height, width) numpy structured array.
    The row padding (row_step - width * point_step bytes) is removed. The returned array may share memory with the
    message buffer, copy it before handing it out.
    :param cloud_msg: the PointCloud2 message
    :param dtype: a structured dtype with itemsize equal to point_step
    """
    height = int(cloud_msg.height)
    width = int(cloud_msg.width)
    point_step = int(cloud_msg.point_step)
    row_step = int(cloud_msg.row_step)

    if point_step <= 0:
        raise InvalidDimensions('point_step must be positive, got ' + str(point_step), expected=1,
                                actual=point_step)

    if width * point_step > row_step:
        raise InvalidDimensions('width * point_step = ' + str(width * point_step) + ' is larger than row_step ' +
                                str(row_step), expected=width * point_step, actual=row_step)

    data = asByteArray(cloud_msg.data)
    if data.size < row_step * height:
        raise InvalidDimensions('point cloud data has ' + str(data.size) + ' bytes but row_step * height = ' +
                                str(row_step * height), expected=row_step * height, actual=data.size)

    if height * width == 0:
        return np.zeros((height, width), dtype=dtype)

    rows = data[:row_step * height].reshape(height, row_step)[:, :width * point_step]
    return np.ascontiguousarray(rows).reshape(-1).view(dtype).reshape(height, width)
