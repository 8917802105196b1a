"""
sensor_msgs -> Apache Arrow conversions
"""

import array

import numpy as np
import pyarrow as pa

from ros_msg_ext.encodings import asByteArray
from ros_msg_ext.errors import UnsupportedEncoding
from ros_msg_ext.point_field import (FLOAT32, FLOAT64, INT8, INT16, INT32, UINT8, UINT16, UINT32, pftypeToNptype,
                                     pftype_to_nptype, pointcloud2Records, pointcloud2ToDtype)
from ros_msg_ext.utilities import printPointFieldsTable

# mappings between PointField types and arrow types
arrow_type_mappings = [(INT8, pa.int8()),
                       (UINT8, pa.uint8()),
                       (INT16, pa.int16()),
                       (UINT16, pa.uint16()),
                       (INT32, pa.int32()),
                       (UINT32, pa.uint32()),
                       (FLOAT32, pa.float32()),
                       (FLOAT64, pa.float64())]

pftype_to_arrow_type = dict(arrow_type_mappings)

# python element type -> numpy dtype used for homogeneous sequences
python_type_to_nptype = {bool: np.dtype('bool'),
                         int: np.dtype('int64'),
                         float: np.dtype('float64')}


# -------------------------------------------------------------------------------
# --- FUNCTIONS
# -------------------------------------------------------------------------------

def pointcloud2_to_arrow(cloud_msg, verbose=False):
    """
    Converts a PointCloud2 message to an arrow StructArray with one non nullable child array per PointField.
    Fields with count 1 become primitive arrays, fields with count > 1 become FixedSizeListArrays.

    :param cloud_msg: the PointCloud2 message
    :param verbose: prints the field layout of the cloud
    :return: a pyarrow.StructArray with height * width elements, in row major order
    """
    if verbose:
        printPointFieldsTable(cloud_msg)

    dtype = pointcloud2ToDtype(cloud_msg, remove_padding=True)
    records = pointcloud2Records(cloud_msg, dtype).reshape(-1)

    if len(cloud_msg.fields) == 0:
        return pa.array([{}] * records.shape[0], type=pa.struct([]))

    arrays = []
    fields = []
    for field in cloud_msg.fields:
        arrow_type = pftype_to_arrow_type[field.datatype]
        native_type = pftype_to_nptype[field.datatype]
        column = records[field.name].astype(native_type)  # copies, in native byte order

        if field.count == 1:
            arrays.append(pa.array(column, type=arrow_type))
            fields.append(pa.field(field.name, arrow_type, nullable=False))
        else:
            values = pa.array(column.reshape(-1), type=arrow_type)
            list_array = pa.FixedSizeListArray.from_arrays(values, int(field.count))
            arrays.append(list_array)
            fields.append(pa.field(field.name, list_array.type, nullable=False))

    return pa.StructArray.from_arrays(arrays, fields=fields)


def getElementTypes(values):
    """
    Gets the set of numpy dtypes of the elements of a list or tuple.
    Raises UnsupportedEncoding for an element that is not a bool, an int, a float or a numpy scalar of those kinds.
    """
    element_types = set()
    for value in values:
        if isinstance(value, np.generic) and value.dtype.kind in 'biuf':
            element_types.add(value.dtype)
        elif type(value) in python_type_to_nptype:
            element_types.add(python_type_to_nptype[type(value)])
        else:
            raise UnsupportedEncoding(type(value).__name__, 'element ' + repr(value) + ' of type ' +
                                      type(value).__name__ + ' is not numeric')
    return element_types


def getElementDtype(values, datatype=None):
    """
    Gets the numpy dtype shared by all the elements of a sequence.
    The elements are always checked to be numeric, even when the datatype is forced.
    :param values: a numpy array, an array.array, a list or a tuple
    :param datatype: forces the element type, a numpy dtype name or a PointField datatype tag
    :return: a numpy dtype
    """
    if isinstance(values, np.ndarray):
        if values.dtype.kind not in 'biuf':
            raise UnsupportedEncoding(str(values.dtype), 'element datatype ' + str(values.dtype) + ' is not numeric')
        element_types = {values.dtype.newbyteorder('=')}
    elif isinstance(values, array.array):
        element_types = {np.dtype(values.typecode)}
    else:
        element_types = getElementTypes(values)

    if datatype is not None:
        if isinstance(datatype, (int, np.integer)) and not isinstance(datatype, bool):
            return pftypeToNptype(int(datatype)).newbyteorder('=')
        try:
            dtype = np.dtype(datatype)
        except TypeError as error:
            raise UnsupportedEncoding(datatype, 'unsupported element datatype ' + repr(datatype)) from error
        if dtype.kind not in 'biuf':
            raise UnsupportedEncoding(datatype, 'element datatype ' + repr(datatype) + ' is not numeric')
        return dtype

    if len(element_types) > 1:
        raise UnsupportedEncoding(sorted(str(t) for t in element_types),
                                  'elements have heterogeneous types ' + str(sorted(str(t) for t in element_types)))

    if not element_types:
        return np.dtype('float64')
    return element_types.pop()


def message_array_to_columnar(values, datatype=None):
    """
    Converts a homogeneous sequence of numeric values, as carried by a message field, into a typed arrow array.
    :param values: a numpy array, an array.array, bytes, a list or a tuple
    :param datatype: forces the element type, a numpy dtype name or a PointField datatype tag
    :return: a pyarrow.Array
    """
    if isinstance(values, (bytes, bytearray, memoryview)):
        values = asByteArray(values)

    dtype = getElementDtype(values, datatype)
    try:
        column = np.array(values, dtype=dtype).reshape(-1)
    except (OverflowError, ValueError) as error:
        raise UnsupportedEncoding(str(dtype), 'cannot represent the elements as ' + str(dtype) + ': ' +
                                  str(error)) from error
    return pa.array(column)


# -------------------------------------------------------------------------------
# --- EXTENSION ADAPTERS
# -------------------------------------------------------------------------------

class PointCloud2ArrowExt:
    """ Adds arrow conversions to a sensor_msgs/PointCloud2. """

    def __init__(self, msg):
        self.msg = msg

    def to_arrow_array(self):
        return pointcloud2_to_arrow(self.msg)
