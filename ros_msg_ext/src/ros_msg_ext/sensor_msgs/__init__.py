"""
Conversions of sensor_msgs messages. Each module is only imported when its capability is available.
"""

from ros_msg_ext.capabilities import hasCapability
from ros_msg_ext.sensor_msgs.point_bytes import PointCloud2Ext, point_bytes_iter, row_bytes_iter

if hasCapability('linalg'):
    from ros_msg_ext.sensor_msgs.with_numpy import (PointCloud2NumpyExt, pointcloud2_to_array, pointcloud2_to_xyz,
                                                    pointcloud2_to_xyz_iter)

if hasCapability('opencv'):
    from ros_msg_ext.sensor_msgs.with_opencv import ImageOpenCvExt, image_to_mat, image_to_matrix

if hasCapability('arrow'):
    from ros_msg_ext.sensor_msgs.with_arrow import PointCloud2ArrowExt, message_array_to_columnar, pointcloud2_to_arrow
