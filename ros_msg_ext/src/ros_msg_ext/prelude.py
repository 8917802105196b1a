"""
Every extension adapter and conversion function enabled by the installed capabilities.

    from ros_msg_ext.prelude import *
"""

from ros_msg_ext.capabilities import hasCapability
from ros_msg_ext.errors import ConversionError, DegenerateInput, InvalidDimensions, UnsupportedEncoding
from ros_msg_ext.geometry import Isometry3
from ros_msg_ext.sensor_msgs.point_bytes import PointCloud2Ext, point_bytes_iter, row_bytes_iter

__all__ = ['ConversionError', 'DegenerateInput', 'InvalidDimensions', 'UnsupportedEncoding', 'Isometry3',
           'PointCloud2Ext', 'point_bytes_iter', 'row_bytes_iter']

if hasCapability('linalg'):
    from ros_msg_ext.geometry_msgs.with_numpy import (PoseNumpyExt, TransformNumpyExt, TransformStampedNumpyExt,
                                                      isometry3_to_pose, isometry3_to_transform, pose_to_matrix,
                                                      pose_to_transform, transform_stamped_to_isometry3,
                                                      transform_to_isometry3, transform_to_matrix)
    from ros_msg_ext.sensor_msgs.with_numpy import (PointCloud2NumpyExt, pointcloud2_to_array, pointcloud2_to_xyz,
                                                    pointcloud2_to_xyz_iter)

    __all__ += ['PoseNumpyExt', 'TransformNumpyExt', 'TransformStampedNumpyExt', 'isometry3_to_pose',
                'isometry3_to_transform', 'pose_to_matrix', 'pose_to_transform', 'transform_stamped_to_isometry3',
                'transform_to_isometry3', 'transform_to_matrix', 'PointCloud2NumpyExt', 'pointcloud2_to_array',
                'pointcloud2_to_xyz', 'pointcloud2_to_xyz_iter']

if hasCapability('opencv'):
    from ros_msg_ext.sensor_msgs.with_opencv import ImageOpenCvExt, image_to_mat, image_to_matrix

    __all__ += ['ImageOpenCvExt', 'image_to_mat', 'image_to_matrix']

if hasCapability('arrow'):
    from ros_msg_ext.sensor_msgs.with_arrow import PointCloud2ArrowExt, message_array_to_columnar, pointcloud2_to_arrow

    __all__ += ['PointCloud2ArrowExt', 'message_array_to_columnar', 'pointcloud2_to_arrow']
