"""
Conversions of geometry_msgs messages. Each module is only imported when its capability is available.
"""

from ros_msg_ext.capabilities import hasCapability

if hasCapability('linalg'):
    from ros_msg_ext.geometry_msgs.with_numpy import (PoseNumpyExt, TransformNumpyExt, TransformStampedNumpyExt,
                                                      isometry3_to_pose, isometry3_to_transform, pose_to_matrix,
                                                      pose_to_transform, transform_stamped_to_isometry3,
                                                      transform_to_isometry3, transform_to_matrix)
