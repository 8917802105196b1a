"""
Extensions for ROS message types.

This package extends common ROS message types (rclpy, rospy or rosbags messages) with type conversions to data
types of third-party libraries. The following libraries are supported, each one behind a capability that is
available when the library is installed:

- numpy (linalg): geometry_msgs transforms and poses, sensor_msgs point clouds
- opencv (opencv, yuv): sensor_msgs images
- pyarrow (arrow): sensor_msgs point clouds and message arrays
"""

from ros_msg_ext.errors import ConversionError, DegenerateInput, InvalidDimensions, MissingCapability, \
    UnsupportedEncoding
from ros_msg_ext.capabilities import getCapabilities, hasCapability, requireCapability
from ros_msg_ext.geometry import Isometry3
from ros_msg_ext import geometry_msgs
from ros_msg_ext import sensor_msgs
