"""
geometry_msgs <-> numpy conversions
"""

from ros_msg_ext.geometry import Isometry3
from ros_msg_ext.messages import getMessageClass
from ros_msg_ext.utilities import msgExtWarn


# -------------------------------------------------------------------------------
# --- FUNCTIONS
# -------------------------------------------------------------------------------

def transform_to_isometry3(transform, verbose=False):
    """
    Converts a geometry_msgs/Transform to an Isometry3.
    The translation and the rotation quaternion are copied verbatim, a degenerate quaternion is not fixed.
    """
    t = transform.translation
    q = transform.rotation
    isometry = Isometry3((t.x, t.y, t.z), (q.x, q.y, q.z, q.w))

    if verbose and isometry.isDegenerate():
        msgExtWarn('Transform has a degenerate rotation ' + str(isometry.rotation.tolist()))
    return isometry


def transform_stamped_to_isometry3(transform_stamped, verbose=False):
    return transform_to_isometry3(transform_stamped.transform, verbose=verbose)


def pose_to_transform(pose, verbose=False):
    """
    Converts a geometry_msgs/Pose to an Isometry3.
    :param pose: the Pose message
    :param verbose: warns when the orientation is degenerate
    :return: an Isometry3 with the position as translation and the orientation as rotation
    """
    p = pose.position
    q = pose.orientation
    isometry = Isometry3((p.x, p.y, p.z), (q.x, q.y, q.z, q.w))

    if verbose and isometry.isDegenerate():
        msgExtWarn('Pose has a degenerate orientation ' + str(isometry.rotation.tolist()))
    return isometry


def transform_to_matrix(transform):
    """ Converts a geometry_msgs/Transform to a 4x4 homogeneous matrix. """
    return transform_to_isometry3(transform).matrix()


def pose_to_matrix(pose):
    """ Converts a geometry_msgs/Pose to a 4x4 homogeneous matrix. """
    return pose_to_transform(pose).matrix()


def isometry3_to_transform(isometry, msg_type=None):
    """
    Creates a geometry_msgs/Transform from an Isometry3.
    :param isometry: the Isometry3
    :param msg_type: a Transform class whose constructor takes no arguments (e.g. rclpy's). If None, the rosbags
    Transform class is used.
    :return: the Transform message
    """
    x, y, z = (float(v) for v in isometry.translation)
    qx, qy, qz, qw = (float(v) for v in isometry.rotation)

    if msg_type is None:
        Transform = getMessageClass('geometry_msgs/msg/Transform')
        Vector3 = getMessageClass('geometry_msgs/msg/Vector3')
        Quaternion = getMessageClass('geometry_msgs/msg/Quaternion')
        return Transform(translation=Vector3(x=x, y=y, z=z), rotation=Quaternion(x=qx, y=qy, z=qz, w=qw))

    msg = msg_type()
    msg.translation.x, msg.translation.y, msg.translation.z = x, y, z
    msg.rotation.x, msg.rotation.y, msg.rotation.z, msg.rotation.w = qx, qy, qz, qw
    return msg


def isometry3_to_pose(isometry, msg_type=None):
    """ Creates a geometry_msgs/Pose from an Isometry3, see isometry3_to_transform. """
    x, y, z = (float(v) for v in isometry.translation)
    qx, qy, qz, qw = (float(v) for v in isometry.rotation)

    if msg_type is None:
        Pose = getMessageClass('geometry_msgs/msg/Pose')
        Point = getMessageClass('geometry_msgs/msg/Point')
        Quaternion = getMessageClass('geometry_msgs/msg/Quaternion')
        return Pose(position=Point(x=x, y=y, z=z), orientation=Quaternion(x=qx, y=qy, z=qz, w=qw))

    msg = msg_type()
    msg.position.x, msg.position.y, msg.position.z = x, y, z
    msg.orientation.x, msg.orientation.y, msg.orientation.z, msg.orientation.w = qx, qy, qz, qw
    return msg


# -------------------------------------------------------------------------------
# --- EXTENSION ADAPTERS
# -------------------------------------------------------------------------------

class TransformNumpyExt:
    """ Adds numpy conversions to a geometry_msgs/Transform. """

    def __init__(self, msg):
        self.msg = msg

    @staticmethod
    def from_isometry3(isometry, msg_type=None):
        return isometry3_to_transform(isometry, msg_type=msg_type)

    def to_isometry3(self):
        return transform_to_isometry3(self.msg)

    def to_matrix(self):
        return transform_to_matrix(self.msg)


class TransformStampedNumpyExt:

    def __init__(self, msg):
        self.msg = msg

    def to_isometry3(self):
        return transform_stamped_to_isometry3(self.msg)


class PoseNumpyExt:

    def __init__(self, msg):
        self.msg = msg

    @staticmethod
    def from_isometry3(isometry, msg_type=None):
        return isometry3_to_pose(isometry, msg_type=msg_type)

    def to_transform(self):
        return pose_to_transform(self.msg)

    def to_matrix(self):
        return pose_to_matrix(self.msg)
