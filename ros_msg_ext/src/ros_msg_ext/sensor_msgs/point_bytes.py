"""
Raw byte access to the rows and points of a sensor_msgs/PointCloud2
"""

from ros_msg_ext.encodings import asByteArray
from ros_msg_ext.errors import InvalidDimensions


def _chunks(view, size):
    for start in range(0, len(view), size):
        yield view[start:start + size]


def row_bytes_iter(cloud_msg):
    """
    Iterates over the rows of a point cloud.
    :param cloud_msg: the PointCloud2 message
    :return: an iterator of memoryviews of row_step bytes (the last one may be shorter if the data is truncated), empty
    if the cloud has no points
    """
    if int(cloud_msg.height) * int(cloud_msg.width) == 0:
        return iter(())

    row_step = int(cloud_msg.row_step)
    if row_step <= 0:
        raise InvalidDimensions('row_step must be positive, got ' + str(row_step), expected=1, actual=row_step)

    return _chunks(memoryview(asByteArray(cloud_msg.data)), row_step)


def point_bytes_iter(cloud_msg):
    """
    Iterates over the rows of a point cloud, yielding for each row an iterator over its points.
    Only the first width * point_step bytes of a row are points, the row padding is skipped.
    """
    if int(cloud_msg.height) * int(cloud_msg.width) == 0:
        return iter(())

    point_step = int(cloud_msg.point_step)
    if point_step <= 0:
        raise InvalidDimensions('point_step must be positive, got ' + str(point_step), expected=1,
                                actual=point_step)
    points_per_row = point_step * int(cloud_msg.width)

    return (_chunks(row[0:points_per_row], point_step) for row in row_bytes_iter(cloud_msg))


# -------------------------------------------------------------------------------
# --- EXTENSION ADAPTERS
# -------------------------------------------------------------------------------

class PointCloud2Ext:
    """ Adds raw byte iteration to a sensor_msgs/PointCloud2. """

    def __init__(self, msg):
        self.msg = msg

    def row_bytes_iter(self):
        return row_bytes_iter(self.msg)

    def point_bytes_iter(self):
        return point_bytes_iter(self.msg)
