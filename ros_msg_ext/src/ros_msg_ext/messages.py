#!/usr/bin/env python3
"""
Message classes used when a conversion has to build a message.

The conversions read messages by duck typing (rclpy, rospy or rosbags messages all work). To create messages, the
rosbags type store is used unless the caller passes its own message class.
"""
from functools import lru_cache

from rosbags.typesys import Stores, get_typestore

DEFAULT_STORE = Stores.ROS2_HUMBLE


@lru_cache(maxsize=None)
def getTypestore(store=DEFAULT_STORE):
    return get_typestore(store)


def getMessageClass(msgtype, store=DEFAULT_STORE):
    """
    Gets a message class from the rosbags type store.
    :param msgtype: the message type name, e.g. 'geometry_msgs/msg/Transform'
    :param store: the rosbags type store, defaults to ROS2 humble
    :return: the message class (a dataclass)
    """
    return getTypestore(store).types[msgtype]


def makeHeader(frame_id='', sec=0, nanosec=0, store=DEFAULT_STORE):
    Header = getMessageClass('std_msgs/msg/Header', store)
    Time = getMessageClass('builtin_interfaces/msg/Time', store)
    return Header(stamp=Time(sec=sec, nanosec=nanosec), frame_id=frame_id)
