"""
Console helpers used when a conversion is called with verbose=True
"""

import numpy as np
from colorama import Fore, Style
from prettytable import PrettyTable

from ros_msg_ext.point_field import pftype_names


# -------------------------------------------------------------------------------
# --- FUNCTIONS
# -------------------------------------------------------------------------------

def msgExtWarn(message):
    print(Fore.YELLOW + 'ros_msg_ext Warn: ' + Style.RESET_ALL + message)


def printImageInfo(image, text=None):
    """
    Prints the layout of an Image message.
    :param image: the Image message
    :param text: an optional title printed before the layout
    """
    if text is not None:
        print(text)
    print('\theight = ' + str(image.height) +
          '\n\twidth = ' + str(image.width) +
          '\n\tencoding = ' + Fore.BLUE + str(image.encoding) + Style.RESET_ALL +
          '\n\tstep = ' + str(image.step) +
          '\n\tis_bigendian = ' + str(bool(image.is_bigendian)) +
          '\n\tdata bytes = ' + str(len(image.data)))


def printMatrixInfo(matrix, text=None):
    if text is not None:
        print(text)
    if matrix.size == 0:
        print('\tshape = ' + str(matrix.shape) + '\n\tdtype = ' + str(matrix.dtype) + ' (empty)')
        return

    print('\tshape = ' + str(matrix.shape) +
          '\n\tdtype = ' + str(matrix.dtype) +
          '\n\tmax value = ' + str(np.nanmax(matrix)) +
          '\n\tmin value = ' + str(np.nanmin(matrix)))


def printPointFieldsTable(cloud_msg):
    """ Prints a table with the name, offset, datatype and count of every PointField of a PointCloud2 message. """

    table = PrettyTable(['Field', 'Offset', 'Datatype', 'Count'])
    for field in cloud_msg.fields:
        datatype = pftype_names.get(field.datatype, Fore.RED + str(field.datatype) + Style.RESET_ALL)
        table.add_row([Fore.BLUE + field.name + Style.RESET_ALL, field.offset, datatype, field.count])

    print('PointCloud2 ' + str(cloud_msg.height) + 'x' + str(cloud_msg.width) + ', point_step=' +
          str(cloud_msg.point_step) + ', row_step=' + str(cloud_msg.row_step) + ', is_bigendian=' +
          str(bool(cloud_msg.is_bigendian)))
    print(table)
