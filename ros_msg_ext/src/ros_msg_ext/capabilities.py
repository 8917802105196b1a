"""
Optional third-party ecosystems supported by the conversion layer.

Each capability is backed by one importable module. The sub-packages only import the conversion modules whose
capability is available, so a consumer that did not install an extra never imports its library.
"""

import importlib.util

from ros_msg_ext.errors import MissingCapability

# -------------------------------------------------------------------------------
# --- SETTINGS
# -------------------------------------------------------------------------------

# capability name -> (module to import, package name on the index, install extra)
capability_table = {'linalg': ('numpy', 'numpy', 'full'),
                    'opencv': ('cv2', 'opencv-python', 'opencv'),
                    'yuv': ('cv2', 'opencv-python', 'opencv'),
                    'arrow': ('pyarrow', 'pyarrow', 'arrow')}


# -------------------------------------------------------------------------------
# --- FUNCTIONS
# -------------------------------------------------------------------------------

def hasCapability(name):
    """
    Checks if the library backing a capability can be imported.
    :param name: one of the keys of capability_table
    :return: True if the capability is available
    """
    if name not in capability_table:
        raise ValueError('Unknown capability ' + repr(name) + ', known capabilities are ' +
                         str(sorted(capability_table.keys())))

    module, _, _ = capability_table[name]
    return importlib.util.find_spec(module) is not None


def requireCapability(name):
    """ Raises MissingCapability if the capability is not available. """
    if not hasCapability(name):
        _, package, extra = capability_table[name]
        raise MissingCapability(name, package, extra)


def getCapabilities():
    return {name: hasCapability(name) for name in capability_table}
