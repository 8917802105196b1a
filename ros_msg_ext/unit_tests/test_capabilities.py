import unittest
from unittest.mock import patch

from ros_msg_ext.capabilities import capability_table, getCapabilities, hasCapability, requireCapability
from ros_msg_ext.encodings import getSupportedEncodings
from ros_msg_ext.errors import ConversionError, MissingCapability


class TestCapabilities(unittest.TestCase):

    def test_linalg_is_always_available(self):
        self.assertTrue(hasCapability('linalg'))
        requireCapability('linalg')

    def test_unknown_capability(self):
        with self.assertRaises(ValueError):
            hasCapability('cuda')

    def test_capabilities_table(self):
        capabilities = getCapabilities()
        self.assertEqual(set(capabilities.keys()), set(capability_table.keys()))
        self.assertEqual(capabilities['yuv'], capabilities['opencv'])

    def test_missing_library(self):
        with patch('ros_msg_ext.capabilities.importlib.util.find_spec', return_value=None):
            self.assertFalse(hasCapability('arrow'))
            with self.assertRaises(MissingCapability) as context:
                requireCapability('arrow')

        self.assertIsInstance(context.exception, ConversionError)
        self.assertEqual(context.exception.package, 'pyarrow')
        self.assertIn('ros-msg-ext[arrow]', str(context.exception))

    def test_supported_encodings_follow_capabilities(self):
        with patch('ros_msg_ext.encodings.hasCapability', return_value=False):
            encodings = getSupportedEncodings()
        self.assertIn('rgb8', encodings)
        self.assertIn('16uc1', encodings)
        self.assertNotIn('uyvy', encodings)

        if hasCapability('yuv'):
            self.assertIn('uyvy', getSupportedEncodings())


if __name__ == '__main__':
    unittest.main()
