import array
import struct
import unittest

import numpy as np

from ros_msg_ext.capabilities import hasCapability
from ros_msg_ext.errors import InvalidDimensions, UnsupportedEncoding
from ros_msg_ext.messages import getMessageClass, makeHeader
from ros_msg_ext.point_field import FLOAT32, FLOAT64, INT8, UINT16

if hasCapability('arrow'):
    import pyarrow as pa

    from ros_msg_ext.sensor_msgs.with_arrow import PointCloud2ArrowExt, message_array_to_columnar, pointcloud2_to_arrow

PointCloud2 = getMessageClass('sensor_msgs/msg/PointCloud2')
PointField = getMessageClass('sensor_msgs/msg/PointField')


def makeCloud(fields, height, width, point_step, row_step, data, is_bigendian=False):
    return PointCloud2(header=makeHeader('lidar'), height=height, width=width,
                       fields=[PointField(name=n, offset=o, datatype=d, count=c) for n, o, d, c in fields],
                       is_bigendian=is_bigendian, point_step=point_step, row_step=row_step,
                       data=np.frombuffer(bytes(data), dtype=np.uint8).copy(), is_dense=True)


@unittest.skipUnless(hasCapability('arrow'), 'pyarrow is not installed')
class TestPointCloudToArrow(unittest.TestCase):

    def setUp(self):
        # x, y, z (float32), intensity (float64), normal (3 x int8), 1 byte of padding, ring (uint16)
        self.fields = [('x', 0, FLOAT32, 1), ('y', 4, FLOAT32, 1), ('z', 8, FLOAT32, 1),
                       ('intensity', 12, FLOAT64, 1), ('normal', 20, INT8, 3), ('ring', 24, UINT16, 1)]
        self.points = [(1.0, 2.0, 3.0, 0.5, (-1, 0, 1), 7), (4.0, 5.0, 6.0, 0.25, (0, -128, 127), 65535)]

    def packCloud(self, byte_order='<'):
        data = b''
        for x, y, z, intensity, normal, ring in self.points:
            data += struct.pack(byte_order + 'fffdbbbxH', x, y, z, intensity, *normal, ring) + b'\x00' * 6
        return data

    def test_struct_layout(self):
        cloud = makeCloud(self.fields, 1, 2, 32, 64, self.packCloud())

        result = pointcloud2_to_arrow(cloud)

        self.assertIsInstance(result, pa.StructArray)
        self.assertEqual(len(result), 2)
        self.assertEqual(result.type.num_fields, 6)
        self.assertEqual([result.type.field(i).name for i in range(6)],
                         ['x', 'y', 'z', 'intensity', 'normal', 'ring'])
        self.assertEqual(result.type.field('x').type, pa.float32())
        self.assertEqual(result.type.field('intensity').type, pa.float64())
        self.assertEqual(result.type.field('normal').type, pa.list_(pa.int8(), 3))
        self.assertEqual(result.type.field('ring').type, pa.uint16())
        for i in range(6):
            self.assertFalse(result.type.field(i).nullable)

    def test_values(self):
        cloud = makeCloud(self.fields, 1, 2, 32, 64, self.packCloud())

        result = pointcloud2_to_arrow(cloud)

        self.assertEqual(result.field('x').to_pylist(), [1.0, 4.0])
        self.assertEqual(result.field('z').to_pylist(), [3.0, 6.0])
        self.assertEqual(result.field('intensity').to_pylist(), [0.5, 0.25])
        self.assertEqual(result.field('normal').to_pylist(), [[-1, 0, 1], [0, -128, 127]])
        self.assertEqual(result.field('ring').to_pylist(), [7, 65535])

    def test_big_endian(self):
        little = pointcloud2_to_arrow(makeCloud(self.fields, 1, 2, 32, 64, self.packCloud()))
        big = pointcloud2_to_arrow(makeCloud(self.fields, 1, 2, 32, 64, self.packCloud('>'), is_bigendian=True))
        self.assertTrue(big.equals(little))

    def test_rows_are_flattened_in_row_major_order(self):
        # 2 rows of 1 point, with 8 bytes of row padding
        data = self.packCloud()[0:32] + b'\xff' * 8 + self.packCloud()[32:64] + b'\xff' * 8
        result = pointcloud2_to_arrow(makeCloud(self.fields, 2, 1, 32, 40, data))
        self.assertEqual(result.field('ring').to_pylist(), [7, 65535])

    def test_no_fields(self):
        result = pointcloud2_to_arrow(makeCloud([], 1, 3, 4, 12, b'\x00' * 12))
        self.assertEqual(len(result), 3)
        self.assertEqual(result.type.num_fields, 0)

    def test_unknown_datatype(self):
        cloud = makeCloud([('x', 0, 9, 1)], 1, 1, 4, 4, b'\x00' * 4)
        with self.assertRaises(UnsupportedEncoding):
            pointcloud2_to_arrow(cloud)

    def test_row_step_smaller_than_points(self):
        cloud = makeCloud(self.fields, 1, 2, 32, 48, self.packCloud())
        with self.assertRaises(InvalidDimensions):
            pointcloud2_to_arrow(cloud)

    def test_short_data(self):
        cloud = makeCloud(self.fields, 1, 2, 32, 64, self.packCloud()[0:60])
        with self.assertRaises(InvalidDimensions):
            pointcloud2_to_arrow(cloud)

    def test_adapter(self):
        cloud = makeCloud(self.fields, 1, 2, 32, 64, self.packCloud())
        self.assertTrue(PointCloud2ArrowExt(cloud).to_arrow_array().equals(pointcloud2_to_arrow(cloud)))


@unittest.skipUnless(hasCapability('arrow'), 'pyarrow is not installed')
class TestMessageArrayToColumnar(unittest.TestCase):

    def test_float_list(self):
        result = message_array_to_columnar([0.1, 0.2, 0.3])
        self.assertEqual(result.type, pa.float64())
        self.assertEqual(result.to_pylist(), [0.1, 0.2, 0.3])

    def test_int_list(self):
        self.assertEqual(message_array_to_columnar((1, 2, 3)).type, pa.int64())

    def test_numpy_array_keeps_its_type(self):
        result = message_array_to_columnar(np.array([1, 2, 3], dtype='>u2'))
        self.assertEqual(result.type, pa.uint16())
        self.assertEqual(result.to_pylist(), [1, 2, 3])

    def test_array_module(self):
        self.assertEqual(message_array_to_columnar(array.array('f', [1.0, 2.0])).type, pa.float32())

    def test_bytes(self):
        result = message_array_to_columnar(b'\x01\x02\xff')
        self.assertEqual(result.type, pa.uint8())
        self.assertEqual(result.to_pylist(), [1, 2, 255])

    def test_forced_datatype(self):
        self.assertEqual(message_array_to_columnar([1, 2], datatype='float32').type, pa.float32())
        self.assertEqual(message_array_to_columnar([1, 2], datatype=UINT16).type, pa.uint16())

    def test_empty(self):
        result = message_array_to_columnar([])
        self.assertEqual(len(result), 0)
        self.assertEqual(result.type, pa.float64())

    def test_heterogeneous_elements(self):
        with self.assertRaises(UnsupportedEncoding):
            message_array_to_columnar([1, 2.5])

    def test_non_numeric_elements(self):
        with self.assertRaises(UnsupportedEncoding):
            message_array_to_columnar(['a', 'b'])
        with self.assertRaises(UnsupportedEncoding):
            message_array_to_columnar([1, 2], datatype='str')
        with self.assertRaises(UnsupportedEncoding):
            message_array_to_columnar([1, 2], datatype=9)

    def test_forced_datatype_still_checks_elements(self):
        with self.assertRaises(UnsupportedEncoding):
            message_array_to_columnar(['1', '2.5'], datatype='float64')
        with self.assertRaises(UnsupportedEncoding):
            message_array_to_columnar(['a'], datatype='float64')
        with self.assertRaises(UnsupportedEncoding):
            message_array_to_columnar(np.array(['a']), datatype='float64')

    def test_int_out_of_range(self):
        with self.assertRaises(UnsupportedEncoding):
            message_array_to_columnar([2 ** 70, 1])
        with self.assertRaises(UnsupportedEncoding):
            message_array_to_columnar([2 ** 70], datatype='int64')


if __name__ == '__main__':
    unittest.main()
