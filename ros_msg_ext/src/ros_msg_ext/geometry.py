"""
Rigid transformations backed by numpy.

Quaternions use the ROS component order (x, y, z, w).
"""

import math

import numpy as np

from ros_msg_ext.errors import DegenerateInput

_EPS = np.finfo(float).eps * 4.0


# -------------------------------------------------------------------------------
# --- FUNCTIONS
# -------------------------------------------------------------------------------

def quaternionMatrix(quaternion):
    """Return homogeneous rotation matrix from quaternion.
    Adapted from 2006, Christoph Gohlke. The quaternion does not have to be normalized. A zero norm quaternion has
    no rotation, so the rotation block of the returned matrix is filled with nan.
    """
    q_ = np.array(quaternion[:4], dtype=np.float64).copy()
    nq = np.dot(q_, q_)
    if nq == 0.0:
        matrix = np.full((4, 4), np.nan)
        matrix[3, :] = (0.0, 0.0, 0.0, 1.0)
        return matrix
    q_ *= math.sqrt(2.0 / nq)
    q = np.outer(q_, q_)
    return np.array((
        (1.0-q[1, 1]-q[2, 2],     q[0, 1]-q[2, 3],     q[0, 2]+q[1, 3], 0.0),
        (q[0, 1]+q[2, 3], 1.0-q[0, 0]-q[2, 2],     q[1, 2]-q[0, 3], 0.0),
        (q[0, 2]-q[1, 3],     q[1, 2]+q[0, 3], 1.0-q[0, 0]-q[1, 1], 0.0),
        (0.0,                 0.0,                 0.0, 1.0)
    ), dtype=np.float64)


def quaternionFromMatrix(matrix):
    """Return quaternion (x, y, z, w) from the rotation part of a homogeneous matrix.
    Adapted from 2006, Christoph Gohlke. The matrix must be a precise rotation matrix.
    """
    M = np.array(matrix, dtype=np.float64)[:4, :4]
    q = np.empty((4,), dtype=np.float64)
    t = np.trace(M)
    if t > M[3, 3]:
        q[3] = t
        q[2] = M[1, 0] - M[0, 1]
        q[1] = M[0, 2] - M[2, 0]
        q[0] = M[2, 1] - M[1, 2]
    else:
        i, j, k = 0, 1, 2
        if M[1, 1] > M[0, 0]:
            i, j, k = 1, 2, 0
        if M[2, 2] > M[i, i]:
            i, j, k = 2, 0, 1
        t = M[i, i] - (M[j, j] + M[k, k]) + M[3, 3]
        q[i] = t
        q[j] = M[i, j] + M[j, i]
        q[k] = M[k, i] + M[i, k]
        q[3] = M[k, j] - M[j, k]
    q *= 0.5 / math.sqrt(t * M[3, 3])
    return q


def quaternionMultiply(quaternion1, quaternion0):
    """Return the hamilton product of two quaternions, both in (x, y, z, w) order."""
    x1, y1, z1, w1 = quaternion1
    x0, y0, z0, w0 = quaternion0
    return np.array((
        w1 * x0 + x1 * w0 + y1 * z0 - z1 * y0,
        w1 * y0 - x1 * z0 + y1 * w0 + z1 * x0,
        w1 * z0 + x1 * y0 - y1 * x0 + z1 * w0,
        w1 * w0 - x1 * x0 - y1 * y0 - z1 * z0), dtype=np.float64)


def translationQuaternionToTransform(trans, quat):
    matrix = quaternionMatrix(quat)
    matrix[0, 3] = trans[0]
    matrix[1, 3] = trans[1]
    matrix[2, 3] = trans[2]
    matrix[3, 3] = 1
    return matrix


# -------------------------------------------------------------------------------
# --- CLASSES
# -------------------------------------------------------------------------------

class Isometry3:
    """
    A rigid transformation made of a translation and a rotation quaternion.

    The components are stored exactly as given, the quaternion is never normalized. Use isDegenerate() or validate()
    to detect a rotation that cannot be used.
    """

    def __init__(self, translation=(0.0, 0.0, 0.0), rotation=(0.0, 0.0, 0.0, 1.0)):
        self.translation = np.array(translation, dtype=np.float64).reshape(3)
        self.rotation = np.array(rotation, dtype=np.float64).reshape(4)

    @classmethod
    def identity(cls):
        return cls()

    @classmethod
    def fromMatrix(cls, matrix):
        """
        Creates an isometry from a 4x4 homogeneous matrix.
        :param matrix: a 4x4 homogeneous matrix with a precise rotation block
        :return: an Isometry3
        """
        matrix = np.asarray(matrix, dtype=np.float64)
        if matrix.shape != (4, 4):
            raise ValueError('Expected a 4x4 homogeneous matrix, got shape ' + str(matrix.shape))
        return cls(matrix[0:3, 3], quaternionFromMatrix(matrix))

    def matrix(self):
        """ Returns the 4x4 homogeneous matrix of this isometry. """
        return translationQuaternionToTransform(self.translation, self.rotation)

    def inverse(self):
        x, y, z, w = self.rotation
        conjugate = np.array((-x, -y, -z, w), dtype=np.float64)
        rotation_inverse = quaternionMatrix(conjugate)[0:3, 0:3]
        return Isometry3(-np.dot(rotation_inverse, self.translation), conjugate)

    def transformPoints(self, points):
        """
        Applies the isometry to one point (3,) or to an array of points (N, 3).
        """
        points = np.asarray(points, dtype=np.float64)
        rotation = quaternionMatrix(self.rotation)[0:3, 0:3]
        return np.dot(points, rotation.T) + self.translation

    def isDegenerate(self):
        """ True if a component is not finite or the rotation quaternion has (almost) zero norm. """
        if not (np.all(np.isfinite(self.translation)) and np.all(np.isfinite(self.rotation))):
            return True
        return bool(np.dot(self.rotation, self.rotation) < _EPS)

    def validate(self):
        if self.isDegenerate():
            raise DegenerateInput('degenerate isometry: translation=' + str(self.translation.tolist()) +
                                  ' rotation=' + str(self.rotation.tolist()))
        return self

    def __matmul__(self, other):
        if not isinstance(other, Isometry3):
            return NotImplemented
        rotation = quaternionMatrix(self.rotation)[0:3, 0:3]
        translation = self.translation + np.dot(rotation, other.translation)
        return Isometry3(translation, quaternionMultiply(self.rotation, other.rotation))

    def __eq__(self, other):
        if not isinstance(other, Isometry3):
            return NotImplemented
        return np.array_equal(self.translation, other.translation) and np.array_equal(self.rotation, other.rotation)

    def __repr__(self):
        return 'Isometry3(translation=' + str(self.translation.tolist()) + ', rotation=' + \
               str(self.rotation.tolist()) + ')'
