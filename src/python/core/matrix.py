"""Square matrices with cofactor-expansion determinants and adjugate inversion.

Matrices are stored as flat row-major float arrays of length dim * dim. The
algorithms (transpose, submatrix, minor, cofactor, determinant, inverse) are
dimension agnostic; the renderer uses them at sizes 2, 3 and 4, where the
recursive cofactor expansion is cheap enough.

Example:
    >>> from src.python.core.matrix import Matrix
    >>> m = Matrix.from_rows([[1.0, 2.0], [3.0, 4.0]])
    >>> m.determinant()
    -2.0
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import numpy.typing as npt

from src.python.core.tuples import Tuple

# Element-wise equality tolerance
MATRIX_EPSILON = 1e-6

# Determinants this small relative to the product of the row norms are zero
SINGULAR_EPSILON = 1e-12


class SingularMatrixError(ValueError):
    """Raised when inverting a matrix whose determinant is (nearly) zero."""


class Matrix:
    """A dim x dim matrix of floats in row-major order.

    Attributes:
        dim: Number of rows (and columns).
    """

    def __init__(self, dim: int, elements: Sequence[float] | npt.NDArray[np.float64]) -> None:
        """Create a matrix from a flat row-major sequence.

        Args:
            dim: The matrix dimension.
            elements: dim * dim values in row-major order.

        Raises:
            ValueError: If the number of elements does not match dim * dim.
        """
        data = np.asarray(elements, dtype=np.float64).reshape(-1)
        if dim < 1 or data.size != dim * dim:
            raise ValueError(f"A {dim}x{dim} matrix needs {dim * dim} elements, got {data.size}")
        self.dim = dim
        self._elems = data

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[float]]) -> Matrix:
        """Create a matrix from a list of rows."""
        dim = len(rows)
        return cls(dim, [value for row in rows for value in row])

    @classmethod
    def identity(cls) -> Matrix:
        """The 4x4 identity matrix."""
        return cls(4, np.eye(4).reshape(-1))

    # =========================================================================
    # Element access
    # =========================================================================

    def at(self, row: int, col: int) -> float:
        """Get the element at (row, col)."""
        return float(self._elems[row * self.dim + col])

    def to_nested_list(self) -> list[list[float]]:
        """Return the rows as nested Python lists."""
        return self._elems.reshape(self.dim, self.dim).tolist()

    def to_numpy(self) -> npt.NDArray[np.float64]:
        """Return a (dim, dim) copy of the elements."""
        return self._elems.reshape(self.dim, self.dim).copy()

    def __repr__(self) -> str:
        return f"Matrix(dim={self.dim}, rows={self.to_nested_list()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.dim == other.dim and bool(
            np.all(np.abs(self._elems - other._elems) < MATRIX_EPSILON)
        )

    # =========================================================================
    # Products
    # =========================================================================

    def __mul__(self, other: Matrix | Tuple) -> Matrix | Tuple:
        if isinstance(other, Tuple):
            return self.tuple_prod(other)
        if not isinstance(other, Matrix):
            return NotImplemented
        if self.dim != other.dim:
            raise ValueError(f"Cannot multiply a {self.dim}x{self.dim} matrix by a {other.dim}x{other.dim} matrix")

        a = self._elems.reshape(self.dim, self.dim)
        b = other._elems.reshape(other.dim, other.dim)
        return Matrix(self.dim, (a @ b).reshape(-1))

    def tuple_prod(self, t: Tuple) -> Tuple:
        """Multiply a 4x4 matrix by a homogeneous tuple.

        Raises:
            ValueError: If this matrix is not 4x4.
        """
        if self.dim != 4:
            raise ValueError(f"Tuple product needs a 4x4 matrix, got {self.dim}x{self.dim}")

        def row_dot(r: int) -> float:
            return (
                self.at(r, 0) * t.x + self.at(r, 1) * t.y + self.at(r, 2) * t.z + self.at(r, 3) * t.w
            )

        return Tuple(row_dot(0), row_dot(1), row_dot(2), row_dot(3))

    def transpose(self) -> Matrix:
        return Matrix(self.dim, self._elems.reshape(self.dim, self.dim).T.reshape(-1))

    # =========================================================================
    # Determinant and inversion
    # =========================================================================

    def submatrix(self, row: int, col: int) -> Matrix:
        """Remove one row and one column, producing a (dim-1) matrix."""
        kept = [
            self.at(r, c)
            for r in range(self.dim)
            for c in range(self.dim)
            if r != row and c != col
        ]
        return Matrix(self.dim - 1, kept)

    def minor(self, row: int, col: int) -> float:
        """Determinant of the submatrix at (row, col)."""
        return self.submatrix(row, col).determinant()

    def cofactor(self, row: int, col: int) -> float:
        """Minor at (row, col) with the checkerboard sign (-1)^(row+col)."""
        minor = self.minor(row, col)
        return -minor if (row + col) % 2 == 1 else minor

    def determinant(self) -> float:
        """Compute the determinant by cofactor expansion along row 0."""
        if self.dim == 1:
            return float(self._elems[0])
        if self.dim == 2:
            return self.at(0, 0) * self.at(1, 1) - self.at(0, 1) * self.at(1, 0)
        return sum(self.at(0, c) * self.cofactor(0, c) for c in range(self.dim))

    def _is_singular(self, det: float) -> bool:
        # Hadamard: |det| <= product of row norms, so the ratio is scale-free
        bound = float(np.prod(np.linalg.norm(self._elems.reshape(self.dim, self.dim), axis=1)))
        return bound == 0.0 or abs(det) < SINGULAR_EPSILON * bound

    def is_invertible(self) -> bool:
        return not self._is_singular(self.determinant())

    def inverse(self) -> Matrix:
        """Invert the matrix with the adjugate method.

        The transposed cofactor matrix is divided by the determinant.

        Returns:
            The inverse matrix.

        Raises:
            SingularMatrixError: If the determinant is (nearly) zero.
        """
        det = self.determinant()
        if self._is_singular(det):
            raise SingularMatrixError(f"Matrix is not invertible (determinant={det})")

        # Writing cofactor(r, c) into (c, r) transposes as we go
        inverted = np.empty((self.dim, self.dim), dtype=np.float64)
        for r in range(self.dim):
            for c in range(self.dim):
                inverted[c, r] = self.cofactor(r, c) / det
        return Matrix(self.dim, inverted.reshape(-1))
