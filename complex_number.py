import math

import numpy as np

LOG10 = np.float32(math.log(10))
# 20 / ln(10), converts a natural log magnitude into decibels
DBLOG = np.float32(20 / LOG10)


def magnitude(real, imag):
    return np.float32(np.sqrt(np.float32(real) ** 2 + np.float32(imag) ** 2))


def phase(real, imag):
    return np.float32(np.arctan2(np.float32(imag), np.float32(real)))


def power(real, imag):
    with np.errstate(divide="ignore"):
        return np.float32(DBLOG * np.log(magnitude(real, imag)))


def phases_into(n, values, phases):
    """Write the phases of the first ``n`` complex values into ``phases``."""
    for i in range(n):
        phases[i] = values[i].phase
    return phases


class ComplexNumber:
    """
    Single precision complex value: real + j(imag).

    Arithmetic methods return a new value. The ``*_into`` static methods
    write into a caller-supplied result so hot loops can reuse one object.
    Division by zero follows IEEE rules and yields inf/nan.
    """

    __slots__ = ("_real", "_imag")

    def __init__(self, real=0.0, imag=0.0):
        self._real = np.float32(real)
        self._imag = np.float32(imag)

    @classmethod
    def from_polar(cls, mag, angle):
        return cls(mag * math.cos(angle), mag * math.sin(angle))

    @property
    def real(self):
        return self._real

    @real.setter
    def real(self, value):
        self._real = np.float32(value)

    @property
    def imag(self):
        return self._imag

    @imag.setter
    def imag(self, value):
        self._imag = np.float32(value)

    def set_real_imag(self, real, imag):
        self.real = real
        self.imag = imag

    @property
    def magnitude(self):
        return magnitude(self._real, self._imag)

    @property
    def phase(self):
        return phase(self._real, self._imag)

    @property
    def power(self):
        """Power in decibels."""
        return power(self._real, self._imag)

    def add(self, other):
        return ComplexNumber.add_into(self, other, ComplexNumber())

    def subtract(self, other):
        return ComplexNumber.subtract_into(self, other, ComplexNumber())

    def multiply(self, other):
        return ComplexNumber.multiply_into(self, other, ComplexNumber())

    def divide(self, other):
        return ComplexNumber.divide_into(self, other, ComplexNumber())

    def conjugate(self):
        return ComplexNumber.conjugate_into(self, ComplexNumber())

    def copy(self):
        return ComplexNumber(self._real, self._imag)

    __copy__ = copy

    @staticmethod
    def add_into(a, b, out):
        out.set_real_imag(a.real + b.real, a.imag + b.imag)
        return out

    @staticmethod
    def subtract_into(a, b, out):
        out.set_real_imag(a.real - b.real, a.imag - b.imag)
        return out

    @staticmethod
    def multiply_into(a, b, out):
        if isinstance(b, ComplexNumber):
            real = a.real * b.real - a.imag * b.imag
            imag = a.real * b.imag + a.imag * b.real
        else:
            factor = np.float32(b)
            real, imag = a.real * factor, a.imag * factor
        out.set_real_imag(real, imag)
        return out

    @staticmethod
    def divide_into(a, b, out):
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            if isinstance(b, ComplexNumber):
                denom = b.real * b.real + b.imag * b.imag
                real = (a.real * b.real + a.imag * b.imag) / denom
                imag = (a.imag * b.real - a.real * b.imag) / denom
            else:
                factor = np.float32(b)
                real, imag = a.real / factor, a.imag / factor
            out.set_real_imag(real, imag)
        return out

    @staticmethod
    def conjugate_into(a, out):
        out.set_real_imag(a.real, -a.imag)
        return out

    def __add__(self, other):
        return self.add(other)

    def __sub__(self, other):
        return self.subtract(other)

    def __mul__(self, other):
        return self.multiply(other)

    __rmul__ = __mul__

    def __truediv__(self, other):
        return self.divide(other)

    def __neg__(self):
        return ComplexNumber(-self._real, -self._imag)

    def __eq__(self, other):
        if not isinstance(other, ComplexNumber):
            return NotImplemented
        return bool(self._real == other._real and self._imag == other._imag)

    def __repr__(self):
        return f"ComplexNumber({float(self._real)!r}, {float(self._imag)!r})"

    def __complex__(self):
        return complex(float(self._real), float(self._imag))
