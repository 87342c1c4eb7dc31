import logging
import math

import numpy as np

from complex_number import ComplexNumber

logger = logging.getLogger(__name__)

EMPTY = np.zeros(0, dtype=np.float32)
EMPTY.flags.writeable = False


def _frozen(arr):
    arr.flags.writeable = False
    return arr


def is_power_of_two(n):
    return n > 0 and n & (n - 1) == 0


def bit_reverse(j, nu):
    """Reverse the low ``nu`` bits of ``j``."""
    k = 0
    for _ in range(nu):
        k = (k << 1) | (j & 1)
        j >>= 1
    return k


def bit_reverse_permutation(x):
    """Reorder ``x`` in place by bit-reversed index and return it."""
    n = len(x)
    if not is_power_of_two(n):
        raise InvalidInputSizeError(n)
    nu = n.bit_length() - 1
    for k in range(n):
        r = bit_reverse(k, nu)
        if r > k:
            x[k], x[r] = x[r], x[k]
    return x


def bin_frequencies(n, sample_rate):
    """Centre frequency of each half-spectrum bin for an n-point transform."""
    return np.arange(n // 2) * (sample_rate / n)


class InvalidInputSizeError(ValueError):
    def __init__(self, size):
        self.size = size
        if size < 1:
            self.lower = self.upper = 1
            self.hint = "smallest valid size: 1"
        else:
            self.lower = 1 << (size.bit_length() - 1)
            self.upper = self.lower << 1
            self.hint = f"nearest valid sizes: {self.lower}, {self.upper}"
        super().__init__(f"FFT size must be power of 2. Given: {size} ({self.hint})")


class SpectrumResult:
    __slots__ = ("magnitude", "phase", "size", "error")

    def __init__(self, magnitude, phase, size, error=None):
        self.magnitude = magnitude
        self.phase = phase
        self.size = size
        self.error = error

    @classmethod
    def failed(cls, error):
        return cls(EMPTY, EMPTY, error.size, error)

    @property
    def ok(self):
        return self.error is None

    def __bool__(self):
        return self.ok

    def __len__(self):
        return len(self.magnitude)

    def __repr__(self):
        state = "ok" if self.ok else f"error={self.error}"
        return f"SpectrumResult(size={self.size}, bins={len(self)}, {state})"

    def raise_for_error(self):
        if self.error is not None:
            raise self.error
        return self

    def frequencies(self, sample_rate):
        if not self.ok:
            return EMPTY
        return bin_frequencies(self.size, sample_rate)

    def peak_bin(self):
        if len(self.magnitude) == 0:
            return None
        return int(np.argmax(self.magnitude))

    def to_complex_bins(self):
        return [ComplexNumber.from_polar(m, p) for m, p in zip(self.magnitude, self.phase)]


class SpectrumTransform:
    """
    Real-input radix-2 FFT producing the normalized half-spectrum.

    Butterflies run decimation-in-frequency over private real/imaginary
    arrays, followed by one bit-reversal pass. Bin 0 is scaled by 1/n,
    the remaining bins by 2/n, so a unit-amplitude sinusoid reads 1.0.
    """

    def __init__(self):
        self.last_result = None

    @property
    def magnitude(self):
        return EMPTY if self.last_result is None else self.last_result.magnitude

    @property
    def phase(self):
        return EMPTY if self.last_result is None else self.last_result.phase

    def transform(self, samples):
        result = self.compute(samples)
        self.last_result = result
        return result

    @staticmethod
    def compute(samples):
        n = len(samples)
        if not is_power_of_two(n):
            ld = math.log2(n) if n > 0 else float("-inf")
            error = InvalidInputSizeError(n)
            logger.warning(
                f"Sample length {n} is not a power of 2 (log2={ld:.4f}); "
                f"{error.hint}"
            )
            return SpectrumResult.failed(error)

        nu = n.bit_length() - 1
        re = np.array(samples, dtype=np.float32)
        im = np.zeros(n, dtype=np.float32)

        SpectrumTransform._butterflies(re, im, nu)
        bit_reverse_permutation(re)
        bit_reverse_permutation(im)

        half = n // 2
        mag = np.sqrt(re[:half] ** 2 + im[:half] ** 2) / np.float32(n)
        mag[1:] *= np.float32(2)
        phas = np.arctan2(im[:half], re[:half])
        logger.debug(f"Transformed {n} samples in {nu} stages")
        return SpectrumResult(_frozen(mag.astype(np.float32)), _frozen(phas.astype(np.float32)), n)

    @staticmethod
    def _butterflies(re, im, nu):
        n = len(re)
        n2 = n // 2
        nu1 = nu - 1
        for _ in range(nu):
            k = 0
            while k < n:
                for _ in range(n2):
                    p = bit_reverse(k >> nu1, nu)
                    arg = 2 * math.pi * p / n
                    c = math.cos(arg)
                    s = math.sin(arg)
                    tr = re[k + n2] * c + im[k + n2] * s
                    ti = im[k + n2] * c - re[k + n2] * s
                    re[k + n2] = re[k] - tr
                    im[k + n2] = im[k] - ti
                    re[k] += tr
                    im[k] += ti
                    k += 1
                k += n2
            nu1 -= 1
            n2 //= 2
