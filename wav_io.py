import logging
import os
import wave

import numpy as np

logger = logging.getLogger(__name__)

RATE = 44100
CHANNELS = 1
SAMPLE_WIDTH = 2
SCALE = 32767


def save_wav(filename, data, rate=RATE, channels=CHANNELS):
    directory = os.path.dirname(filename)
    if directory:
        os.makedirs(directory, exist_ok=True)

    audio_data = (np.clip(np.asarray(data, dtype=np.float64), -1.0, 1.0) * SCALE).astype(np.int16)
    with wave.open(os.fspath(filename), 'wb') as wf:
        wf.setnchannels(channels)
        wf.setsampwidth(SAMPLE_WIDTH)
        wf.setframerate(rate)
        wf.writeframes(audio_data.tobytes())
    logger.info(f"Saved {len(audio_data)} samples at {rate} Hz to {filename}")


def load_wav(filename):
    """
    Read a 16-bit PCM WAV file.

    Returns (samples, rate) with samples as float32 in [-1, 1]; multi-channel
    audio is averaged down to mono.
    """
    with wave.open(os.fspath(filename), 'rb') as wf:
        channels = wf.getnchannels()
        width = wf.getsampwidth()
        rate = wf.getframerate()
        raw = wf.readframes(wf.getnframes())

    if width != SAMPLE_WIDTH:
        raise ValueError(f"Only 16-bit PCM is supported. Sample width: {width * 8} bits")

    samples = np.frombuffer(raw, dtype=np.int16).astype(np.float32) / SCALE
    if channels > 1:
        samples = samples.reshape(-1, channels).mean(axis=1)
    logger.info(f"Loaded {len(samples)} samples at {rate} Hz from {filename}")
    return samples.astype(np.float32), rate


def read_frame(samples, size, offset=0):
    if size < 1 or offset < 0:
        raise ValueError(f"Frame size must be positive and offset non-negative. Given: size={size}, offset={offset}")
    frame = np.zeros(size, dtype=np.float32)
    chunk = np.asarray(samples, dtype=np.float32)[offset:offset + size]
    frame[:len(chunk)] = chunk
    return frame
