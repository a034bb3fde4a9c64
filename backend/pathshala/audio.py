"""
WAV container encoding for raw PCM returned by the Gemini TTS model.

The TTS endpoint answers with headerless little-endian linear PCM. Browsers
cannot play that directly, so read-aloud wraps it in a RIFF/WAVE container:

    RIFF <size-8> WAVE
    fmt  <16> <tag=1> <channels> <rate> <byte_rate> <block_align> <bits>
    data <len(pcm)> <pcm bytes, unmodified>

Encoding is a pure bytes -> bytes transform over a private in-memory buffer.
"""
from __future__ import annotations

import base64
import io
import struct
import wave

from .errors import AudioEncodingError

# Output format of the Gemini TTS model
TTS_CHANNELS = 1
TTS_SAMPLE_RATE = 24000
TTS_SAMPLE_WIDTH = 2

WAV_MIME = "audio/wav"


def pcm_to_wav(
    pcm: bytes,
    channels: int = TTS_CHANNELS,
    sample_rate: int = TTS_SAMPLE_RATE,
    sample_width: int = TTS_SAMPLE_WIDTH,
) -> bytes:
    """
    Wrap raw PCM samples into a complete WAV file.

    Args:
        pcm: Interleaved PCM samples; may be empty.
        channels: Channel count, at least 1.
        sample_rate: Samples per second per channel, greater than 0.
        sample_width: Bytes per sample, at least 1.

    Returns:
        bytes: Header followed by ``pcm`` exactly as given.

    Raises:
        AudioEncodingError: Parameters are out of range or the writer failed.
            Nothing is returned in that case.
    """
    if channels < 1:
        raise AudioEncodingError(f"channels must be >= 1, got {channels}")
    if sample_rate <= 0:
        raise AudioEncodingError(f"sample_rate must be > 0, got {sample_rate}")
    if sample_width < 1:
        raise AudioEncodingError(f"sample_width must be >= 1, got {sample_width}")

    buf = io.BytesIO()
    try:
        with wave.open(buf, "wb") as wf:
            wf.setnchannels(channels)
            wf.setsampwidth(sample_width)
            wf.setframerate(sample_rate)
            wf.writeframes(bytes(pcm))
    except (wave.Error, struct.error, OSError, TypeError, ValueError) as err:
        raise AudioEncodingError(f"Failed to encode WAV: {err}") from err
    return buf.getvalue()


def wav_data_uri(
    pcm: bytes,
    channels: int = TTS_CHANNELS,
    sample_rate: int = TTS_SAMPLE_RATE,
    sample_width: int = TTS_SAMPLE_WIDTH,
) -> str:
    container = pcm_to_wav(pcm, channels, sample_rate, sample_width)
    return f"data:{WAV_MIME};base64," + base64.b64encode(container).decode("ascii")
