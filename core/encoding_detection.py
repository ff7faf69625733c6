"""
Encoding normalization for subtitle content.

This module turns raw subtitle bytes or already decoded text into the
canonical text the format parsers work on. Decoding never fails: invalid
byte sequences are replaced, the byte-order mark is removed and line endings
are unified to ``\\n``.
"""

import logging
from typing import Optional, Union

from charset_normalizer import from_bytes

from utils.constants import DEFAULT_ENCODING, UNICODE_BOM, UTF8_BOM
from utils.logging_config import get_logger

SubtitleInput = Union[str, bytes, bytearray, memoryview]


class EncodingNormalizer:
    """Decodes subtitle input into canonical text."""

    def __init__(self, detect_encoding: bool = False,
                 fallback_encoding: str = DEFAULT_ENCODING,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the normalizer.

        Args:
            detect_encoding: Ask charset-normalizer for the encoding when the
                bytes are not valid in ``fallback_encoding``
            fallback_encoding: Encoding used for byte input by default
            logger: Logger for diagnostics (module logger when omitted)
        """
        self.detect_encoding = detect_encoding
        self.fallback_encoding = fallback_encoding
        self.logger = logger or get_logger(__name__)

    def normalize(self, data: SubtitleInput) -> str:
        """
        Convert subtitle input to canonical text.

        Args:
            data: Decoded text or raw bytes

        Returns:
            Text without a leading BOM and with ``\\n`` line endings

        Raises:
            TypeError: If data is neither text nor bytes-like

        Example:
            >>> EncodingNormalizer().normalize(b"\\xef\\xbb\\xbfWEBVTT\\r\\n")
            'WEBVTT\\n'
        """
        if isinstance(data, str):
            text = data
        elif isinstance(data, (bytes, bytearray, memoryview)):
            text = self.decode_bytes(bytes(data))
        else:
            raise TypeError(f"Expected str or bytes, got {type(data).__name__}")

        if text.startswith(UNICODE_BOM):
            text = text[len(UNICODE_BOM):]

        return text.replace('\r\n', '\n').replace('\r', '\n')

    def decode_bytes(self, raw_data: bytes) -> str:
        """
        Decode bytes without ever raising.

        Args:
            raw_data: Raw subtitle bytes, possibly starting with a UTF-8 BOM

        Returns:
            Decoded text (the UTF-8 BOM is dropped)
        """
        if raw_data.startswith(UTF8_BOM):
            self.logger.debug("UTF-8 BOM detected, stripping it")
            raw_data = raw_data[len(UTF8_BOM):]

        if self.detect_encoding:
            try:
                return raw_data.decode(self.fallback_encoding, "strict")
            except UnicodeDecodeError:
                detected = self._detect(raw_data)
                if detected:
                    self.logger.debug(f"Decoding with detected encoding: {detected}")
                    return raw_data.decode(detected, "replace")
                self.logger.debug(f"Encoding detection failed, decoding as {self.fallback_encoding} with replacement")

        return raw_data.decode(self.fallback_encoding, "replace")

    def _detect(self, raw_data: bytes) -> Optional[str]:
        """
        Use charset-normalizer to guess the encoding of raw bytes.

        Returns:
            Encoding name or None when no candidate was found
        """
        result = from_bytes(raw_data).best()
        if result is None:
            return None
        return result.encoding
