"""
coders.py

Bit level packing of Huffman codes and tree traversal decoding.

"""


import codecs
import numpy as np
from typing import List, Optional, Tuple

from .errors import DegenerateTreeError, ParseError
from .logger import Logger, CodingLog, CodingProgressStep, DecodingProgressStep
from .models import Symbol, CodeTable, HuffmanNode
from .settings import DEFAULT_TEXT_ENCODING, DEGENERATE_POLICIES, DEGENERATE_REJECT, MAX_PADDING
from .validators import validate_type


class HuffmanCoderSettings:
    """
    Settings for the Huffman coder.

    Args:
        degenerate_policy (str): "single_bit" gives a lone symbol the code "0";
            "reject" raises DegenerateTreeError for such input.
        text_encoding (str): Encoding used by the text codec.
    """

    def __init__(self, degenerate_policy: str = "single_bit", text_encoding: str = DEFAULT_TEXT_ENCODING) -> None:
        validate_type(degenerate_policy, "degenerate_policy", str)
        validate_type(text_encoding, "text_encoding", str)
        if degenerate_policy not in DEGENERATE_POLICIES:
            raise ValueError(f"Unknown degenerate policy: {degenerate_policy}")
        try:
            codecs.lookup(text_encoding)
        except LookupError:
            raise ValueError(f"Unknown text encoding: {text_encoding}")
        self.degenerate_policy: str = degenerate_policy
        self.text_encoding: str = text_encoding


def pack_bits_to_bytes(bits: np.ndarray) -> Tuple[bytes, int]:
    """
    Pack a bit array (MSB first) into bytes, right padding the last byte with zeros.

    Args:
        bits (np.ndarray): Array of 0/1 values.

    Returns:
        Tuple[bytes, int]: The packed bytes and the number of padding bits (0..7).
    """
    if bits is None:
        raise ValueError("Bits cannot be None")
    bits = np.asarray(bits, dtype=np.uint8)
    padding = (8 - len(bits) % 8) % 8
    return np.packbits(bits).tobytes(), padding


def unpack_bytes_to_bits(data: bytes, padding: int) -> np.ndarray:
    """
    Unpack bytes into bits (MSB first) and drop the trailing padding bits.

    Raises:
        ParseError: If the padding is out of range or the padding bits are not zero.
    """
    if data is None:
        raise ValueError("Data cannot be None")
    if not 0 <= padding <= MAX_PADDING:
        raise ParseError(f"Padding length must be between 0 and {MAX_PADDING}, got {padding}")
    bits = np.unpackbits(np.frombuffer(data, dtype=np.uint8))
    if padding > len(bits):
        raise ParseError(f"Padding length {padding} exceeds payload of {len(bits)} bits")
    if padding and bits[len(bits) - padding:].any():
        raise ParseError("Padding bits must be zero", len(data) - 1)
    return bits[:len(bits) - padding]


class HuffmanCoder:
    """
    Turns symbols into packed code bits and walks a tree to turn them back.
    """

    def __init__(self, settings: Optional[HuffmanCoderSettings] = None, logger: Optional[Logger] = None) -> None:
        if settings is None:
            settings = HuffmanCoderSettings()
        validate_type(settings, "settings", HuffmanCoderSettings)
        self.settings: HuffmanCoderSettings = settings
        self.logger: Optional[Logger] = logger

    def check_tree(self, root: HuffmanNode) -> None:
        """Apply the degenerate tree policy to a freshly built tree."""
        if not root.is_leaf:
            return
        if self.settings.degenerate_policy == DEGENERATE_REJECT:
            if self.logger is not None:
                self.logger.error("Degenerate_tree", f"Rejected single symbol input {root.symbol}")
            raise DegenerateTreeError(f"Input consists only of symbol {root.symbol}")
        if self.logger is not None:
            self.logger.warning("Degenerate_tree", f"Single symbol {root.symbol} coded with one bit per occurrence")

    def encode_to_bits(self, symbols: List[Symbol], code_table: CodeTable) -> np.ndarray:
        """
        Concatenate the code of every symbol in input order.

        Args:
            symbols (List[Symbol]): The symbols to encode.
            code_table (CodeTable): Code of every symbol.

        Returns:
            np.ndarray: The code bits as a uint8 array.
        """
        code_bits = {
            symbol: np.frombuffer(code.encode('ascii'), dtype=np.uint8) - ord('0')
            for symbol, code in code_table.codes.items()
        }
        chunks = []
        for symbol in symbols:
            if symbol not in code_bits:
                raise ValueError(f"Symbol {symbol} has no code")
            chunks.append(code_bits[symbol])
            if self.logger is not None:
                self.logger.log(CodingLog(len(symbol.data) * 8, len(code_bits[symbol])))
                self.logger.log(CodingProgressStep("Encoding symbols", len(symbols)))
        if not chunks:
            return np.zeros(0, dtype=np.uint8)
        return np.concatenate(chunks).astype(np.uint8)

    def encode(self, symbols: List[Symbol], code_table: CodeTable) -> Tuple[bytes, int]:
        """
        Encode symbols into a packed byte payload.

        Returns:
            Tuple[bytes, int]: The payload and its padding length.
        """
        return pack_bits_to_bytes(self.encode_to_bits(symbols, code_table))

    def decode_bits(self, bits: np.ndarray, root: HuffmanNode) -> List[Symbol]:
        """
        Walk the tree from the root for every bit: 0 goes left, 1 goes right,
        a leaf emits its symbol and restarts at the root. When the root is a
        leaf every 0 bit stands for its symbol.

        Raises:
            ParseError: If the bits end inside the tree.
        """
        decoded: List[Symbol] = []
        if root.is_leaf:
            if bits.any():
                raise ParseError("Single symbol payload contains a 1 bit", int(np.argmax(bits)) // 8)
            return [root.symbol] * len(bits)

        total = len(bits)
        node = root
        for bit in bits.tolist():
            node = node.right if bit else node.left
            if node.is_leaf:
                decoded.append(node.symbol)
                node = root
                if self.logger is not None:
                    self.logger.log(DecodingProgressStep("Decoding bits", total))
        if node is not root:
            if self.logger is not None:
                self.logger.error("Truncated_payload", f"Payload ended inside the tree after {total} bits")
            raise ParseError("Payload ends in the middle of a code", total // 8)
        return decoded

    def decode(self, data: bytes, padding: int, root: HuffmanNode) -> List[Symbol]:
        """
        Decode a packed payload back into symbols.

        Args:
            data (bytes): The packed payload.
            padding (int): Number of padding bits in the last byte.
            root (HuffmanNode): Tree the payload was encoded with.

        Returns:
            List[Symbol]: The decoded symbols.
        """
        validate_type(data, "data", bytes)
        validate_type(padding, "padding", int)
        return self.decode_bits(unpack_bytes_to_bits(data, padding), root)
