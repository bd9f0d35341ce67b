import os
import struct
from typing import List, Optional, Union

from .coders import HuffmanCoder, HuffmanCoderSettings
from .errors import EmptyInputError, ParseError
from .logger import Logger, SymbolCodeLog
from .models import Symbol
from .settings import MAGIC, MAX_PADDING, SEPARATOR, VERSION
from .trees import (
    TreeCursor,
    TreeSerializer,
    analyze_frequencies,
    build_tree,
    generate_code_table,
    render_tree,
)
from .validators import validate_type, validate_range, validate_file_exists


class CompressedHuffman:
    """Represents a compressed payload together with the tree needed to expand it."""

    def __init__(
        self,
        padding: int,
        tree: bytes,
        data: bytes,
        symbol_count: Optional[int] = None,
        original_file_name: Optional[str] = None,
        version: int = VERSION,
    ) -> None:
        validate_type(padding, "Padding", int)
        validate_type(tree, "Tree", bytes)
        validate_type(data, "Data", bytes)
        validate_type(version, "Version", int)
        if symbol_count is not None:
            validate_type(symbol_count, "Symbol count", int)
        if original_file_name is not None:
            validate_type(original_file_name, "Original file name", str)

        validate_range(padding, "Padding", 0, MAX_PADDING)
        if version != VERSION:
            raise ValueError("Version not supported")
        if len(tree) == 0:
            raise ValueError("Tree must not be empty")
        if padding > 0 and len(data) == 0:
            raise ValueError("Padding requires at least one data byte")

        self.padding = padding
        self.tree = tree
        self.data = data
        self.symbol_count = symbol_count
        self.original_file_name = original_file_name
        self.version = version

    def to_wire_format(self) -> bytes:
        """
        Text-compatible layout: tree, newline, decimal padding length, newline, payload.
        """
        return self.tree + SEPARATOR + str(self.padding).encode('ascii') + SEPARATOR + self.data

    @staticmethod
    def from_wire_format(wire_format: bytes) -> 'CompressedHuffman':
        """
        Split a wire format into its parts.

        The tree is self-terminating, so it is parsed first; the payload is
        whatever follows the second separator and is never scanned.

        Raises:
            ParseError: If any of the three parts is missing or malformed.
        """
        validate_type(wire_format, "Wire format", bytes)
        if len(wire_format) == 0:
            raise ParseError("Wire format is empty", 0)
        cursor = TreeCursor(wire_format)
        TreeSerializer.read_tree(cursor)
        tree = wire_format[:cursor.position]
        cursor.expect(SEPARATOR[0], "separator after tree")

        padding_start = cursor.position
        padding_field = cursor.read_until(SEPARATOR[0], "padding length")
        if not padding_field.isdigit() or int(padding_field) > MAX_PADDING:
            raise ParseError(f"Padding length must be a decimal between 0 and {MAX_PADDING}, got {padding_field!r}", padding_start)
        padding = int(padding_field)

        data = cursor.read_rest()
        # encode always emits at least one bit
        if len(data) == 0:
            raise ParseError("Payload is empty", cursor.position)
        return CompressedHuffman(padding, tree, data)

    @staticmethod
    def serialize(model: 'CompressedHuffman') -> bytes:
        """
        Serialize a CompressedHuffman instance into bytes.

        The format:
          - magic (3 bytes, b"HUF")
          - version (4 bytes, unsigned int)
          - padding (4 bytes, unsigned int)
          - tree length (4 bytes, unsigned int)
          - tree (variable length)
          - data length (4 bytes, unsigned int)
          - data (variable length)
          - symbol count (4 bytes, unsigned int)
          - original_file_name length (4 bytes, unsigned int; 0 if None)
          - original_file_name (UTF-8 encoded, if present)
        """
        file_name_bytes = (
            model.original_file_name.encode("utf-8") if model.original_file_name is not None else b""
        )
        symbol_count = model.symbol_count if model.symbol_count is not None else 0

        serialized = MAGIC
        serialized += struct.pack("<III", model.version, model.padding, len(model.tree))
        serialized += model.tree
        serialized += struct.pack("<I", len(model.data))
        serialized += model.data
        serialized += struct.pack("<II", symbol_count, len(file_name_bytes))
        serialized += file_name_bytes
        return serialized

    @staticmethod
    def deserialize(serialized: bytes) -> 'CompressedHuffman':
        """
        Deserialize bytes into a CompressedHuffman instance.
        The byte structure is expected to be the same as produced by serialize().
        """
        validate_type(serialized, "Serialized data", bytes)
        if len(serialized) < 15:
            raise ParseError("Serialized data is too short", len(serialized))
        if serialized[:3] != MAGIC:
            raise ParseError("Invalid signature", 0)
        version, padding, tree_length = struct.unpack("<III", serialized[3:15])
        if version != VERSION:
            raise ParseError(f"Unsupported version {version}", 3)
        if padding > MAX_PADDING:
            raise ParseError(f"Padding length {padding} out of range", 7)
        offset = 15

        if len(serialized) < offset + tree_length + 4:
            raise ParseError("Serialized data is incomplete for tree", len(serialized))
        tree = serialized[offset : offset + tree_length]
        offset += tree_length

        data_length, = struct.unpack("<I", serialized[offset : offset + 4])
        offset += 4
        if len(serialized) < offset + data_length + 8:
            raise ParseError("Serialized data is incomplete for data", len(serialized))
        data = serialized[offset : offset + data_length]
        offset += data_length

        symbol_count, file_name_length = struct.unpack("<II", serialized[offset : offset + 8])
        offset += 8
        if len(serialized) != offset + file_name_length:
            raise ParseError("Serialized data has an inconsistent file name length", offset)
        if file_name_length > 0:
            original_file_name = serialized[offset : offset + file_name_length].decode("utf-8")
        else:
            original_file_name = None

        try:
            # 0 is written when the count was never recorded
            return CompressedHuffman(padding, tree, data, symbol_count or None, original_file_name, version)
        except ValueError as e:
            raise ParseError(str(e))


class CompressedHuffmanFile:
    """Provides methods to write and read a CompressedHuffman instance to/from a file."""

    @staticmethod
    def write_to_file(model: CompressedHuffman, file_path: str) -> None:
        serialized_data = CompressedHuffman.serialize(model)
        with open(file_path, "wb") as file:
            file.write(serialized_data)

    @staticmethod
    def read_from_file(file_path: str) -> CompressedHuffman:
        """
        Read a compressed file. Both the framed layout and the plain wire
        format are accepted; a wire format never starts with the magic bytes.
        """
        with open(file_path, "rb") as file:
            serialized_data = file.read()
        if serialized_data.startswith(MAGIC):
            return CompressedHuffman.deserialize(serialized_data)
        return CompressedHuffman.from_wire_format(serialized_data)


class EncodeResult:
    def __init__(self, wire_format: bytes, tree_rendering: str, original_length: int, encoded_length: int) -> None:
        self.wire_format = wire_format
        self.tree_rendering = tree_rendering
        self.original_length = original_length
        self.encoded_length = encoded_length

    def __iter__(self):
        return iter((self.wire_format, self.tree_rendering, self.original_length, self.encoded_length))

    def __repr__(self) -> str:
        return f"EncodeResult(original_length={self.original_length}, encoded_length={self.encoded_length})"


class DecodeResult:
    def __init__(self, data: Union[bytes, str], tree_rendering: str, encoded_byte_length: int, decoded_length: int) -> None:
        self.data = data
        self.tree_rendering = tree_rendering
        self.encoded_byte_length = encoded_byte_length
        self.decoded_length = decoded_length

    def __iter__(self):
        return iter((self.data, self.tree_rendering, self.encoded_byte_length, self.decoded_length))

    def __repr__(self) -> str:
        return f"DecodeResult(encoded_byte_length={self.encoded_byte_length}, decoded_length={self.decoded_length})"


class HuffmanCodec:
    def __init__(self, settings: Optional[HuffmanCoderSettings] = None, logger: Optional[Logger] = None) -> None:
        self.coder = HuffmanCoder(settings, logger)
        self.settings = self.coder.settings
        self.logger = logger

    def convert_to_symbols(self, data: bytes) -> List[Symbol]:
        validate_type(data, "Data", bytes)
        cache = {}
        symbols: List[Symbol] = []
        for b in data:
            if b not in cache:
                cache[b] = Symbol(bytes([b]))
            symbols.append(cache[b])
        return symbols

    def convert_from_symbols(self, symbols: List[Symbol]) -> bytes:
        return b"".join(symbol.data for symbol in symbols)

    def compress(self, data: bytes) -> CompressedHuffman:
        """
        Compress the input data.

        Args:
            data (bytes): The data to compress.

        Returns:
            CompressedHuffman: Serialized tree, padding and packed payload.

        Raises:
            EmptyInputError: If data is empty.
            DegenerateTreeError: If data has one distinct byte and the settings reject it.
        """
        compressed, _ = self._compress(data)
        return compressed

    def _compress(self, data: bytes):
        validate_type(data, "Data", bytes)
        if len(data) == 0:
            if self.logger is not None:
                self.logger.error("Empty_input", "Refused to encode empty input")
            raise EmptyInputError()

        symbols = self.convert_to_symbols(data)
        frequencies = analyze_frequencies(symbols, self.logger)
        root = build_tree(frequencies, self.logger)
        self.coder.check_tree(root)
        code_table = generate_code_table(root)
        if self.logger is not None:
            for entry in frequencies.items():
                self.logger.log(SymbolCodeLog(entry.symbol, entry.frequency, code_table.get_code(entry.symbol)))

        payload, padding = self.coder.encode(symbols, code_table)
        tree = TreeSerializer.serialize(root)
        return CompressedHuffman(padding, tree, payload, symbol_count=len(symbols)), root

    def decompress(self, compressed: CompressedHuffman) -> bytes:
        """
        Decompress a CompressedHuffman back into the original bytes.

        Raises:
            ParseError: If the tree or payload is malformed.
        """
        data, _ = self._decompress(compressed)
        return data

    def _decompress(self, compressed: CompressedHuffman, payload_offset: int = 0):
        """
        Payload error positions are reported relative to payload_offset, the
        position of the payload inside the wire format it came from.
        """
        if not isinstance(compressed, CompressedHuffman):
            raise ValueError("Input must be a CompressedHuffman instance")
        try:
            root = TreeSerializer.deserialize(compressed.tree)
            try:
                symbols = self.coder.decode(compressed.data, compressed.padding, root)
            except ParseError as e:
                if e.position is None or payload_offset == 0:
                    raise
                raise ParseError(e.reason, e.position + payload_offset) from e
            if compressed.symbol_count is not None and compressed.symbol_count != len(symbols):
                raise ParseError(f"Expected {compressed.symbol_count} symbols, decoded {len(symbols)}")
        except ParseError as e:
            if self.logger is not None:
                self.logger.error("Parse_error", str(e))
            raise
        return self.convert_from_symbols(symbols), root

    def encode(self, data: bytes) -> EncodeResult:
        """
        Compress data into the wire format.

        Returns:
            EncodeResult: wire format, tree rendering, original length and wire format length.
        """
        compressed, root = self._compress(data)
        wire_format = compressed.to_wire_format()
        return EncodeResult(wire_format, render_tree(root), len(data), len(wire_format))

    def decode(self, wire_format: bytes) -> DecodeResult:
        """
        Expand a wire format produced by encode().

        Returns:
            DecodeResult: data, tree rendering, payload length in bytes and decoded length.

        Raises:
            ParseError: If the wire format is malformed or the payload is empty.
                Error positions count from the start of the wire format.
        """
        try:
            compressed = CompressedHuffman.from_wire_format(wire_format)
        except ParseError as e:
            if self.logger is not None:
                self.logger.error("Parse_error", str(e))
            raise
        data, root = self._decompress(compressed, len(wire_format) - len(compressed.data))
        return DecodeResult(data, render_tree(root), len(compressed.data), len(data))


class HuffmanTextCodec(HuffmanCodec):
    """Text front end: encodes str input and decodes back to str."""

    def encode(self, text: str) -> EncodeResult:
        validate_type(text, "Text", str)
        result = super().encode(text.encode(self.settings.text_encoding))
        result.original_length = len(text)
        return result

    def decode(self, wire_format: bytes) -> DecodeResult:
        result = super().decode(wire_format)
        try:
            result.data = result.data.decode(self.settings.text_encoding)
        except UnicodeDecodeError as e:
            if self.logger is not None:
                self.logger.error("Parse_error", str(e))
            raise ParseError(f"Payload is not valid {self.settings.text_encoding} text: {e.reason}") from e
        result.decoded_length = len(result.data)
        return result


class HuffmanCodecFile(HuffmanCodec):
    def compress(self, input_path: str, output_path: str, framed: bool = True) -> CompressedHuffman:
        """
        Compress the input file and write the result to an output file.

        Args:
            input_path (str): Path to the input file.
            output_path (str): Path to the output file.
            framed (bool): Write the length-prefixed container instead of the plain wire format.

        Returns:
            CompressedHuffman: The compressed model that was written.
        """
        validate_type(input_path, "Input path", str)
        validate_type(output_path, "Output path", str)
        validate_file_exists(input_path)

        with open(input_path, "rb") as file:
            data = file.read()

        compressed = super().compress(data)
        if framed:
            compressed.original_file_name = os.path.basename(input_path)
            CompressedHuffmanFile.write_to_file(compressed, output_path)
        else:
            with open(output_path, "wb") as file:
                file.write(compressed.to_wire_format())
        return compressed

    def decompress(self, compressed_file_path: str, output_file_path: str) -> bytes:
        """
        Decompress the input file and write the decompressed data to an output file.

        Args:
            compressed_file_path (str): Path to the compressed file.
            output_file_path (str): Path to the output file.

        Returns:
            bytes: The decompressed data.
        """
        validate_type(compressed_file_path, "Compressed file path", str)
        validate_type(output_file_path, "Output file path", str)
        validate_file_exists(compressed_file_path)

        compressed = CompressedHuffmanFile.read_from_file(compressed_file_path)
        data = super().decompress(compressed)
        with open(output_file_path, "wb") as file:
            file.write(data)
        return data
