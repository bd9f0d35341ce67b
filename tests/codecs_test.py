import os
import random
import tempfile
import unittest
from huffcodec.codecs import (
    CompressedHuffman,
    CompressedHuffmanFile,
    HuffmanCodec,
    HuffmanTextCodec,
    HuffmanCodecFile,
)
from huffcodec.coders import HuffmanCoderSettings
from huffcodec.errors import EmptyInputError, ParseError, DegenerateTreeError
from huffcodec.logger import Logger, LogLevel, SymbolCodeLog

LOREM = "Lorem ipsum dolor sit amet, consectetur adipiscing elit. Donec a consectetur ligula. Nunc erat dolor, tristique sed sagittis quis, dignissim eget erat. Vivamus enim lorem, finibus sit amet maximus eget, condimentum sit amet massa."


class TestCompressedHuffman(unittest.TestCase):
    def setUp(self):
        self.model = CompressedHuffman(
            padding=4,
            tree=b"0'b1'a",
            data=b"\xe0",
            symbol_count=4,
            original_file_name='test_file.txt',
        )

    def test_serialization_deserialization(self):
        serialized = CompressedHuffman.serialize(self.model)
        self.assertTrue(serialized.startswith(b"HUF"))
        deserialized = CompressedHuffman.deserialize(serialized)
        self.assertEqual(self.model.padding, deserialized.padding)
        self.assertEqual(self.model.tree, deserialized.tree)
        self.assertEqual(self.model.data, deserialized.data)
        self.assertEqual(self.model.symbol_count, deserialized.symbol_count)
        self.assertEqual(self.model.original_file_name, deserialized.original_file_name)
        self.assertEqual(self.model.version, deserialized.version)

    def test_serialization_without_optional_fields(self):
        model = CompressedHuffman(0, b"'a", b"\x00")
        deserialized = CompressedHuffman.deserialize(CompressedHuffman.serialize(model))
        self.assertIsNone(deserialized.symbol_count)
        self.assertIsNone(deserialized.original_file_name)

    def test_deserialize_invalid(self):
        serialized = CompressedHuffman.serialize(self.model)
        for bad in [b"", b"HUF", b"XYZ" + serialized[3:], serialized[:-1], serialized + b"\x00"]:
            with self.subTest(data=bad):
                with self.assertRaises(ParseError):
                    CompressedHuffman.deserialize(bad)

    def test_wire_format(self):
        self.assertEqual(self.model.to_wire_format(), b"0'b1'a\n4\n\xe0")
        parsed = CompressedHuffman.from_wire_format(b"0'b1'a\n4\n\xe0")
        self.assertEqual(parsed.tree, b"0'b1'a")
        self.assertEqual(parsed.padding, 4)
        self.assertEqual(parsed.data, b"\xe0")

    def test_wire_format_payload_with_separators(self):
        parsed = CompressedHuffman.from_wire_format(b"0'\n1'a\n0\n\n4\n")
        self.assertEqual(parsed.tree, b"0'\n1'a")
        self.assertEqual(parsed.data, b"\n4\n")

    def test_invalid_arguments(self):
        with self.assertRaises(ValueError):
            CompressedHuffman(8, b"'a", b"\x00")
        with self.assertRaises(ValueError):
            CompressedHuffman(1, b"'a", b"")
        with self.assertRaises(ValueError):
            CompressedHuffman(0, b"", b"\x00")
        with self.assertRaises(ValueError):
            CompressedHuffman(0, b"'a", b"\x00", version=2)
        with self.assertRaises(ValueError):
            CompressedHuffman("0", b"'a", b"\x00")

    def test_file_write_read(self):
        with tempfile.NamedTemporaryFile(delete=False) as temp_file:
            temp_file_name = temp_file.name
        try:
            CompressedHuffmanFile.write_to_file(self.model, temp_file_name)
            read_model = CompressedHuffmanFile.read_from_file(temp_file_name)
            self.assertEqual(self.model.tree, read_model.tree)
            self.assertEqual(self.model.data, read_model.data)
            self.assertEqual(self.model.padding, read_model.padding)
            self.assertEqual(self.model.original_file_name, read_model.original_file_name)
        finally:
            os.remove(temp_file_name)


class TestHuffmanCodec(unittest.TestCase):
    def setUp(self):
        self.codec = HuffmanCodec()
        self.text_codec = HuffmanTextCodec()

    def test_scenario_two_symbols(self):
        result = self.text_codec.encode("aaab")
        self.assertEqual(result.wire_format, b"0'b1'a\n4\n\xe0")
        self.assertEqual(result.original_length, 4)
        self.assertEqual(result.encoded_length, len(result.wire_format))
        self.assertEqual(result.tree_rendering, "2 <= 1 => 3\n2 = b\n3 = a")

        decoded = self.text_codec.decode(result.wire_format)
        self.assertEqual(decoded.data, "aaab")
        self.assertEqual(decoded.encoded_byte_length, 1)
        self.assertEqual(decoded.decoded_length, 4)
        self.assertEqual(decoded.tree_rendering, result.tree_rendering)

    def test_results_unpack(self):
        wire_format, tree_rendering, original_length, encoded_length = self.codec.encode(b"abc")
        data, decoded_rendering, encoded_byte_length, decoded_length = self.codec.decode(wire_format)
        self.assertEqual(data, b"abc")
        self.assertEqual(tree_rendering, decoded_rendering)
        self.assertEqual(original_length, decoded_length)

    def test_empty_input(self):
        with self.assertRaises(EmptyInputError):
            self.text_codec.encode("")
        with self.assertRaises(EmptyInputError):
            self.codec.encode(b"")
        with self.assertRaises(EmptyInputError):
            self.codec.compress(b"")

    def test_single_symbol(self):
        result = self.codec.encode(b"aaaa")
        self.assertEqual(result.wire_format, b"'a\n4\n\x00")
        self.assertEqual(result.tree_rendering, "1 = a")
        self.assertEqual(self.codec.decode(result.wire_format).data, b"aaaa")

    def test_single_symbol_rejected(self):
        logger = Logger()
        logger.display_error = False
        codec = HuffmanCodec(HuffmanCoderSettings(degenerate_policy="reject"), logger)
        with self.assertRaises(DegenerateTreeError):
            codec.encode(b"aaaa")
        self.assertEqual(logger.logs[-1].level, LogLevel.ERROR)

    def test_missing_second_separator(self):
        with self.assertRaises(ParseError):
            self.codec.decode(b"0'b1'a\n4\xe0")

    def test_malformed_wire_formats(self):
        for bad in [
            b"",
            b"0'b1'a",
            b"0'b1'a4\n\xe0",
            b"0'b1'a\n\n\xe0",
            b"0'b1'a\n9\n\xe0",
            b"0'b1'a\n-1\n\xe0",
            b"0'b1'a\nx\n\xe0",
            b"0'b1'a\n4\n",
            b"0'b\n4\n\xe0",
            b"0'c10'a1'b\n7\n\x80",
        ]:
            with self.subTest(wire_format=bad):
                with self.assertRaises(ParseError):
                    self.codec.decode(bad)

    def test_parse_errors_are_logged(self):
        logger = Logger()
        logger.display_error = False
        codec = HuffmanCodec(logger=logger)
        with self.assertRaises(ParseError):
            codec.decode(b"0'b1'a\n4\xe0")
        self.assertEqual(logger.logs[-1].level, LogLevel.ERROR)

    def test_empty_payload(self):
        with self.assertRaises(ParseError):
            self.codec.decode(b"0'b1'a\n0\n")
        with self.assertRaises(ParseError):
            CompressedHuffman.from_wire_format(b"'a\n0\n")

    def test_payload_error_position_counts_from_wire_start(self):
        # tree and header take 13 bytes, the single payload bit stops inside the tree
        with self.assertRaises(ParseError) as ctx:
            self.codec.decode(b"0'c10'a1'b\n7\n\x80")
        self.assertEqual(ctx.exception.position, 13)

        with self.assertRaises(ParseError) as ctx:
            self.codec.decode(b"0'b1'a\n4\n\xe1")
        self.assertEqual(ctx.exception.position, 9)

    def test_text_decode_of_invalid_text(self):
        wire_format = HuffmanCodec().encode(b"\xff\xfe\xff").wire_format
        with self.assertRaises(ParseError):
            self.text_codec.decode(wire_format)

        logger = Logger()
        logger.display_error = False
        with self.assertRaises(ParseError):
            HuffmanTextCodec(logger=logger).decode(wire_format)
        self.assertEqual(logger.logs[-1].level, LogLevel.ERROR)

    def test_marker_characters_round_trip(self):
        text = "0'1\n'0\n1'' 01 10\n\n2\n"
        result = self.text_codec.encode(text)
        self.assertEqual(self.text_codec.decode(result.wire_format).data, text)

    def test_payload_bytes_that_look_like_header(self):
        # b is coded 0 and a is coded 1, so the payload spells "\n4\n" followed by 0xff bytes
        data = b"bbbbabab" + b"bbaababb" + b"bbbbabab" + b"a" * 24
        result = self.codec.encode(data)
        self.assertEqual(result.wire_format, b"0'b1'a\n0\n\n4\n\xff\xff\xff")
        self.assertEqual(self.codec.decode(result.wire_format).data, data)

    def test_all_byte_values_round_trip(self):
        data = bytes(range(256)) * 3 + bytes(range(0, 256, 3))
        result = self.codec.encode(data)
        self.assertEqual(self.codec.decode(result.wire_format).data, data)

    def test_random_round_trip(self):
        rng = random.Random(1234)
        for length in (1, 2, 7, 8, 9, 100, 2048):
            data = bytes(rng.getrandbits(8) for _ in range(length))
            with self.subTest(length=length):
                result = self.codec.encode(data)
                self.assertEqual(self.codec.decode(result.wire_format).data, data)

    def test_skewed_random_round_trip(self):
        rng = random.Random(99)
        data = bytes(rng.choice(b"aaaaaaaabbbbccd\x00\xff") for _ in range(5000))
        result = self.codec.encode(data)
        self.assertLess(result.encoded_length, result.original_length)
        self.assertEqual(self.codec.decode(result.wire_format).data, data)

    def test_unicode_text_round_trip(self):
        text = "héllo wörld, naïve café ☕"
        result = self.text_codec.encode(text)
        self.assertEqual(result.original_length, len(text))
        decoded = self.text_codec.decode(result.wire_format)
        self.assertEqual(decoded.data, text)
        self.assertEqual(decoded.decoded_length, len(text))

    def test_text_codec_rejects_bytes(self):
        with self.assertRaises(ValueError):
            self.text_codec.encode(b"abc")

    def test_compress_decompress(self):
        data = LOREM.encode()
        compressed = self.codec.compress(data)
        self.assertEqual(compressed.symbol_count, len(data))
        self.assertEqual(self.codec.decompress(compressed), data)

    def test_symbol_count_mismatch(self):
        compressed = CompressedHuffman(4, b"0'b1'a", b"\xe0", symbol_count=5)
        with self.assertRaises(ParseError):
            self.codec.decompress(compressed)

    def test_decompress_invalid_type(self):
        with self.assertRaises(ValueError):
            self.codec.decompress(b"0'b1'a\n4\n\xe0")

    def test_symbol_code_logs(self):
        logger = Logger()
        codec = HuffmanCodec(logger=logger)
        codec.encode(b"abracadabra")
        code_logs = [log for log in logger.logs if isinstance(log, SymbolCodeLog)]
        self.assertEqual(len(code_logs), 5)
        self.assertEqual(sum(log.frequency for log in code_logs), 11)

    def test_encode_is_deterministic(self):
        data = LOREM.encode()
        self.assertEqual(HuffmanCodec().encode(data).wire_format, HuffmanCodec().encode(data).wire_format)


class TestHuffmanCodecFile(unittest.TestCase):
    def setUp(self):
        self.data = LOREM.encode() * 4
        with tempfile.NamedTemporaryFile(delete=False) as temp_input:
            self.input_file = temp_input.name
            temp_input.write(self.data)
        self.compressed_file = self.input_file + ".compressed"
        self.decompressed_file = self.input_file + ".decompressed"

    def tearDown(self):
        for f in [self.input_file, self.compressed_file, self.decompressed_file]:
            if os.path.exists(f):
                os.remove(f)

    def test_framed_compress_decompress(self):
        codec = HuffmanCodecFile()
        compressed = codec.compress(self.input_file, self.compressed_file)
        self.assertEqual(compressed.original_file_name, os.path.basename(self.input_file))
        self.assertLess(os.path.getsize(self.compressed_file), len(self.data))
        codec.decompress(self.compressed_file, self.decompressed_file)
        with open(self.decompressed_file, "rb") as f:
            self.assertEqual(self.data, f.read())

    def test_wire_format_compress_decompress(self):
        codec = HuffmanCodecFile()
        codec.compress(self.input_file, self.compressed_file, framed=False)
        with open(self.compressed_file, "rb") as f:
            self.assertFalse(f.read().startswith(b"HUF"))
        data = codec.decompress(self.compressed_file, self.decompressed_file)
        self.assertEqual(self.data, data)

    def test_missing_input(self):
        codec = HuffmanCodecFile()
        with self.assertRaises(ValueError):
            codec.compress(self.input_file + ".missing", self.compressed_file)
        with self.assertRaises(ValueError):
            codec.decompress(self.input_file + ".missing", self.decompressed_file)

if __name__ == '__main__':
    unittest.main()
