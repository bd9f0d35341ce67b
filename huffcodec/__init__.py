"""
huffcodec: A Python library for lossless Huffman compression and decompression.
"""

from .codecs import (
    CompressedHuffman,
    CompressedHuffmanFile,
    EncodeResult,
    DecodeResult,
    HuffmanCodec,
    HuffmanTextCodec,
    HuffmanCodecFile,
)

from .coders import (
    HuffmanCoderSettings,
    HuffmanCoder,
    pack_bits_to_bytes,
    unpack_bytes_to_bits,
)

from .models import (
    Symbol,
    SymbolFrequency,
    FrequencyTable,
    HuffmanNode,
    HuffmanLeaf,
    HuffmanInternal,
    CodeTable,
)

from .priority_queue import PriorityQueue

from .trees import (
    TreeCursor,
    TreeSerializer,
    analyze_frequencies,
    build_tree,
    generate_code_table,
    render_tree,
)

from .errors import (
    HuffmanError,
    EmptyInputError,
    ParseError,
    DegenerateTreeError,
    EmptyQueueError,
)

from .settings import VERSION

from .logger import (
    Logger,
    Log,
    LogLevel,
    CodingLog,
    SymbolCodeLog,
    FrequencyAnalysisLog,
    TreeConstructionLog,
    CodingProgressStep,
    DecodingProgressStep,
)

# Validators
from .validators import *

__all__ = [

    "CompressedHuffman",
    "CompressedHuffmanFile",
    "EncodeResult",
    "DecodeResult",
    "HuffmanCodec",
    "HuffmanTextCodec",
    "HuffmanCodecFile",

    "HuffmanCoderSettings",
    "HuffmanCoder",
    "pack_bits_to_bytes",
    "unpack_bytes_to_bits",

    "Symbol",
    "SymbolFrequency",
    "FrequencyTable",
    "HuffmanNode",
    "HuffmanLeaf",
    "HuffmanInternal",
    "CodeTable",

    "PriorityQueue",

    "TreeCursor",
    "TreeSerializer",
    "analyze_frequencies",
    "build_tree",
    "generate_code_table",
    "render_tree",

    "HuffmanError",
    "EmptyInputError",
    "ParseError",
    "DegenerateTreeError",
    "EmptyQueueError",

    "Logger",
    "Log",
    "LogLevel",
    "CodingLog",
    "SymbolCodeLog",
    "FrequencyAnalysisLog",
    "TreeConstructionLog",
    "CodingProgressStep",
    "DecodingProgressStep",
]
