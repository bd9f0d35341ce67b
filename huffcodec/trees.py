"""
trees.py

Huffman tree construction, code table generation, tree serialization and rendering.
"""


from collections import deque
from typing import Iterable, List, Optional, Set

from .errors import EmptyInputError, ParseError
from .logger import Logger, FrequencyAnalysisLog, TreeConstructionLog
from .models import Symbol, FrequencyTable, HuffmanNode, HuffmanLeaf, HuffmanInternal, CodeTable
from .priority_queue import PriorityQueue
from .settings import LEAF_MARKER, LEFT_MARKER, RIGHT_MARKER


def analyze_frequencies(symbols: Iterable[Symbol], logger: Optional[Logger] = None) -> FrequencyTable:
    """
    Count occurrences of every symbol.

    Args:
        symbols (Iterable[Symbol]): The input symbols.
        logger (Optional[Logger]): Logger instance for logging.

    Returns:
        FrequencyTable: Symbol counts in order of first appearance.
    """
    frequencies = FrequencyTable()
    frequencies.add_multiple(symbols)
    if logger is not None:
        logger.log(FrequencyAnalysisLog(frequencies.get_size(), frequencies.total()))
    return frequencies


def build_tree(frequencies: FrequencyTable, logger: Optional[Logger] = None) -> HuffmanNode:
    """
    Build a Huffman tree by repeatedly merging the two lightest nodes.

    The first node extracted becomes the left child. A table with one
    distinct symbol yields a bare HuffmanLeaf as root.

    Args:
        frequencies (FrequencyTable): Symbol counts.
        logger (Optional[Logger]): Logger instance for logging.

    Returns:
        HuffmanNode: The root of the tree.

    Raises:
        EmptyInputError: If the frequency table is empty.
    """
    if len(frequencies) == 0:
        raise EmptyInputError("Cannot build a Huffman tree from empty input")

    queue = PriorityQueue()
    for entry in frequencies.items():
        queue.insert(HuffmanLeaf(entry.frequency, entry.symbol))

    while len(queue) > 1:
        left = queue.extract_min()
        right = queue.extract_min()
        queue.insert(HuffmanInternal(left, right))

    root = queue.extract_min()
    if logger is not None:
        logger.log(TreeConstructionLog(root.depth(), len(frequencies)))
    return root


def generate_code_table(root: HuffmanNode) -> CodeTable:
    """
    Walk the tree and record the path to every leaf. A root leaf gets the code "0".
    """
    table = CodeTable()
    for leaf, path in root.leaves():
        table.add(leaf.symbol, path or "0")
    return table


class TreeCursor:
    """
    Read position over a byte string, owned by a single parse.
    """

    def __init__(self, data: bytes, position: int = 0) -> None:
        self.data: bytes = data
        self.position: int = position

    def at_end(self) -> bool:
        return self.position >= len(self.data)

    def read_byte(self, what: str) -> int:
        if self.at_end():
            raise ParseError(f"Unexpected end of input while reading {what}", self.position)
        byte = self.data[self.position]
        self.position += 1
        return byte

    def expect(self, expected: int, what: str) -> None:
        byte = self.read_byte(what)
        if byte != expected:
            raise ParseError(f"Expected {what} {bytes([expected])!r}, found {bytes([byte])!r}", self.position - 1)

    def read_until(self, separator: int, what: str) -> bytes:
        """Read up to the next separator and consume it."""
        end = self.data.find(bytes([separator]), self.position)
        if end < 0:
            raise ParseError(f"Missing separator after {what}", len(self.data))
        chunk = self.data[self.position:end]
        self.position = end + 1
        return chunk

    def read_rest(self) -> bytes:
        chunk = self.data[self.position:]
        self.position = len(self.data)
        return chunk


class TreeSerializer:
    """
    Converts trees to and from the preorder grammar

        tree     := leaf | internal
        leaf     := "'" <one raw byte>
        internal := "0" tree "1" tree

    The byte after a leaf marker is always taken as the symbol, so symbols
    equal to a marker character are read back unambiguously.
    """

    @staticmethod
    def serialize(root: HuffmanNode) -> bytes:
        out = bytearray()
        stack: List[object] = [root]
        while stack:
            item = stack.pop()
            if isinstance(item, int):
                out.append(item)
            elif item.is_leaf:
                out.append(LEAF_MARKER)
                out += item.symbol.data
            else:
                out.append(LEFT_MARKER)
                stack.append(item.right)
                stack.append(RIGHT_MARKER)
                stack.append(item.left)
        return bytes(out)

    @staticmethod
    def read_tree(cursor: TreeCursor) -> HuffmanNode:
        """
        Parse one tree starting at the cursor and leave the cursor just past it.
        Decoded nodes carry weight 0.

        Raises:
            ParseError: If the bytes do not follow the grammar.
        """
        seen: Set[Symbol] = set()
        # One slot per open internal node, holding its left child once parsed.
        pending: List[List[Optional[HuffmanNode]]] = []
        while True:
            marker = cursor.read_byte("tree marker")
            if marker == LEFT_MARKER:
                pending.append([None])
                continue
            if marker != LEAF_MARKER:
                raise ParseError(f"Unknown tree marker {bytes([marker])!r}", cursor.position - 1)

            symbol = Symbol(bytes([cursor.read_byte("leaf symbol")]))
            if symbol in seen:
                raise ParseError(f"Duplicate leaf symbol {symbol}", cursor.position - 1)
            seen.add(symbol)

            node: HuffmanNode = HuffmanLeaf(0, symbol)
            while pending and pending[-1][0] is not None:
                node = HuffmanInternal(pending.pop()[0], node, weight=0)
            if not pending:
                return node
            pending[-1][0] = node
            cursor.expect(RIGHT_MARKER, "right subtree marker")

    @staticmethod
    def deserialize(data: bytes) -> HuffmanNode:
        """Parse a complete serialized tree with nothing after it."""
        cursor = TreeCursor(data)
        root = TreeSerializer.read_tree(cursor)
        if not cursor.at_end():
            raise ParseError("Trailing bytes after tree", cursor.position)
        return root


def render_tree(root: HuffmanNode) -> str:
    """
    Level-order dump of the tree. The root has index 1 and the children of
    node i have indices 2i and 2i+1.

        2 <= 1 => 3
        2 = b
        3 = a
    """
    lines = []
    queue = deque([(root, 1)])
    while queue:
        node, index = queue.popleft()
        if node.is_leaf:
            lines.append(f"{index} = {node.symbol.display()}")
        else:
            lines.append(f"{index * 2} <= {index} => {index * 2 + 1}")
            queue.append((node.left, index * 2))
            queue.append((node.right, index * 2 + 1))
    return "\n".join(lines)
