"""
models.py

The shared objects used in huffcodec.

"""


import abc
from typing import Optional, Iterable, Iterator, List, Dict, Tuple

class Symbol:
    """
    Represents a single byte of input data.
    """
    def __init__(self, data: bytes) -> None:
        if not isinstance(data, bytes):
            raise ValueError("Data must be of type bytes")
        if len(data) != 1:
            raise ValueError("Symbol data must be exactly one byte")
        self.data: bytes = data

    @property
    def value(self) -> int:
        return self.data[0]

    def display(self) -> str:
        """Printable form used in tree renderings."""
        if 0x21 <= self.value <= 0x7e:
            return chr(self.value)
        if self.value == 0x20:
            return "\\x20"
        return repr(self.data)[2:-1]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Symbol):
            return self.data == other.data
        return False

    def __str__(self) -> str:
        return str(self.data)

    def __repr__(self) -> str:
        return str(self.data)

    def __hash__(self) -> int:
        return hash(self.data)


class SymbolFrequency:
    """
    Represents a symbol together with its frequency.
    """
    def __init__(self, symbol: Symbol, frequency: int) -> None:
        self.symbol: Symbol = symbol
        self.frequency: int = frequency

    def __str__(self) -> str:
        return f"[{self.symbol}, {self.frequency}]"

    def __repr__(self) -> str:
        return f"[{self.symbol}, {self.frequency}]"


class FrequencyTable:
    """
    Occurrence count of every distinct symbol, kept in order of first appearance.
    """
    def __init__(self) -> None:
        self._counts: Dict[Symbol, int] = {}

    def add(self, symbol: Symbol, count: int = 1) -> None:
        if count < 1:
            raise ValueError("Count must be a positive integer")
        self._counts[symbol] = self._counts.get(symbol, 0) + count

    def add_multiple(self, symbols: Iterable[Symbol]) -> None:
        for symbol in symbols:
            self.add(symbol)

    def get(self, symbol: Symbol) -> int:
        return self._counts.get(symbol, 0)

    def get_size(self) -> int:
        """Number of distinct symbols."""
        return len(self._counts)

    def total(self) -> int:
        return sum(self._counts.values())

    def items(self) -> List[SymbolFrequency]:
        return [SymbolFrequency(symbol, count) for symbol, count in self._counts.items()]

    def __len__(self) -> int:
        return len(self._counts)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FrequencyTable):
            return False
        return self._counts == other._counts


class HuffmanNode(abc.ABC):
    """
    A node of a Huffman tree, either a HuffmanLeaf or a HuffmanInternal.
    """
    def __init__(self, weight: int) -> None:
        self.weight: int = weight

    @property
    @abc.abstractmethod
    def is_leaf(self) -> bool:
        pass

    def leaves(self) -> Iterator[Tuple["HuffmanLeaf", str]]:
        """
        Yield every leaf with its path from this node, left subtrees first.
        """
        stack: List[Tuple[HuffmanNode, str]] = [(self, "")]
        while stack:
            node, path = stack.pop()
            if node.is_leaf:
                yield node, path
            else:
                stack.append((node.right, path + "1"))
                stack.append((node.left, path + "0"))

    def depth(self) -> int:
        return max(len(path) for _, path in self.leaves())

    def same_shape(self, other: "HuffmanNode") -> bool:
        """True when both trees have the same symbols at the same paths."""
        return [(leaf.symbol, path) for leaf, path in self.leaves()] == \
            [(leaf.symbol, path) for leaf, path in other.leaves()]


class HuffmanLeaf(HuffmanNode):
    def __init__(self, weight: int, symbol: Symbol) -> None:
        super().__init__(weight)
        self.symbol: Symbol = symbol

    @property
    def is_leaf(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"HuffmanLeaf({self.weight}, {self.symbol!r})"


class HuffmanInternal(HuffmanNode):
    def __init__(self, left: HuffmanNode, right: HuffmanNode, weight: Optional[int] = None) -> None:
        if left is None or right is None:
            raise ValueError("Internal nodes must have two children")
        super().__init__(left.weight + right.weight if weight is None else weight)
        self.left: HuffmanNode = left
        self.right: HuffmanNode = right

    @property
    def is_leaf(self) -> bool:
        return False

    def __repr__(self) -> str:
        return f"HuffmanInternal({self.weight}, {self.left!r}, {self.right!r})"


class CodeTable:
    """
    Maps each symbol to its bit-string code.
    """
    def __init__(self, codes: Optional[Dict[Symbol, str]] = None) -> None:
        self.codes: Dict[Symbol, str] = dict(codes) if codes else {}

    def add(self, symbol: Symbol, code: str) -> None:
        if symbol in self.codes:
            raise ValueError(f"Symbol {symbol} already has a code")
        self.codes[symbol] = code

    def get_code(self, symbol: Symbol) -> str:
        return self.codes[symbol]

    def is_prefix_free(self) -> bool:
        ordered = sorted(self.codes.values())
        return all(not b.startswith(a) for a, b in zip(ordered, ordered[1:]))

    def __len__(self) -> int:
        return len(self.codes)

    def __contains__(self, symbol: Symbol) -> bool:
        return symbol in self.codes

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CodeTable):
            return False
        return self.codes == other.codes
