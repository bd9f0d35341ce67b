"""
priority_queue.py

Min-priority queue of Huffman nodes keyed by weight.
"""


import heapq
import itertools
from typing import List, Tuple

from .errors import EmptyQueueError
from .models import HuffmanNode


class PriorityQueue:
    """
    Binary min-heap ordered by node weight.

    Nodes of equal weight come out in insertion order, so the same input
    always produces the same tree.
    """

    def __init__(self) -> None:
        self._heap: List[Tuple[int, int, HuffmanNode]] = []
        self._sequence = itertools.count()

    def insert(self, item: HuffmanNode) -> None:
        heapq.heappush(self._heap, (item.weight, next(self._sequence), item))

    def extract_min(self) -> HuffmanNode:
        if not self._heap:
            raise EmptyQueueError()
        return heapq.heappop(self._heap)[2]

    def __len__(self) -> int:
        return len(self._heap)
