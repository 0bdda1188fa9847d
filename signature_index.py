# signature_index.py
# Trie keyed by sorted letter signatures. Each node carries the bucket of
# words whose signature spells the path from the root to that node.

from typing import List, Optional

from utils import ALPHA_SIZE, FatalError


def signature(raw: str) -> str:
    """
    Letters of ``raw`` that are ASCII a-z/A-Z, lowercased and sorted.
    Everything else is dropped, so "Dormitory!" and "dirty room" agree.
    """
    return "".join(sorted(ch.lower() for ch in raw if "a" <= ch <= "z" or "A" <= ch <= "Z"))


def _slot(ch: str) -> int:
    return ord(ch) - ord("a")


class SignatureIndex:
    """
    Anagram index with the API we want:
      - insert(raw_line, word): file ``word`` under signature(raw_line)
      - lookup(raw_query) -> bucket list, or None if the signature path is absent
      - clear(): release every node and bucket
    Internals:
      _children: List[List[Optional[int]]]  26 slots per node, child node index or None
      _buckets:  List[List[str]]            words at each node, most recent first
      node 0 is the root (the empty signature); a cleared index has no nodes.
    """

    __slots__ = ("_children", "_buckets", "_size")

    def __init__(self):
        self._children: List[List[Optional[int]]] = []
        self._buckets: List[List[str]] = []
        self._size = 0
        self._new_node()

    # ---------- Public API ----------
    def insert(self, raw_line: str, word: str) -> None:
        """Prepend ``word`` to the bucket at signature(raw_line), creating the path as needed."""
        try:
            if not self._children:
                self._new_node()
            cur = 0
            for ch in signature(raw_line):
                slots = self._children[cur]
                nxt = slots[_slot(ch)]
                if nxt is None:
                    nxt = self._new_node()
                    slots[_slot(ch)] = nxt
                cur = nxt
            self._buckets[cur].insert(0, word)
        except MemoryError:
            raise FatalError("out of memory") from None
        self._size += 1

    def lookup(self, raw_query: str) -> Optional[List[str]]:
        """
        Bucket for signature(raw_query), most recently inserted first.
        None means no word with that signature (or a longer one through it)
        was ever inserted; an empty list means the node only routes.
        """
        idx = self._walk(signature(raw_query))
        if idx is None:
            return None
        return list(self._buckets[idx])

    def clear(self) -> None:
        """Drop every node and word. The root comes back on the next insert."""
        self._children.clear()
        self._buckets.clear()
        self._size = 0

    @property
    def node_count(self) -> int:
        return len(self._children)

    def __len__(self) -> int:
        return self._size

    def __contains__(self, raw_query: str) -> bool:
        return bool(self.lookup(raw_query))

    # ---------- Helpers ----------
    def _new_node(self) -> int:
        self._children.append([None] * ALPHA_SIZE)
        self._buckets.append([])
        return len(self._children) - 1

    def _walk(self, sig: str) -> Optional[int]:
        """Return node index after consuming sig, or None if no such path."""
        children = self._children
        if not children:
            return None
        idx = 0
        for ch in sig:
            nxt = children[idx][_slot(ch)]
            if nxt is None:
                return None
            idx = nxt
        return idx
