from __future__ import annotations


class TrieNode:
    __slots__ = ("char", "children", "is_word")

    def __init__(self, char: str | None = None):
        self.char = char
        self.children: dict[str, TrieNode] = {}
        self.is_word: bool = False


class Trie:
    """Word and prefix membership over lowercase words."""

    def __init__(self):
        self.root = TrieNode()
        self._word_count = 0

    def insert(self, word: str | None):
        if not word:
            return
        node = self.root
        for ch in word:
            if ch not in node.children:
                node.children[ch] = TrieNode(ch)
            node = node.children[ch]
        if not node.is_word:
            node.is_word = True
            self._word_count += 1

    def _walk(self, s: str | None) -> TrieNode | None:
        if s is None:
            return None
        node = self.root
        for ch in s:
            node = node.children.get(ch)
            if node is None:
                return None
        return node

    def contains_word(self, word: str | None) -> bool:
        node = self._walk(word)
        return node is not None and node.is_word

    def contains_prefix(self, prefix: str | None) -> bool:
        return self._walk(prefix) is not None

    def size(self) -> int:
        return self._word_count

    def __len__(self) -> int:
        return self._word_count

    def __contains__(self, word) -> bool:
        return isinstance(word, str) and self.contains_word(word)
